"""
Unit tests for Config and ConfigStore.

Tests file loading, required keys, environment overrides and the
immutability of the suite configuration.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from harness.core.config import Config, ConfigStore
from harness.core.exceptions import ConfigLoadError


VALID_PROPERTIES = """\
# Browser settings
browser=Chrome
seleniumGrid=false
gridURL=
implicitWait=5
url=https://example.test
username=Admin
"""


class TestConfig:
    """Test cases for the Config model."""

    def test_defaults(self):
        """Test optional fields fall back to their defaults."""
        config = Config(browser="chrome", implicit_wait=5, url="https://example.test")

        assert config.selenium_grid is False
        assert config.grid_url is None
        assert config.max_retries == 1
        assert config.headless is True
        assert config.parallelism == 1
        assert config.launch_delay == 1.0
        assert config.report_dir == "reports"
        assert config.log_level == "INFO"
        assert config.log_format == "text"

    def test_config_is_immutable(self, config_factory):
        """Test configuration cannot be changed after creation."""
        config = config_factory()

        with pytest.raises(PydanticValidationError):
            config.url = "https://other.test"

    def test_browser_is_normalized(self, config_factory):
        config = config_factory(browser="  FireFox ")

        assert config.browser == "firefox"

    def test_grid_requires_url(self, config_factory):
        """Test grid mode without a grid URL is rejected."""
        with pytest.raises(PydanticValidationError, match="gridURL is required"):
            config_factory(selenium_grid=True)

    def test_invalid_log_level_falls_back_to_info(self, config_factory):
        assert config_factory(log_level="verbose").log_level == "INFO"
        assert config_factory(log_level="warn").log_level == "WARNING"
        assert config_factory(log_level="debug").debug_enabled is True

    def test_log_file_path(self, config_factory, tmp_path):
        assert config_factory().get_log_file_path() is None
        config = config_factory(log_dir=str(tmp_path))
        assert config.get_log_file_path() == tmp_path / "qa-harness.log"

    def test_to_dict(self, config_factory):
        data = config_factory(max_retries=2).to_dict()

        assert data["browser"] == "chrome"
        assert data["implicit_wait"] == 5
        assert data["max_retries"] == 2
        assert data["url"] == "https://example.test"


class TestConfigStore:
    """Test cases for loading configuration files."""

    def test_load_properties(self, properties_file):
        """Test loading a Java-style properties file."""
        path = properties_file(VALID_PROPERTIES)

        config = ConfigStore().load(path)

        assert config.browser == "chrome"
        assert config.selenium_grid is False
        assert config.grid_url is None
        assert config.implicit_wait == 5
        assert config.url == "https://example.test"
        assert config.max_retries == 1

    def test_load_grid_properties(self, properties_file):
        path = properties_file(
            "browser=edge\n"
            "seleniumGrid=true\n"
            "gridURL=http://grid.local:4444/wd/hub\n"
            "implicitWait=10\n"
            "url=https://example.test\n"
            "maxRetries=3\n"
            "parallelism=4\n"
        )

        config = ConfigStore().load(path)

        assert config.selenium_grid is True
        assert config.grid_url == "http://grid.local:4444/wd/hub"
        assert config.max_retries == 3
        assert config.parallelism == 4

    def test_load_yaml(self, properties_file):
        """Test loading a YAML configuration file."""
        path = properties_file(
            "browser: firefox\n"
            "implicitWait: 3\n"
            "url: https://example.test\n"
            "maxRetries: 0\n",
            name="config.yaml",
        )

        config = ConfigStore().load(path)

        assert config.browser == "firefox"
        assert config.implicit_wait == 3
        assert config.max_retries == 0

    def test_loading_twice_yields_equal_configs(self, properties_file):
        path = properties_file(VALID_PROPERTIES)

        assert ConfigStore().load(path) == ConfigStore().load(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigLoadError, match="not found") as exc_info:
            ConfigStore().load(tmp_path / "missing.properties")

        assert exc_info.value.error_code == "CONFIG_LOAD_FAILED"

    def test_missing_required_key(self, properties_file):
        """Test a file without implicitWait is rejected."""
        path = properties_file("browser=chrome\nurl=https://example.test\n")

        with pytest.raises(ConfigLoadError) as exc_info:
            ConfigStore().load(path)

        assert any("implicitWait" in v for v in exc_info.value.violations)

    def test_non_integer_wait(self, properties_file):
        path = properties_file(
            "browser=chrome\nimplicitWait=soon\nurl=https://example.test\n"
        )

        with pytest.raises(ConfigLoadError, match="implicitWait"):
            ConfigStore().load(path)

    def test_grid_without_url(self, properties_file):
        path = properties_file(
            "browser=chrome\nseleniumGrid=true\nimplicitWait=5\nurl=https://example.test\n"
        )

        with pytest.raises(ConfigLoadError, match="gridURL is required"):
            ConfigStore().load(path)

    def test_empty_properties_file(self, properties_file):
        path = properties_file("# nothing here\n")

        with pytest.raises(ConfigLoadError, match="no properties"):
            ConfigStore().load(path)

    def test_unparseable_yaml(self, properties_file):
        path = properties_file("browser: [chrome\n", name="config.yml")

        with pytest.raises(ConfigLoadError, match="Failed to parse"):
            ConfigStore().load(path)

    def test_yaml_must_be_mapping(self, properties_file):
        path = properties_file("- chrome\n- firefox\n", name="config.yaml")

        with pytest.raises(ConfigLoadError, match="must contain a mapping"):
            ConfigStore().load(path)

    def test_environment_overrides(self, properties_file, monkeypatch):
        """Test HARNESS_* variables override file values."""
        monkeypatch.setenv("HARNESS_BROWSER", "EDGE")
        monkeypatch.setenv("HARNESS_URL", "https://staging.example.test")
        path = properties_file(VALID_PROPERTIES)

        config = ConfigStore().load(path)

        assert config.browser == "edge"
        assert config.url == "https://staging.example.test"

    def test_config_before_load(self):
        store = ConfigStore()

        assert store.is_loaded is False
        with pytest.raises(ConfigLoadError, match="not been loaded"):
            store.config

    def test_first_load_is_kept(self, properties_file):
        """Test re-reading a different file does not change the suite config."""
        first = properties_file(VALID_PROPERTIES)
        second = properties_file(
            "browser=firefox\nimplicitWait=1\nurl=https://other.test\n",
            name="other.properties",
        )
        store = ConfigStore()

        loaded = store.load(first)
        reread = store.load(second)

        assert store.config == loaded
        assert store.config.browser == "chrome"
        assert reread.browser == "firefox"

    def test_properties_colon_separator(self, properties_file):
        """Test Java `key: value` lines are read."""
        path = properties_file(
            "browser: firefox\nimplicitWait: 7\nurl: https://example.test\n"
        )

        config = ConfigStore().load(path)

        assert config.browser == "firefox"
        assert config.implicit_wait == 7
        assert config.url == "https://example.test"

    def test_properties_whitespace_separator(self, properties_file):
        path = properties_file("browser edge\nimplicitWait 3\nurl https://example.test\n")

        config = ConfigStore().load(path)

        assert config.browser == "edge"
        assert config.implicit_wait == 3

    def test_properties_comments(self, properties_file):
        path = properties_file(
            "! Browser settings\n"
            "# Timeouts\n"
            "browser=chrome\n"
            "implicitWait=5\n"
            "url=https://example.test\n"
        )

        config = ConfigStore().load(path)

        assert config.browser == "chrome"

    def test_properties_line_continuation(self, properties_file):
        """Test a trailing backslash joins the next line without its indent."""
        path = properties_file(
            "browser=chrome\n"
            "implicitWait=5\n"
            "url=https://example.test/\\\n"
            "    login\n"
        )

        config = ConfigStore().load(path)

        assert config.url == "https://example.test/login"
