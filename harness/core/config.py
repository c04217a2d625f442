"""
Configuration management for the QA harness.

Loads the run configuration once per suite from a properties or YAML file,
applies environment overrides and validates the result into an immutable
Config shared read-only by every worker.
"""

import os
import threading
from pathlib import Path
from typing import Optional, Dict, Any, Union

import yaml
from jproperties import Properties, ParseError
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigLoadError
from .logging_config import get_logger


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
VALID_LOG_FORMATS = ["text", "json"]


class Config(BaseModel):
    """Immutable run configuration. Field aliases are the config file keys."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    # Browser selection
    browser: str = Field(..., alias="browser", description="Default browser kind")
    headless: bool = Field(True, alias="headless", description="Launch headless")

    # Grid
    selenium_grid: bool = Field(False, alias="seleniumGrid")
    grid_url: Optional[str] = Field(None, alias="gridURL")

    # Session configuration
    implicit_wait: int = Field(..., ge=0, alias="implicitWait")
    url: str = Field(..., alias="url", description="Navigation target")
    launch_delay: float = Field(
        1.0, ge=0, alias="launchDelay", description="Seconds to wait after launch"
    )

    # Execution
    max_retries: int = Field(1, ge=0, alias="maxRetries")
    parallelism: int = Field(1, ge=1, alias="parallelism")

    # Output
    report_dir: str = Field("reports", alias="reportDir")
    log_level: str = Field("INFO", alias="logLevel")
    log_format: str = Field("text", alias="logFormat")
    log_dir: Optional[str] = Field(None, alias="logDir")

    @field_validator("browser", mode="before")
    @classmethod
    def normalize_browser(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("url cannot be empty")
        return v.strip()

    @field_validator("grid_url", "log_dir", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        level = str(v).upper()
        if level == "WARN":
            level = "WARNING"
        return level if level in VALID_LOG_LEVELS else "INFO"

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v):
        fmt = str(v).lower()
        return fmt if fmt in VALID_LOG_FORMATS else "text"

    @model_validator(mode="after")
    def require_grid_url(self) -> "Config":
        if self.selenium_grid and not self.grid_url:
            raise ValueError("gridURL is required when seleniumGrid is enabled")
        return self

    @property
    def debug_enabled(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"

    def get_log_file_path(self) -> Optional[Path]:
        """Get the main log file path, if file logging is configured."""
        if self.log_dir is None:
            return None
        return Path(self.log_dir) / "qa-harness.log"

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for logging."""
        return {
            "browser": self.browser,
            "headless": self.headless,
            "selenium_grid": self.selenium_grid,
            "grid_url": self.grid_url,
            "implicit_wait": self.implicit_wait,
            "url": self.url,
            "launch_delay": self.launch_delay,
            "max_retries": self.max_retries,
            "parallelism": self.parallelism,
            "report_dir": self.report_dir,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }


class ConfigStore:
    """
    Loads and holds the suite configuration.

    The first successful load becomes the suite config. Later loads re-read
    the file and return a fresh value without replacing it.
    """

    ENV_OVERRIDES = {
        "HARNESS_BROWSER": "browser",
        "HARNESS_SELENIUM_GRID": "seleniumGrid",
        "HARNESS_GRID_URL": "gridURL",
        "HARNESS_URL": "url",
        "HARNESS_LOG_LEVEL": "logLevel",
    }

    def __init__(self):
        self._config: Optional[Config] = None
        self._lock = threading.Lock()
        self.logger = get_logger("harness.config")

    @property
    def config(self) -> Config:
        """The suite configuration from the first successful load."""
        if self._config is None:
            raise ConfigLoadError("Configuration has not been loaded")
        return self._config

    @property
    def is_loaded(self) -> bool:
        return self._config is not None

    def load(self, path: Union[str, Path]) -> Config:
        """
        Load and validate a configuration file.

        Args:
            path: Path to a Java .properties file or a .yaml/.yml file

        Returns:
            Validated, immutable configuration

        Raises:
            ConfigLoadError: If the file is missing, unparseable or invalid
        """
        path = Path(path)
        raw = self._read(path)
        raw.update(self._env_overrides())

        try:
            config = Config.model_validate(raw)
        except PydanticValidationError as e:
            violations = [
                f"{'.'.join(str(loc) for loc in err['loc']) or 'config'}: {err['msg']}"
                for err in e.errors()
            ]
            raise ConfigLoadError(
                f"Invalid configuration in {path}: " + "; ".join(violations),
                config_path=str(path),
                violations=violations,
            ) from e

        with self._lock:
            if self._config is None:
                self._config = config
                self.logger.info(
                    f"Configuration loaded from {path}",
                    extra={"metadata": config.to_dict()},
                )
            else:
                self.logger.debug(
                    f"Configuration re-read from {path}; suite configuration unchanged"
                )

        return config

    def _read(self, path: Path) -> Dict[str, Any]:
        if not path.is_file():
            raise ConfigLoadError(
                f"Configuration file not found: {path}", config_path=str(path)
            )

        if path.suffix.lower() in (".yaml", ".yml"):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                raise ConfigLoadError(
                    f"Failed to parse configuration file {path}: {e}",
                    config_path=str(path),
                ) from e
            if not isinstance(data, dict):
                raise ConfigLoadError(
                    f"Configuration file {path} must contain a mapping",
                    config_path=str(path),
                )
            return dict(data)

        properties = Properties()
        try:
            with open(path, "rb") as f:
                properties.load(f, "utf-8")
        except (OSError, UnicodeDecodeError, ParseError) as e:
            raise ConfigLoadError(
                f"Failed to parse configuration file {path}: {e}",
                config_path=str(path),
            ) from e

        data = dict(properties.properties)
        if not data:
            raise ConfigLoadError(
                f"Configuration file {path} contains no properties",
                config_path=str(path),
            )
        return data

    def _env_overrides(self) -> Dict[str, str]:
        overrides = {}
        for env_var, key in self.ENV_OVERRIDES.items():
            value = os.getenv(env_var)
            if value is not None:
                overrides[key] = value
        return overrides
