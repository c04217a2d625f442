"""Setup configuration for QA Harness."""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_path = Path(__file__).parent / "README.md"
long_description = (
    readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""
)

# Read requirements
requirements_path = Path(__file__).parent / "requirements.txt"
requirements = []
if requirements_path.exists():
    requirements = [
        line.strip()
        for line in requirements_path.read_text(encoding="utf-8").splitlines()
        if line.strip() and not line.startswith("#")
    ]

setup(
    name="qa-harness",
    version="0.1.0",
    description="Browser session lifecycle, retry policy and reporting hooks for parallel acceptance suites",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="QA Harness Team",
    python_requires=">=3.8",
    packages=find_packages(include=["harness", "harness.*"]),
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "qa-harness=harness.cli:main",
        ],
        "pytest11": [
            "harness.pytest_plugin=harness.pytest_plugin",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Framework :: Pytest",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Testing",
        "Topic :: Software Development :: Quality Assurance",
    ],
)
