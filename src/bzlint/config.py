"""Configuration management for bzlint."""

import tomllib
from enum import Enum
from pathlib import Path

import tomli_w
from pydantic import BaseModel, Field, ValidationError

from .constants import (
    BAZEL_QUERY_TIMEOUT,
    CLIPPY_ASPECT,
    CLIPPY_OUTPUT_GROUP,
    CONFIG_FILE,
    DEFAULT_CLIPPY_FLAGS,
    ERROR_FORMAT,
)
from .errors import ConfigError


class LintMode(str, Enum):
    """Ways of invoking Bazel on the resolved target."""

    # Plain compile of the target
    BASIC = "basic"
    # Clippy aspect over the target
    CLIPPY = "clippy"
    # Compile only the rule that owns the file
    FILE = "file"
    JSON_FILE = "json-file"
    # Clippy with the pedantic group enabled
    PEDANTIC = "pedantic"
    SLIGHTLY_PEDANTIC = "slightly-pedantic"
    # Clippy on the owning rule with JSON diagnostics (editor default)
    JSON_PEDANTIC = "json-pedantic"


class BazelConfig(BaseModel):
    """Configuration for the Bazel executable."""

    exec: str = "bazel"
    query_timeout: int = Field(default=BAZEL_QUERY_TIMEOUT, gt=0)


class ClippyConfig(BaseModel):
    """Configuration for the rules_rust Clippy integration.

    Set ``aspect`` to an empty string when the workspace ``.bazelrc``
    already applies the Clippy aspect.
    """

    aspect: str | None = CLIPPY_ASPECT
    output_group: str = CLIPPY_OUTPUT_GROUP
    error_format: str = ERROR_FORMAT
    flags: list[str] = Field(default_factory=lambda: list(DEFAULT_CLIPPY_FLAGS))


class BzlintConfig(BaseModel):
    """Root configuration for bzlint."""

    mode: LintMode = LintMode.JSON_PEDANTIC
    bazel: BazelConfig = Field(default_factory=BazelConfig)
    clippy: ClippyConfig = Field(default_factory=ClippyConfig)


def find_config(workspace_root: Path) -> Path | None:
    """Return the workspace config file if present."""
    config_path = workspace_root / CONFIG_FILE
    return config_path if config_path.is_file() else None


def load_config(config_path: Path | None) -> BzlintConfig:
    """Load config from a TOML file.

    Args:
        config_path: Path to the config file, or None for defaults

    Returns:
        Loaded configuration, or defaults if no path is given

    Raises:
        ConfigError: If the file is missing, cannot be read, is not valid
            TOML or does not match the schema
    """
    if config_path is None:
        return BzlintConfig()
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {config_path}") from None
    except OSError as e:
        raise ConfigError(f"Could not read config {config_path}: {e}") from e
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e
    try:
        return BzlintConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_path}: {e}") from e


def write_config_template(config_path: Path) -> Path:
    """Write a default config template.

    Args:
        config_path: Where to write the template

    Returns:
        Path to the written config file
    """
    defaults = BzlintConfig()
    template = {
        "mode": defaults.mode.value,
        "bazel": {
            "exec": defaults.bazel.exec,
            "query_timeout": defaults.bazel.query_timeout,
        },
        # Set aspect = "" if .bazelrc already adds the Clippy aspect
        "clippy": {
            "aspect": defaults.clippy.aspect,
            "output_group": defaults.clippy.output_group,
            "error_format": defaults.clippy.error_format,
            "flags": defaults.clippy.flags,
        },
    }
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
