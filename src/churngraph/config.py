"""
Analysis configuration and profiles.

Settings can come from a churngraph.yaml file with named profiles. CLI
flags override them.

Example churngraph.yaml:
    default_profile: literal

    profiles:
      literal:
        neighbor_threshold: 2
        centrality_multiplier: 1.1

      bucketed:
        bucket_mode: range
        graph_scope: shared
        include_credit_fields: true
        max_records: ${oc.env:CHURNGRAPH_MAX_RECORDS,1000}
"""

from __future__ import annotations

import os
import typing as T
from pathlib import Path

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import InterpolationKeyError
from pydantic import BaseModel, Field, ValidationError

import churngraph.errors as errors
import churngraph.logging as log

CONFIG_FILENAME = "churngraph.yaml"
PROFILE_ENV_VAR = "CHURNGRAPH_PROFILE"


class AnalysisConfig(BaseModel, frozen=True):
    """Tunable settings of one analysis run."""

    neighbor_threshold: int = Field(default=2, ge=1)
    centrality_multiplier: float = Field(default=1.1, gt=0)
    top_traits: int = Field(default=4, ge=1)
    max_records: int = Field(default=1000, ge=1)
    bucket_mode: T.Literal["literal", "range"] = "literal"
    graph_scope: T.Literal["partition", "shared"] = "partition"
    include_credit_fields: bool = False
    existing_label: str = "Existing Customer"


class ChurngraphConfig(BaseModel, frozen=True):
    """Root configuration from churngraph.yaml."""

    default_profile: str = "default"
    profiles: dict[str, AnalysisConfig]


def load_config(config_path: Path | None = None) -> ChurngraphConfig | None:
    """
    Load and validate churngraph.yaml.

    Args:
        config_path: Path to config file. If None, looks for churngraph.yaml
                     in the current directory.

    Returns:
        Validated ChurngraphConfig, or None if no config file exists.

    Raises:
        ConfigError: If the file is invalid or env vars are missing.
    """
    if config_path is None:
        config_path = Path(CONFIG_FILENAME)

    if not config_path.exists():
        return None

    try:
        loaded = OmegaConf.load(config_path)
        if not isinstance(loaded, DictConfig):
            raise errors.ConfigError(
                f"Expected YAML mapping in {config_path}, got list or scalar",
                hint="churngraph.yaml must be a YAML mapping with a profiles key.",
            )
        omega_conf: DictConfig = loaded
    except errors.ConfigError:
        raise
    except Exception as e:
        raise errors.ConfigError(
            f"Failed to parse {config_path}: {e}",
            hint="Check that churngraph.yaml is valid YAML syntax.",
        ) from e

    try:
        OmegaConf.resolve(omega_conf)
    except InterpolationKeyError as e:
        raise errors.ConfigError(
            f"Failed to resolve config variables: {e}",
            hint="Set the missing environment variable and try again.",
        ) from e
    except Exception as e:
        raise errors.ConfigError(f"Failed to resolve config variables: {e}") from e

    config_dict = OmegaConf.to_container(omega_conf, resolve=True)

    try:
        return ChurngraphConfig.model_validate(config_dict)
    except ValidationError as e:
        error_lines = []
        for err in e.errors():
            loc = ".".join(str(x) for x in err["loc"])
            error_lines.append(f"  {loc}: {err['msg']}")

        raise errors.ConfigError(
            f"Invalid configuration in {config_path}:\n" + "\n".join(error_lines),
            hint="Check the churngraph.yaml schema and fix the validation errors.",
        ) from e


def resolve_profile(
    name: str | None = None,
    config_path: Path | None = None,
) -> tuple[AnalysisConfig, str]:
    """
    Resolve the analysis settings for a run.

    Profile resolution order:
    1. Explicit `name` parameter (highest priority)
    2. CHURNGRAPH_PROFILE environment variable
    3. default_profile from churngraph.yaml

    Without a config file the built-in defaults are used, unless a profile
    was requested explicitly.

    Args:
        name: Profile name. If None, uses env var or config default.
        config_path: Path to config file. If None, uses churngraph.yaml.

    Returns:
        Tuple of (settings, source) where source names where they came from.

    Raises:
        ConfigError: If a requested profile cannot be found.
    """
    config = load_config(config_path)

    if config is None:
        if name is not None:
            raise errors.ConfigError(
                f"Profile '{name}' requested but no {CONFIG_FILENAME} found.",
                hint="Create churngraph.yaml or drop the --profile option.",
            )
        return AnalysisConfig(), "defaults"

    source = "config"
    if name is None:
        if PROFILE_ENV_VAR in os.environ:
            name, source = os.environ[PROFILE_ENV_VAR], "env"
        else:
            name = config.default_profile
    else:
        source = "argument"

    if name not in config.profiles:
        available = ", ".join(
            f"{p}{' (default)' if p == config.default_profile else ''}"
            for p in config.profiles
        )
        raise errors.ConfigError(
            f"Profile '{name}' not found.\n\nAvailable profiles: {available or '-'}",
            hint="Use one of the available profiles with --profile.",
        )

    return config.profiles[name], f"{source}:{name}"


def with_overrides(config: AnalysisConfig, **overrides: T.Any) -> AnalysisConfig:
    """
    Apply non-None overrides to a config.

    Args:
        config: Base settings
        **overrides: Field values, None entries are ignored

    Returns:
        New validated AnalysisConfig

    Raises:
        ConfigError: If an override fails validation
    """
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return config

    try:
        return AnalysisConfig.model_validate({**config.model_dump(), **updates})
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(x) for x in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise errors.ConfigError(f"Invalid option: {details}") from e


def print_config(config: AnalysisConfig, source: str) -> None:
    """
    Print resolved settings to the console.

    Args:
        config: Settings to display
        source: Where the settings came from
    """
    log.print_info(f"Settings ({source}):")
    for field_name in AnalysisConfig.model_fields:
        label = field_name.replace("_", " ").title()
        log.print_info(f"  {label}: {getattr(config, field_name)}")
