"""
Configuration module for SafeGate.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.

Configuration objects are frozen: overrides produce new instances, so a
config handed to a validation run cannot change underneath it.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Optional, get_args, get_origin

import yaml

from safegate.core.security.errors import ConfigError

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section, {})
    value = section_defaults.get(key, fallback)
    # Hand out copies so instances never share a mutable default
    return list(value) if isinstance(value, list) else value


@dataclass(frozen=True)
class SecurityConfig:
    """Configuration for the security check."""

    enable_security_check: bool = field(
        default_factory=lambda: _get_default("security", "enable_security_check", True)
    )
    max_workers: int = field(default_factory=lambda: _get_default("security", "max_workers", 4))
    disabled_rules: list[str] = field(
        default_factory=lambda: _get_default("security", "disabled_rules", [])
    )


@dataclass(frozen=True)
class CollectorConfig:
    """Configuration for collecting files from disk."""

    ignore_patterns: list[str] = field(
        default_factory=lambda: _get_default(
            "collector",
            "ignore_patterns",
            [".git", "__pycache__", "*.pyc", "node_modules", ".venv", "venv", "dist", "build"],
        )
    )
    max_file_size_bytes: int = field(
        default_factory=lambda: _get_default("collector", "max_file_size_bytes", 10 * 1024 * 1024)
    )
    use_gitignore: bool = field(
        default_factory=lambda: _get_default("collector", "use_gitignore", True)
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "WARNING"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


_SECTIONS: dict[str, type] = {
    "security": SecurityConfig,
    "collector": CollectorConfig,
    "logging": LoggingConfig,
}


@dataclass(frozen=True)
class SafeGateConfig:
    """Main configuration class for SafeGate."""

    security: SecurityConfig = field(default_factory=SecurityConfig)
    collector: CollectorConfig = field(default_factory=CollectorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "SafeGateConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            SafeGateConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ConfigError: If the file format is unsupported or the content is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        try:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(content) or {}
            elif path.suffix == ".json":
                data = json.loads(content) if content.strip() else {}
            else:
                raise ConfigError(f"Unsupported config file format: {path.suffix}")
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to parse config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping at the top level")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "SafeGateConfig":
        """Create SafeGateConfig from a dictionary."""
        unknown = set(data) - set(_SECTIONS)
        if unknown:
            raise ConfigError(f"Unknown config section(s): {', '.join(sorted(unknown))}")

        sections: dict[str, Any] = {}
        for name, section_cls in _SECTIONS.items():
            if name not in data:
                continue
            values = data[name] or {}
            try:
                sections[name] = section_cls(**values)
            except TypeError as e:
                raise ConfigError(f"Invalid '{name}' section: {e}") from e
            _check_field_types(name, sections[name])

        return cls(**sections)

    def apply_env_overrides(self) -> "SafeGateConfig":
        """
        Return a copy with environment variable overrides applied.

        Environment variables follow the pattern: SAFEGATE_<SECTION>_<KEY>
        Examples:
            - SAFEGATE_SECURITY_ENABLE_SECURITY_CHECK
            - SAFEGATE_SECURITY_MAX_WORKERS
            - SAFEGATE_SECURITY_DISABLED_RULES (comma-separated)
            - SAFEGATE_COLLECTOR_MAX_FILE_SIZE_BYTES
            - SAFEGATE_LOGGING_LEVEL

        Returns:
            New SafeGateConfig with environment overrides applied
        """
        env_mappings = {
            # Security config
            "SAFEGATE_SECURITY_ENABLE_SECURITY_CHECK": ("security", "enable_security_check", _parse_bool),
            "SAFEGATE_SECURITY_MAX_WORKERS": ("security", "max_workers", int),
            "SAFEGATE_SECURITY_DISABLED_RULES": ("security", "disabled_rules", _parse_list),
            # Collector config
            "SAFEGATE_COLLECTOR_IGNORE_PATTERNS": ("collector", "ignore_patterns", _parse_list),
            "SAFEGATE_COLLECTOR_MAX_FILE_SIZE_BYTES": ("collector", "max_file_size_bytes", int),
            "SAFEGATE_COLLECTOR_USE_GITIGNORE": ("collector", "use_gitignore", _parse_bool),
            # Logging config
            "SAFEGATE_LOGGING_LEVEL": ("logging", "level", str),
            "SAFEGATE_LOGGING_FORMAT": ("logging", "format", str),
        }

        overrides: dict[str, dict[str, Any]] = {}
        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                overrides.setdefault(section, {})[key] = converter(value)

        if not overrides:
            return self

        return replace(
            self,
            **{
                section: replace(getattr(self, section), **values)
                for section, values in overrides.items()
            },
        )

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def to_json(self) -> str:
        """Serialize configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: Path | str) -> None:
        """
        Save configuration to a file.

        Args:
            path: Path to save the configuration (.yaml, .yml, or .json)

        Raises:
            ConfigError: If the file format is unsupported
        """
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            content = self.to_yaml()
        elif path.suffix == ".json":
            content = self.to_json()
        else:
            raise ConfigError(f"Unsupported config file format: {path.suffix}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def _check_field_types(name: str, section: Any) -> None:
    """Reject values whose type differs from the field annotation."""
    for f in fields(section):
        value = getattr(section, f.name)
        expected = get_origin(f.type) or f.type
        # bool is a subclass of int
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigError(
                f"Invalid '{name}' section: {f.name} must be {expected.__name__}, "
                f"got {type(value).__name__}"
            )
        item_types = get_args(f.type)
        if item_types and not all(isinstance(item, item_types) for item in value):
            raise ConfigError(
                f"Invalid '{name}' section: {f.name} must contain only "
                f"{item_types[0].__name__} items"
            )


def _parse_bool(value: str) -> bool:
    """Parse a string to boolean."""
    return value.lower() in ("true", "1", "yes", "on")


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated string to a list of non-empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> SafeGateConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        SafeGateConfig instance
    """
    if config_path:
        config = SafeGateConfig.from_file(config_path)
    else:
        config = SafeGateConfig()

    if apply_env:
        config = config.apply_env_overrides()

    return config
