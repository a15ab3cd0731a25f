"""
Configuration management for ibootldr.
"""

import json
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Optional

U64_MAX = 0xFFFFFFFFFFFFFFFF


def _parse_int(value: str) -> int:
    """Parse decimal or 0x-prefixed integers from the environment."""
    try:
        return int(value, 0)
    except ValueError:
        raise ValueError(f"not an integer: {value!r}")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class LoaderConfig:
    """Detection and layout configuration."""
    # Accept any image without probing the header tag. Only meant for
    # testing against stripped or synthetic dumps.
    assume_supported: bool = False
    # Fixed base address instead of the header field
    base_address_override: Optional[int] = None
    architecture: str = "aarch64"

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Normalize and check field types.

        JSON files may carry addresses as "0x..." strings; those are
        converted in place.

        Raises:
            ValueError: out of range or unparseable value
            TypeError: value of the wrong type
        """
        if isinstance(self.assume_supported, str):
            self.assume_supported = _parse_bool(self.assume_supported)
        if not isinstance(self.assume_supported, bool):
            raise TypeError(f"assume_supported must be a bool, got {self.assume_supported!r}")

        base = self.base_address_override
        if isinstance(base, str):
            base = _parse_int(base)
        if base is not None:
            if isinstance(base, bool) or not isinstance(base, int):
                raise TypeError(f"base_address_override must be an integer, got {base!r}")
            if not 0 <= base <= U64_MAX:
                raise ValueError(f"base_address_override out of range: {base:#x}")
        self.base_address_override = base

        if not isinstance(self.architecture, str) or not self.architecture:
            raise TypeError(f"architecture must be a non-empty string, got {self.architecture!r}")


@dataclass
class Config:
    """
    Main configuration class for ibootldr.

    Configuration can be loaded from:
    1. Default values
    2. Config file (~/.ibootldr/config.json)
    3. Environment variables (IBOOTLDR_*)
    4. Command line arguments
    """

    # General settings
    output_dir: str = "./ibootldr_output"
    verbose: int = 0

    # Sub-configurations
    loader: LoaderConfig = field(default_factory=LoaderConfig)

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check general settings and the loader sub-config."""
        if isinstance(self.verbose, str):
            self.verbose = _parse_int(self.verbose)
        if isinstance(self.verbose, bool) or not isinstance(self.verbose, int) or self.verbose < 0:
            raise ValueError(f"verbose must be a non-negative integer, got {self.verbose!r}")

        if not isinstance(self.output_dir, str) or not self.output_dir:
            raise TypeError(f"output_dir must be a non-empty string, got {self.output_dir!r}")

        self.loader.validate()

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        """
        Load configuration from file and environment.

        Args:
            config_path: Optional path to config file

        Returns:
            Loaded Config instance

        Raises:
            ValueError, TypeError: invalid file or environment values
        """
        config = cls()

        # Load from default config file
        default_path = Path.home() / ".ibootldr" / "config.json"
        if config_path:
            config_file = Path(config_path)
        elif default_path.exists():
            config_file = default_path
        else:
            config_file = None

        if config_file and config_file.exists():
            with open(config_file) as f:
                data = json.load(f)
                config = cls._from_dict(data)

        # Override with environment variables
        config._load_from_env()
        config.validate()
        config.expand_paths()

        return config

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        if not isinstance(data, dict):
            raise TypeError("config file must contain a JSON object")

        data = dict(data)
        loader_data = data.pop("loader", {})
        if not isinstance(loader_data, dict):
            raise TypeError("'loader' must be a JSON object")

        return cls(
            loader=LoaderConfig(**loader_data),
            **data
        )

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        env_mapping = {
            "IBOOTLDR_OUTPUT_DIR": (self, "output_dir", str),
            "IBOOTLDR_VERBOSE": (self, "verbose", _parse_int),
            "IBOOTLDR_ASSUME_SUPPORTED": (self.loader, "assume_supported", _parse_bool),
            "IBOOTLDR_BASE_ADDRESS": (self.loader, "base_address_override", _parse_int),
            "IBOOTLDR_ARCH": (self.loader, "architecture", str),
        }

        for env_var, (target, attr_name, converter) in env_mapping.items():
            value = os.environ.get(env_var)
            if value:
                setattr(target, attr_name, converter(value))

    def save(self, config_path: Optional[str] = None) -> None:
        """
        Save configuration to file.

        Args:
            config_path: Optional path for config file
        """
        if config_path:
            path = Path(config_path)
        else:
            path = Path.home() / ".ibootldr" / "config.json"

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def expand_paths(self) -> None:
        """Expand ~ in all path configurations."""
        self.output_dir = os.path.expanduser(self.output_dir)


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
