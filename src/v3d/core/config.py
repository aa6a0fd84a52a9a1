"""
Configuration management for v3d.

Handles loading and validation of the kernel defaults and of named precision
profiles. A configuration directory looks like::

    config/
        kernel.yaml            # kernel: {oom: -3, rounding: ROUND_HALF_UP, ...}
        profiles/
            survey.yaml        # precision: {name: survey, oom: -6, ...}
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from v3d.core.exceptions import ConfigurationError
from v3d.core.logging import get_logger
from v3d.core.precision import RoundingMode

logger = get_logger(__name__)


def _parse_rounding(value: Any) -> Any:
    # Accept "HALF_UP" as well as the decimal constant "ROUND_HALF_UP".
    if isinstance(value, str) and value in RoundingMode.__members__:
        return RoundingMode[value]
    return value


class PrecisionProfile(BaseModel):
    """A named precision context."""

    name: str
    oom: int = Field(default=-3, ge=-1000, le=1000)
    rounding: RoundingMode = RoundingMode.HALF_UP
    description: str = ""

    @field_validator("rounding", mode="before")
    @classmethod
    def normalise_rounding(cls, value: Any) -> Any:
        return _parse_rounding(value)


class KernelConfig(BaseModel):
    """Kernel-wide defaults."""

    oom: int = Field(default=-3, ge=-1000, le=1000)
    rounding: RoundingMode = RoundingMode.HALF_UP
    default_profile: str | None = None
    log_level: str = "INFO"
    json_logs: bool = False
    log_file: str | None = None

    @field_validator("rounding", mode="before")
    @classmethod
    def normalise_rounding(cls, value: Any) -> Any:
        return _parse_rounding(value)

    @field_validator("log_level")
    @classmethod
    def check_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return value


@dataclass
class ConfigManager:
    """
    Central configuration manager for v3d.

    Loads and validates configurations from YAML files.

    Example:
        >>> config = ConfigManager(config_dir=Path("config"))
        >>> kernel = config.get_kernel()
        >>> survey = config.get_profile("survey")
    """

    config_dir: Path
    _kernel: KernelConfig = field(default_factory=KernelConfig, init=False)
    _profiles: dict[str, PrecisionProfile] = field(default_factory=dict, init=False)
    _loaded: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        """Initialize configuration manager."""
        self.config_dir = Path(self.config_dir)
        if not self.config_dir.exists():
            raise ConfigurationError(
                f"Configuration directory not found: {self.config_dir}"
            )

    def load(self) -> None:
        """Load all configurations from disk."""
        self._load_kernel()
        self._load_profiles()
        self._loaded = True
        logger.info(
            "config_loaded",
            config_dir=str(self.config_dir),
            profiles=sorted(self._profiles),
        )

    def _read_yaml(self, config_file: Path) -> Any:
        with open(config_file) as f:
            return yaml.safe_load(f)

    def _load_kernel(self) -> None:
        """Load kernel defaults, keeping the built-in ones if no file exists."""
        config_file = self.config_dir / "kernel.yaml"
        if not config_file.exists():
            return
        try:
            data = self._read_yaml(config_file)
            if data and "kernel" in data:
                self._kernel = KernelConfig(**(data["kernel"] or {}))
        except (yaml.YAMLError, ValidationError) as e:
            raise ConfigurationError(
                f"Failed to load kernel config: {config_file}",
                details={"error": str(e)},
            )

    def _load_profiles(self) -> None:
        """Load precision profiles."""
        profiles_dir = self.config_dir / "profiles"
        if not profiles_dir.exists():
            return

        for config_file in profiles_dir.glob("*.yaml"):
            try:
                data = self._read_yaml(config_file)
                if data and "precision" in data:
                    profile_data = dict(data["precision"])
                    profile_data.setdefault("name", config_file.stem)
                    self._profiles[config_file.stem] = PrecisionProfile(**profile_data)
            except (yaml.YAMLError, ValidationError, TypeError) as e:
                raise ConfigurationError(
                    f"Failed to load precision profile: {config_file}",
                    details={"error": str(e)},
                )

    def get_kernel(self) -> KernelConfig:
        """Get the kernel defaults."""
        if not self._loaded:
            self.load()
        return self._kernel

    def get_profile(self, name: str) -> PrecisionProfile:
        """
        Get a precision profile by name.

        Args:
            name: Profile name (without .yaml extension)

        Returns:
            PrecisionProfile instance

        Raises:
            ConfigurationError: If the profile is not found
        """
        if not self._loaded:
            self.load()

        if name not in self._profiles:
            available = list(self._profiles.keys())
            raise ConfigurationError(
                f"Precision profile not found: {name}",
                details={"available": available},
            )
        return self._profiles[name]

    def list_profiles(self) -> list[str]:
        """List available precision profiles."""
        if not self._loaded:
            self.load()
        return list(self._profiles.keys())
