"""
Unit tests for configuration management.
"""

import pytest
from pydantic import ValidationError

from v3d.core.config import ConfigManager, KernelConfig, PrecisionProfile
from v3d.core.exceptions import ConfigurationError
from v3d.core.precision import RoundingMode


class TestKernelConfig:
    """Tests for KernelConfig model."""

    def test_defaults(self):
        """Test the built-in defaults."""
        config = KernelConfig()
        assert config.oom == -3
        assert config.rounding is RoundingMode.HALF_UP
        assert config.default_profile is None
        assert config.log_level == "INFO"
        assert config.json_logs is False

    def test_rounding_by_member_name(self):
        """Test rounding accepts enum member names."""
        config = KernelConfig(rounding="FLOOR")
        assert config.rounding is RoundingMode.FLOOR

    def test_rounding_by_decimal_constant(self):
        """Test rounding accepts decimal module constants."""
        config = KernelConfig(rounding="ROUND_HALF_EVEN")
        assert config.rounding is RoundingMode.HALF_EVEN

    def test_invalid_rounding(self):
        """Test unknown rounding names are rejected."""
        with pytest.raises(ValidationError):
            KernelConfig(rounding="SIDEWAYS")

    def test_log_level_normalised(self):
        """Test log level is upper-cased."""
        assert KernelConfig(log_level="warning").log_level == "WARNING"

    def test_invalid_log_level(self):
        """Test unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            KernelConfig(log_level="chatty")

    def test_oom_bounds(self):
        """Test oom outside the allowed range is rejected."""
        with pytest.raises(ValidationError):
            KernelConfig(oom=5000)


class TestPrecisionProfile:
    """Tests for PrecisionProfile model."""

    def test_create_minimal(self):
        """Test creating a profile with only a name."""
        profile = PrecisionProfile(name="fine")
        assert profile.name == "fine"
        assert profile.oom == -3
        assert profile.rounding is RoundingMode.HALF_UP
        assert profile.description == ""

    def test_create_full(self):
        """Test creating a profile with all fields."""
        profile = PrecisionProfile(
            name="survey", oom=-6, rounding="DOWN", description="Sub-micron"
        )
        assert profile.oom == -6
        assert profile.rounding is RoundingMode.DOWN


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_init_with_valid_dir(self, sample_config_dir):
        """Test initialization with valid directory."""
        manager = ConfigManager(sample_config_dir)
        assert manager.config_dir == sample_config_dir

    def test_init_with_invalid_dir(self, temp_dir):
        """Test initialization with non-existent directory."""
        with pytest.raises(ConfigurationError):
            ConfigManager(temp_dir / "nonexistent")

    def test_load_kernel(self, sample_config_dir):
        """Test loading kernel defaults."""
        manager = ConfigManager(sample_config_dir)
        kernel = manager.get_kernel()
        assert kernel.oom == -4
        assert kernel.rounding is RoundingMode.HALF_EVEN
        assert kernel.log_level == "DEBUG"

    def test_missing_kernel_file_uses_defaults(self, temp_dir):
        """Test an empty directory yields the built-in defaults."""
        manager = ConfigManager(temp_dir)
        assert manager.get_kernel() == KernelConfig()
        assert manager.list_profiles() == []

    def test_load_profiles(self, sample_config_dir):
        """Test loading precision profiles."""
        manager = ConfigManager(sample_config_dir)
        manager.load()

        profiles = manager.list_profiles()
        assert sorted(profiles) == ["coarse", "survey"]

    def test_get_profile(self, sample_config_dir):
        """Test getting a specific profile."""
        manager = ConfigManager(sample_config_dir)

        profile = manager.get_profile("survey")
        assert profile.name == "Survey"
        assert profile.oom == -6
        assert profile.rounding is RoundingMode.FLOOR

    def test_profile_name_defaults_to_file_stem(self, sample_config_dir):
        """Test a profile without a name is named after its file."""
        manager = ConfigManager(sample_config_dir)
        assert manager.get_profile("coarse").name == "coarse"

    def test_get_profile_not_found(self, sample_config_dir):
        """Test getting a non-existent profile."""
        manager = ConfigManager(sample_config_dir)

        with pytest.raises(ConfigurationError) as exc_info:
            manager.get_profile("nonexistent")

        assert "available" in exc_info.value.details

    def test_invalid_kernel_yaml(self, temp_dir):
        """Test malformed YAML is reported as a configuration error."""
        (temp_dir / "kernel.yaml").write_text("kernel: [unclosed\n")
        manager = ConfigManager(temp_dir)

        with pytest.raises(ConfigurationError) as exc_info:
            manager.load()

        assert "error" in exc_info.value.details

    def test_invalid_kernel_values(self, temp_dir):
        """Test values failing validation are reported as configuration errors."""
        (temp_dir / "kernel.yaml").write_text("kernel:\n  rounding: SIDEWAYS\n")
        manager = ConfigManager(temp_dir)

        with pytest.raises(ConfigurationError):
            manager.get_kernel()

    def test_invalid_profile(self, temp_dir):
        """Test a bad profile file fails the whole load."""
        (temp_dir / "profiles").mkdir()
        (temp_dir / "profiles" / "bad.yaml").write_text("precision:\n  oom: not-a-number\n")
        manager = ConfigManager(temp_dir)

        with pytest.raises(ConfigurationError):
            manager.load()
