"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from v3d.core.angle import pi
from v3d.core.environment import Environment, set_default_environment
from v3d.geometry import Point, Ray, Vector


@pytest.fixture(autouse=True)
def fresh_environment():
    """Give every test a default environment of its own."""
    env = Environment()
    set_default_environment(env)
    yield env
    set_default_environment(Environment())


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_dir(temp_dir):
    """Create a sample configuration directory structure."""
    config_dir = temp_dir / "config"
    (config_dir / "profiles").mkdir(parents=True)

    kernel_config = """
kernel:
  oom: -4
  rounding: HALF_EVEN
  log_level: debug
"""
    (config_dir / "kernel.yaml").write_text(kernel_config)

    survey_profile = """
precision:
  name: "Survey"
  oom: -6
  rounding: ROUND_FLOOR
  description: "Sub-micron work"
"""
    (config_dir / "profiles" / "survey.yaml").write_text(survey_profile)

    coarse_profile = """
precision:
  oom: 0
  rounding: CEILING
"""
    (config_dir / "profiles" / "coarse.yaml").write_text(coarse_profile)

    return config_dir


@pytest.fixture
def unit_square():
    """Corners of the unit square in z = 0, counter-clockwise."""
    return [Point(0, 0, 0), Point(1, 0, 0), Point(1, 1, 0), Point(0, 1, 0)]


@pytest.fixture
def unit_tetrahedron_points():
    """Corners of the tetrahedron spanned by the unit axes."""
    return [Point(0, 0, 0), Point(1, 0, 0), Point(0, 1, 0), Point(0, 0, 1)]


@pytest.fixture
def z_axis():
    """The z axis as a ray from the origin."""
    return Ray(Point(0, 0, 0), Vector(0, 0, 1))


@pytest.fixture
def quarter_turn():
    """Pi over two, well beyond the precision the rotation tests round at."""
    return pi(-12) / 2
