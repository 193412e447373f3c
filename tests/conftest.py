"""Root-level pytest fixtures for the hydroslice test suite.

Provides shared configuration fixtures following the Pydantic-based
architecture, plus a factory for writing observation files.
"""

import pytest
from datetime import datetime, timezone
from pathlib import Path

from hydroslice.schemas import ParamConfig, UserConfig, resolve_config


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides)."""
    return resolve_config(param_config, None, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Examples
    --------
    >>> def test_quarter_hour(make_config):
    ...     config = make_config(nearest_minutes=15)
    ...     assert config.slicer.nearest_minutes == 15
    """
    def _make(**user_overrides):
        if user_overrides:
            user = UserConfig(**user_overrides)
            return resolve_config(param_config, user, None)
        return resolve_config(param_config, None, None)

    return _make


# =============================================================================
# Directory Fixtures
# =============================================================================

@pytest.fixture
def in_dir(tmp_path):
    d = tmp_path / "realtime"
    d.mkdir()
    return d


@pytest.fixture
def out_dir(tmp_path):
    d = tmp_path / "slices"
    d.mkdir()
    return d


@pytest.fixture
def write_obs(in_dir):
    """Write an observation CSV into ``in_dir``.

    ``rows`` is a list of (site_no, discharge[, quality]) tuples.
    """
    def _write(name: str, rows=(("01013500", 12.5, 100),), directory: Path = None) -> Path:
        path = (directory or in_dir) / name
        with_quality = any(len(r) == 3 for r in rows)
        header = "site_no,discharge,quality" if with_quality else "site_no,discharge"
        lines = [header] + [",".join(str(v) for v in r) for r in rows]
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2015, 4, 16, 0, 0, 0, tzinfo=timezone.utc)
