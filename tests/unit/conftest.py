"""Fixtures for unit tests."""

from pathlib import Path

import pytest

from autotest_harness.config import HarnessConfig


@pytest.fixture
def config(tmp_path: Path) -> HarnessConfig:
    """Create a harness configuration rooted in a temporary directory."""
    return HarnessConfig(
        project_root=tmp_path,
        binary_path=tmp_path / "target" / "debug" / "script-kit-gpui",
        tests_dir=tmp_path / "tests" / "autonomous",
        timeout_ms=30000,
    )


@pytest.fixture
def verbose_config(config: HarnessConfig) -> HarnessConfig:
    """Create a harness configuration with verbose output enabled."""
    return config.model_copy(update={"verbose": True})
