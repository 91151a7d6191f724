"""Fixtures for integration tests."""

import stat
import sys
import textwrap
from pathlib import Path
from typing import Protocol

import pytest

from autotest_harness.config import HarnessConfig


class MakeProgramFn(Protocol):
    """Protocol for program creation function."""

    def __call__(self, body: str, *, name: str = "program") -> Path:
        """Create an executable program and return its path."""


class MakeConfigFn(Protocol):
    """Protocol for configuration creation function."""

    def __call__(
        self, binary_path: Path, *, timeout_ms: int = 10000, verbose: bool = False
    ) -> HarnessConfig:
        """Create a harness configuration for the given program."""


@pytest.fixture
def make_program(tmp_path: Path) -> MakeProgramFn:
    """Return a function that writes an executable Python program."""

    def _make(body: str, *, name: str = "program") -> Path:
        path = tmp_path / name
        path.write_text(
            f"#!{sys.executable}\n"
            "import json, os, signal, sys, time\n"
            + textwrap.dedent(body)
        )
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make


@pytest.fixture
def make_config(tmp_path: Path) -> MakeConfigFn:
    """Return a function that builds a configuration rooted in tmp_path."""

    def _make(
        binary_path: Path, *, timeout_ms: int = 10000, verbose: bool = False
    ) -> HarnessConfig:
        return HarnessConfig(
            project_root=tmp_path,
            binary_path=binary_path,
            tests_dir=tmp_path / "tests" / "autonomous",
            timeout_ms=timeout_ms,
            verbose=verbose,
        )

    return _make


@pytest.fixture
def script_file(tmp_path: Path) -> Path:
    """Create a test script for the program under test to run."""
    directory = tmp_path / "tests" / "autonomous"
    directory.mkdir(parents=True)
    path = directory / "test-sample.ts"
    path.write_text("await arg('Pick one', ['a', 'b']);\n")
    return path
