"""
Shared pytest fixtures and utilities for the romdat test suite.
"""

import io
from pathlib import Path
from typing import Any, Callable, Dict

import pytest
import yaml


@pytest.fixture
def project_root() -> Path:
    """
    Repository root path for locating fixtures and sample data.
    """
    return Path(__file__).resolve().parent.parent


@pytest.fixture
def data_dir(project_root: Path) -> Path:
    """
    Path to shared static test fixtures (DAT and XML files).
    """
    return project_root / "tests" / "data"


@pytest.fixture
def sample_dat(data_dir: Path) -> Path:
    """ClrMamePro DAT with a header and one game, machine and resource block."""
    return data_dir / "sample.dat"


@pytest.fixture
def malformed_dat(data_dir: Path) -> Path:
    """ClrMamePro DAT with broken lines and an unterminated final block."""
    return data_dir / "malformed.dat"


@pytest.fixture
def sample_xml(data_dir: Path) -> Path:
    """Logiqx XML datafile mirroring part of sample.dat."""
    return data_dir / "sample.xml"


@pytest.fixture
def dat_stream() -> Callable[[str], io.BytesIO]:
    """
    Build an in-memory binary stream from DAT text.

    Usage:
        stream = dat_stream('game ( name "foo" )')
    """

    def _builder(text: str) -> io.BytesIO:
        return io.BytesIO(text.encode("utf-8"))

    return _builder


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[[Dict[str, Any]], Path]:
    """
    Write a romdat.yaml into the temp directory.

    Usage:
        path = make_config({"output": {"format": "logiqx"}})
    """

    def _builder(values: Dict[str, Any]) -> Path:
        path = tmp_path / "romdat.yaml"
        path.write_text(yaml.safe_dump(values))
        return path

    return _builder
