"""Shared test fixtures."""

import pytest

from birdrec.recorder import MockRecorder
from birdrec.session import RecordingSession


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Keep config and temp recordings inside the test's tmp_path."""
    monkeypatch.setenv("BIRDREC_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("BIRDREC_CACHE_DIR", str(tmp_path / "cache"))


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def recorder():
    return MockRecorder(duration=0.5)


@pytest.fixture
def session(recorder, cache_dir):
    return RecordingSession(recorder, cache_dir)
