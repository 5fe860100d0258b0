"""Shared pytest fixtures."""
import json
from pathlib import Path

import pytest

from tests.helpers import SAMPLE_DATASET, FakeSpeechHost


@pytest.fixture
def write_dataset(tmp_path):
    """Write a JSON payload to a temp file and return its path."""
    def _write(payload, name="conjugations.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def sample_dataset_path() -> Path:
    return SAMPLE_DATASET


@pytest.fixture
def fake_host() -> FakeSpeechHost:
    return FakeSpeechHost()
