# tests/conftest.py
"""
Shared pytest fixtures: isolated settings and stores under tmp_path.
"""
import json
from unittest.mock import Mock

import pytest
import requests

from fxsync.adapters.persistence import LocalStore
from fxsync.config import Settings


@pytest.fixture
def make_settings(tmp_path):
    def _make(**overrides):
        values = {"FXSYNC_DATA_DIR": str(tmp_path / "data"), "MIN_LOADING_SECONDS": 0.5}
        values.update(overrides)
        return Settings(**values)
    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def store(settings):
    return LocalStore(settings.data_dir)


def make_response(payload=None, status=200, content=None):
    """Mock of requests.Response carrying ``payload`` as JSON."""
    resp = Mock()
    resp.status_code = status
    if content is None:
        content = json.dumps(payload).encode() if payload is not None else b""
    resp.content = content
    if payload is None:
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status} Client Error", response=resp
        )
    else:
        resp.raise_for_status.return_value = None
    return resp
