"""
Shared test fixtures with isolated storage.

All fixtures use temporary directories so no test touches ./data.
Each test gets a clean state.
"""

import os
import shutil
import tempfile

import pytest


@pytest.fixture(scope="function")
def temp_store_dir():
    """
    Create a temporary directory for store files.
    Automatically cleaned up after each test.
    """
    temp_dir = tempfile.mkdtemp(prefix="test_store_")
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(scope="function")
def store_path(temp_store_dir):
    """Path to an isolated store file (parent dir not created yet)."""
    return os.path.join(temp_store_dir, "nested", "data", "store.json")


@pytest.fixture(autouse=True, scope="function")
def clean_test_environment(monkeypatch, temp_store_dir):
    """Point the default store at a temp file and clear node settings."""
    monkeypatch.setenv("JSON_STORAGE_FILE_PATH", os.path.join(temp_store_dir, "default.json"))
    monkeypatch.delenv("JSON_STORAGE_CONTINUE_ON_FAIL", raising=False)
    monkeypatch.delenv("JSON_STORAGE_LOG_LEVEL", raising=False)
    yield
