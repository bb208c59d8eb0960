import pytest
import storage
from fastapi.testclient import TestClient
from main import app


@pytest.fixture(autouse=True)
def tmp_data_dir(tmp_path, monkeypatch):
    """Redirect all storage reads/writes to a temporary directory."""
    monkeypatch.setattr(storage, 'DATA_DIR', str(tmp_path))
    return tmp_path


@pytest.fixture()
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def scale_4():
    return {
        "name": "4.0 Scale (Standard)",
        "type": "4.0",
        "grades": {"A": 4.0, "A-": 3.7, "B+": 3.3, "B": 3.0, "C": 2.0, "D": 1.0, "F": 0.0},
    }
