"""Shared fixtures."""
import pytest
from fastapi.testclient import TestClient

from intake.main import create_app
from tests.fakes import FakeClaimClient


@pytest.fixture
def fake_client():
    return FakeClaimClient()


@pytest.fixture
def api(fake_client):
    """TestClient for an app wired to the fake platform."""
    app = create_app(client=fake_client)
    with TestClient(app) as client:
        yield client
