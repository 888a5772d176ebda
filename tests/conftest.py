"""Shared test fixtures."""

import os

os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")

import pytest
from fastapi.testclient import TestClient

from src.app.config.settings import settings
from src.app.repositories.error_repository import ErrorRepo
from src.app.services.gemini_service import GeminiService
from src.app.usecases.collection_transform_usecase.collection_transform_usecase import (
    CollectionTransformUseCase,
)
from src.app.usecases.enrichment_usecase.enrichment_usecase import (
    EnrichmentUseCase,
)
from src.main import app

from tests.fakes import FakeErrorRepo, FakeGeminiService, echo_responder


@pytest.fixture
def fake_error_repo():
    return FakeErrorRepo()


@pytest.fixture
def fake_gemini():
    return FakeGeminiService(responder=echo_responder)


@pytest.fixture
def enrichment_usecase(fake_gemini):
    return EnrichmentUseCase(gemini_service=fake_gemini)


@pytest.fixture
def transform_usecase(enrichment_usecase, fake_error_repo):
    return CollectionTransformUseCase(
        enrichment_usecase=enrichment_usecase, error_repo=fake_error_repo
    )


@pytest.fixture
def sample_collection():
    return {
        "info": {"name": "Kite Connect", "description": "Trading API"},
        "item": [
            {
                "name": "List Users",
                "request": {"method": "GET", "url": "https://api.x/users"},
            },
            {
                "name": "Delete User",
                "request": {"method": "DELETE", "url": "https://api.x/users/1"},
            },
            {
                "name": "Get Order",
                "request": {"method": "get", "url": "https://api.x/orders/1"},
            },
        ],
    }


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(path))
    return path


@pytest.fixture
def test_client(fake_gemini, fake_error_repo, upload_dir):
    """Return a test client whose gateway and error repository are fakes."""
    app.dependency_overrides[GeminiService] = lambda: fake_gemini
    app.dependency_overrides[ErrorRepo] = lambda: fake_error_repo
    yield TestClient(app)
    app.dependency_overrides.clear()
