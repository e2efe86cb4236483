"""
Pytest configuration and fixtures.
"""

import json

import pytest

from deckforge.application.services import GenerationLog
from deckforge.domain.entities import ImageAsset, PresentationPlan, SlideData
from deckforge.infra.config.settings import Settings

from tests._helpers.fakes import PNG_DATA_URI


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, request_timeout=None)


@pytest.fixture
def generation_log():
    return GenerationLog()


@pytest.fixture
def sample_plan_payload():
    """Sample model-generated plan as returned by a provider."""
    return {
        "topic": "Acme Corp Q3 Results",
        "slides": [
            {
                "id": "slide-1",
                "title": "Revenue Growth",
                "bullets": [
                    "Revenue grew 18% year over year to $42M.",
                    "Subscription revenue now makes up 70% of the total.",
                ],
                "visualNote": "A rising bar chart comparing Q3 revenue across three years.",
            },
            {
                "id": "slide-2",
                "title": "Margins",
                "bullets": ["Gross margin improved to 64% on lower hosting costs."],
                "visualNote": "A donut chart of cost categories.",
                "selectedImageIds": ["should-be-dropped"],
            },
            {
                "id": "slide-3",
                "title": "Outlook",
                "bullets": ["Guidance for Q4 was raised to $47M."],
                "visualNote": "A forward-looking roadmap timeline.",
            },
        ],
    }


@pytest.fixture
def sample_plan_json(sample_plan_payload):
    return json.dumps(sample_plan_payload)


@pytest.fixture
def image_asset():
    return ImageAsset(id="img-1", name="logo.png", data_url=PNG_DATA_URI)


@pytest.fixture
def three_slide_plan():
    return PresentationPlan(
        topic="Acme Corp Q3 Results",
        style="Minimal, blue accents",
        slides=[
            SlideData(id="a", title="A", bullets=["First point."], visual_note="chart"),
            SlideData(id="b", title="B", bullets=["Second point."], visual_note="photo"),
            SlideData(id="c", title="C", bullets=["Third point."], visual_note="map"),
        ],
    )


# ---------- API TESTING FIXTURES ----------


@pytest.fixture
def mock_session(settings):
    """Generation session wired to the offline mock provider."""
    from deckforge.application.services import GenerationSession
    from deckforge.infra.llm import MockProvider

    provider = MockProvider(slide_count=3)
    return GenerationSession(settings, lambda provider_id, credentials: provider)


@pytest.fixture
def app(mock_session):
    """FastAPI application instance with the session dependency overridden."""
    from deckforge.infra.config.dependencies import get_session
    from deckforge.main import app

    app.dependency_overrides[get_session] = lambda: mock_session
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """FastAPI test client."""
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client
