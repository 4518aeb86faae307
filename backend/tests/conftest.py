import pytest
from fastapi.testclient import TestClient #fake http client that calls the FastAPI routes without a real server

from timetable_engine.api.deps import get_engine_settings
from timetable_engine.core.config import Settings
from timetable_engine.main import app


@pytest.fixture()
def engine_settings():
    return Settings(default_alternative_count=3, max_alternative_count=5, generation_workers=2)


@pytest.fixture() #test client
def client(engine_settings):
    app.dependency_overrides[get_engine_settings] = lambda: engine_settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
