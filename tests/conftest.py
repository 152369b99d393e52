"""Shared fixtures: API test client and a sample air-quality snapshot."""
import pytest
from fastapi.testclient import TestClient

from ecobot.config import Settings
from ecobot.main import app
from ecobot.services.air_quality import AirQualitySnapshot


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def london_snapshot():
    return AirQualitySnapshot(
        city_name="London",
        index=2,
        status_label="Fair",
        components={"pm2_5": 8.4, "pm10": 12.1, "no2": 21.3},
    )


@pytest.fixture
def upstream_settings():
    """Settings with every upstream credential configured."""
    return Settings(
        anthropic_api_key="test-anthropic",
        openweather_api_key="test-openweather",
        pexels_api_key="test-pexels",
    )
