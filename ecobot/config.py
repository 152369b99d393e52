"""
Application settings from environment variables.

Every upstream credential is optional: a missing OpenWeather or Pexels key
simply disables that enrichment. Only the model key is needed for a
successful chat response.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    # LLM
    anthropic_api_key: str = ""
    llm_model: str = "claude-sonnet-4-20250514"
    llm_max_tokens: int = 1024
    llm_temperature: float = 0.7
    llm_timeout_seconds: float = 60.0

    # OpenWeather (geocoding + air pollution)
    openweather_api_key: str = ""
    openweather_geo_url: str = "https://api.openweathermap.org/geo/1.0/direct"
    openweather_air_url: str = "https://api.openweathermap.org/data/2.5/air_pollution"

    # Pexels (image search)
    pexels_api_key: str = ""
    pexels_search_url: str = "https://api.pexels.com/v1/search"

    # Per-call timeout for geocoding, air quality and image search
    upstream_timeout_seconds: float = 10.0

    # CORS
    cors_origins: list[str] = ["*"]


settings = Settings()
