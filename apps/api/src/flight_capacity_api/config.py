"""API configuration via environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from flight_capacity_core.schemas import AmadeusEnvironment

_AMADEUS_BASE_URLS: dict[AmadeusEnvironment, str] = {
    AmadeusEnvironment.TEST: "https://test.api.amadeus.com",
    AmadeusEnvironment.PRODUCTION: "https://api.amadeus.com",
}


class ApiSettings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    # Amadeus Self-Service credentials
    amadeus_client_id: str = ""
    amadeus_client_secret: str = ""
    amadeus_env: AmadeusEnvironment = AmadeusEnvironment.TEST

    # Inbound HTTP
    host: str = "0.0.0.0"
    port: int = 8080
    public_api_url: str = "http://localhost:8080"
    cors_origins: list[str] = ["*"]
    service_name: str = "FlightCapacity API"
    log_level: str = "INFO"

    # Outbound HTTP timeouts (seconds)
    http_timeout: float = 30.0
    connect_timeout: float = 10.0

    # Refresh the OAuth2 token this many seconds before the provider expiry
    token_refresh_margin: int = 300

    # Fare trend sampling
    fare_trend_timeout: float = 5.0
    fare_trend_window: int = 3  # days either side of the query date
    fare_sample_max: int = 5

    # Flight offers search
    offers_max: int = 10
    currency_code: str = "USD"

    # Amadeus has no public aircraft endpoint; point this at a compatible one.
    aircraft_reference_path: str = "/v1/reference-data/aircraft"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def amadeus_base_url(self) -> str:
        return _AMADEUS_BASE_URLS[self.amadeus_env]


settings = ApiSettings()
