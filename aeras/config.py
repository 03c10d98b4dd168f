"""Centralised application settings loaded from environment / .env file."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "AERAS Backend Server"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Points
    base_points_per_ride: int = 10
    seed_pullers: list[str] = ["puller_001"]

    # Known pickup / destination points (lat, lon)
    locations: dict[str, tuple[float, float]] = {
        "CUET Campus": (22.4633, 91.9714),
        "Pahartoli": (22.4725, 91.9845),
        "Noapara": (22.4580, 91.9920),
        "Raojan": (22.4520, 91.9650),
    }
    strict_locations: bool = False  # reject names missing from ``locations``

    # HTTP
    cors_origins: list[str] = ["*"]
    rate_limit: str = "100/minute"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
