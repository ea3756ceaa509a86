"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "./data/mygram.db"
    # Seconds sqlite waits on a locked database before failing the request
    database_timeout: float = 5.0
    api_v1_prefix: str = "/api/v1"
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # JWT Configuration
    jwt_secret_key: str = "change-me-in-production-use-env-var"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "mygram"
    jwt_audience: str = "mygram-api"
    jwt_expiry_minutes: int = 60

    # Bcrypt work factor (higher = more secure but slower)
    # Tests lower this to 4
    bcrypt_work_factor: int = 12

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )


settings = Settings()
