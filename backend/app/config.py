"""TaskDesk configuration — settings loaded from the environment."""

from pydantic_settings import BaseSettings

DEV_SECRET_KEY = "dev-insecure-secret-change-me"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///data/taskdesk.db"

    # Access tokens
    secret_key: str = DEV_SECRET_KEY
    access_token_ttl_seconds: int = 3600  # 1 hour

    # Password hashing (PBKDF2-HMAC-SHA256)
    password_hash_iterations: int = 260_000

    # Uploads
    max_upload_bytes: int = 5 * 1024 * 1024  # 5 MB

    # First-time setup: POST /api/auth/register-admin
    allow_admin_registration: bool = True

    # CORS (comma-separated origins)
    cors_origins: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
