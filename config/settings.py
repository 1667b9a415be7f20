"""
Application settings and environment configuration.

Purpose:
- Centralize gateway config (backend URL, session decoding, admin roles, CORS)
- Load from environment variables for 12-factor app compliance
- Provide sensible defaults for local development
"""
import os
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # API Configuration
    API_TITLE: str = "Bus Trip Alert Gateway"
    API_VERSION: str = "0.1"

    # Backend trip/notification service. All proxied calls are rooted here.
    # Example: http://backend:8080
    BACKEND_URL: str = os.getenv("BACKEND_URL", "http://localhost:8080")

    # Transport timeout for a single backend call (seconds). No retries.
    BACKEND_TIMEOUT_SEC: float = float(os.getenv("BACKEND_TIMEOUT_SEC", "30"))

    # Session token issued by the identity provider: read from this cookie
    # and verified with SESSION_SECRET (read from .env, no hard-coded secret in prod)
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "appSession")
    SESSION_SECRET: str = os.getenv("SESSION_SECRET", "change_me_to_a_long_random_session_secret")
    SESSION_ALGORITHM: str = os.getenv("SESSION_ALGORITHM", "HS256")

    # Comma-separated user ids granted the admin role (trip management)
    # Example: auth0|abc123,auth0|def456
    ADMIN_USER_IDS: str = os.getenv("ADMIN_USER_IDS", "")

    # CORS: comma-separated origins allowed to call the gateway
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:3000")

    # Logging: Values: DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Static provinces/cities reference data (JSON list)
    LOCATION_DATA_PATH: str = os.getenv(
        "LOCATION_DATA_PATH",
        os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data", "location_info.json"),
    )

    @property
    def admin_user_ids(self) -> set[str]:
        return {x.strip() for x in self.ADMIN_USER_IDS.split(",") if x.strip()}

    @property
    def cors_origins_list(self) -> list[str]:
        return [x.strip() for x in self.CORS_ORIGINS.split(",") if x.strip()]

    class Config:
        env_file = ".env"  # Load from .env file if present
        extra = "allow"

# Global settings instance
settings = Settings()
