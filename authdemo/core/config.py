"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Nothing is required at load time: the privileged proxy
endpoints answer 503 until the service-account credentials are present.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    The web API key and project id are client-visible. The service account
    (client email + private key, or a full JSON key) is server-only and is
    used by the admin proxy endpoints and the Firestore client.
    """

    # App
    app_name: str = "authdemo"
    app_version: str = "1.0.0"
    debug: bool = False

    # Firebase project (client-visible values; the web client reads the VITE_ names)
    firebase_project_id: str = Field(
        default="",
        validation_alias=AliasChoices("FIREBASE_PROJECT_ID", "VITE_FIREBASE_PROJECT_ID"),
    )
    firebase_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("FIREBASE_API_KEY", "VITE_FIREBASE_API_KEY"),
    )

    # Privileged credentials: either client email + private key, or a full service account JSON.
    firebase_client_email: str | None = None
    firebase_private_key: SecretStr | None = None
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None

    # CORS
    allowed_origins: str = "http://localhost:5173,http://localhost:3000"

    # Request / outbound HTTP
    request_id_header: str = "X-Request-ID"
    http_timeout_seconds: float = 30.0

    # Providers whose users may skip email verification (comma-separated provider ids).
    verification_exempt_providers: str = "facebook.com"

    # Base URL of this service as seen by the client SDK (admin proxy calls).
    admin_api_base_url: str = "http://localhost:8000"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    @field_validator("firebase_private_key", mode="before")
    @classmethod
    def normalize_private_key(cls, value):
        """Private keys pasted into env vars usually carry literal '\\n' sequences."""
        if isinstance(value, str):
            return value.strip().replace("\\n", "\n")
        return value

    @model_validator(mode="after")
    def validate_service_account(self) -> "Settings":
        """Client email and private key must be provided together."""
        has_email = bool(self.firebase_client_email and self.firebase_client_email.strip())
        has_key = bool(
            self.firebase_private_key and self.firebase_private_key.get_secret_value()
        )
        if has_email != has_key:
            raise ValueError(
                "FIREBASE_CLIENT_EMAIL and FIREBASE_PRIVATE_KEY must be set together "
                "(or use FIREBASE_SERVICE_ACCOUNT_KEY / FIREBASE_SERVICE_ACCOUNT_PATH)."
            )
        if self.http_timeout_seconds <= 0:
            raise ValueError("HTTP_TIMEOUT_SECONDS must be positive")
        return self

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def exempt_providers(self) -> frozenset[str]:
        return frozenset(
            p.strip() for p in self.verification_exempt_providers.split(",") if p.strip()
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.
    """
    return Settings()
