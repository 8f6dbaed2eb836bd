"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match local development

Collaborators:
  - api/main.py: reads settings for CORS, lifespan and seed tasks
  - container.py: picks repositories and the profile requirements
  - identity/auth_users.py: JWT secret, TTL and cookie settings

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic, pure configuration

Notes:
  - Singleton via lru_cache
  - Production hardening enforced by a model validator
"""

from functools import lru_cache

from pydantic import ValidationInfo, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_PERSONAL_FIELDS = (
    "first_name,last_name,identification_number,birth_date,"
    "activity_type,activity_number,phone,email"
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/test/production)
        mongo_uri: MongoDB connection string
        mongo_db_name: Database name inside the MongoDB deployment
        mongo_timeout_ms: Server selection timeout for the Mongo client
        allowed_origins: Comma-separated CORS origins
        cors_allow_credentials: Allow cookies cross-origin (default: False)
        jwt_secret: Secret for signing JWT access tokens
        jwt_access_ttl_minutes: Access token TTL in minutes
        jwt_cookie_name: Cookie name for access token
        jwt_cookie_secure: Set Secure on auth cookies
        password_reset_ttl_minutes: Lifetime of a password reset token
        log_level: Root level for the JSON logger
        log_json: Emit JSON lines (False = plain text, handy locally)
        max_body_bytes: Max request body size (default: 1MB)
        profile_personal_fields: Comma-separated personal fields required
            to consider a profile complete
        products_default_limit: Page size when the client sends none
        products_max_limit: Upper bound for page size
    """

    # Environment
    app_env: str = "development"

    # Database - MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "storefront"
    mongo_timeout_ms: int = 5000

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = False

    # Security - JWT Auth
    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = 60
    jwt_cookie_name: str = "access_token"
    jwt_cookie_secure: bool = False
    password_reset_ttl_minutes: int = 60

    # Observability
    log_level: str = "INFO"
    log_json: bool = True

    # Security - Hardening
    max_body_bytes: int = 1024 * 1024  # 1MB

    # Profile completion
    profile_personal_fields: str = _DEFAULT_PERSONAL_FIELDS

    # Catalog pagination
    products_default_limit: int = 10
    products_max_limit: int = 100

    # Dev Tools (Backend Safe)
    dev_seed_admin: bool = False
    dev_seed_admin_email: str = "admin@local.dev"
    dev_seed_admin_password: str = "admin-password"
    dev_seed_admin_force_reset: bool = False

    @field_validator("jwt_access_ttl_minutes", "password_reset_ttl_minutes")
    @classmethod
    def ttl_must_be_positive(cls, v: int, info: ValidationInfo) -> int:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be greater than 0")
        return v

    @field_validator("products_default_limit", "products_max_limit")
    @classmethod
    def limits_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("pagination limits must be greater than 0")
        return v

    @field_validator("profile_personal_fields")
    @classmethod
    def personal_fields_not_empty(cls, v: str) -> str:
        if not [f for f in (v or "").split(",") if f.strip()]:
            raise ValueError("profile_personal_fields must list at least one field")
        return v

    def validate_pagination_params(self) -> None:
        """
        Cross-field validation: default page size must fit the maximum.
        Called explicitly after instantiation.
        """
        if self.products_default_limit > self.products_max_limit:
            raise ValueError(
                f"products_default_limit ({self.products_default_limit}) must be "
                f"<= products_max_limit ({self.products_max_limit})"
            )

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def get_personal_fields(self) -> tuple[str, ...]:
        """Parse the required personal fields, preserving order."""
        fields: list[str] = []
        for raw in self.profile_personal_fields.split(","):
            name = raw.strip()
            if name and name not in fields:
                fields.append(name)
        return tuple(fields)

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        if not self.jwt_cookie_secure:
            raise ValueError("JWT_COOKIE_SECURE must be true in production")
        if self.dev_seed_admin:
            raise ValueError("DEV_SEED_ADMIN must be disabled in production")

        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    settings = Settings()
    settings.validate_pagination_params()
    return settings
