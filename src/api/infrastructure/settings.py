"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from enum import StrEnum
from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Used only when LINKBIO_AUTH_JWT_SECRET is unset. Anyone who knows this value
# can mint valid session tokens, so production must override it.
INSECURE_DEFAULT_JWT_SECRET = "linkbio-secret-key-change-in-production"


class Environment(StrEnum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


class StorageBackend(StrEnum):
    """Which storage adapter serves requests.

    AUTO routes to PostgreSQL while it is reachable and falls back to the
    in-memory adapter otherwise.
    """

    AUTO = "auto"
    POSTGRES = "postgres"
    MEMORY = "memory"


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        LINKBIO_DB_HOST: Database host (default: localhost)
        LINKBIO_DB_PORT: Database port (default: 5432)
        LINKBIO_DB_DATABASE: Database name (default: linkbio)
        LINKBIO_DB_USERNAME: Database user (default: linkbio)
        LINKBIO_DB_PASSWORD: Database password (required in production)
        LINKBIO_DB_POOL_MIN_CONNECTIONS: Persistent connections in pool (default: 2)
        LINKBIO_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="LINKBIO_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="linkbio", description="Database name")
    username: str = Field(default="linkbio", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Persistent connections kept in the pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class AuthSettings(BaseSettings):
    """Session token and password hashing settings.

    Environment variables:
        LINKBIO_AUTH_JWT_SECRET: HMAC key for session tokens
        LINKBIO_AUTH_TOKEN_TTL_DAYS: Token and cookie lifetime (default: 7)
        LINKBIO_AUTH_BCRYPT_ROUNDS: bcrypt work factor (default: 12)
        LINKBIO_AUTH_COOKIE_NAME: Session cookie name (default: auth-token)
        LINKBIO_AUTH_COOKIE_SECURE: Force the cookie Secure flag on or off
    """

    model_config = SettingsConfigDict(
        env_prefix="LINKBIO_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_secret: SecretStr = Field(
        default=SecretStr(INSECURE_DEFAULT_JWT_SECRET),
        description="Secret used to sign session tokens",
    )
    token_ttl_days: int = Field(default=7, ge=1, le=365)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    cookie_name: str = Field(default="auth-token", min_length=1)
    cookie_secure: bool | None = Field(
        default=None,
        description="Secure cookie flag; derived from the environment when unset",
    )

    @property
    def uses_insecure_secret(self) -> bool:
        """True when the fallback signing secret is in use."""
        return self.jwt_secret.get_secret_value() == INSECURE_DEFAULT_JWT_SECRET


class StorageSettings(BaseSettings):
    """Storage backend selection and retry settings.

    Environment variables:
        LINKBIO_STORAGE_BACKEND: auto, postgres or memory (default: auto)
        LINKBIO_STORAGE_HEALTH_RECHECK_SECONDS: Seconds a health check
            result is trusted before the database is pinged again (default: 30)
        LINKBIO_STORAGE_RETRY_ATTEMPTS: Attempts for transient failures (default: 3)
        LINKBIO_STORAGE_RETRY_MAX_WAIT_SECONDS: Backoff ceiling (default: 2.0)
        LINKBIO_STORAGE_PING_TIMEOUT_SECONDS: Timeout for one health ping (default: 5.0)
    """

    model_config = SettingsConfigDict(
        env_prefix="LINKBIO_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: StorageBackend = Field(default=StorageBackend.AUTO)
    health_recheck_seconds: float = Field(default=30.0, ge=0)
    retry_attempts: int = Field(default=3, ge=1, le=10)
    retry_max_wait_seconds: float = Field(default=2.0, gt=0)
    ping_timeout_seconds: float = Field(default=5.0, gt=0)


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="LINKBIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Linkbio API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    environment: Environment = Field(default=Environment.DEVELOPMENT)

    @property
    def is_production(self) -> bool:
        """Whether the service runs in production."""
        return self.environment == Environment.PRODUCTION

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def auth(self) -> AuthSettings:
        """Get auth settings."""
        return get_auth_settings()

    @property
    def storage(self) -> StorageSettings:
        """Get storage settings."""
        return get_storage_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_auth_settings() -> AuthSettings:
    """Get cached auth settings."""
    return AuthSettings()


@lru_cache
def get_storage_settings() -> StorageSettings:
    """Get cached storage settings."""
    return StorageSettings()
