from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseSettings):
    """Database configuration.

    When no URL is configured the application falls back to the in-memory
    store, so local development works without PostgreSQL.
    """

    url: Optional[str] = Field(default=None, validation_alias="DATABASE_URL")
    serverless: bool = Field(
        default=True,
        validation_alias="DB_SERVERLESS",
        description="If true, disable connection pooling so serverless DBs can pause.",
    )

    @field_validator("url")
    @classmethod
    def use_async_driver(cls, value: Optional[str]) -> Optional[str]:
        """Rewrite plain PostgreSQL URLs so SQLAlchemy uses asyncpg."""
        if not value or not value.strip():
            return None
        value = value.strip()
        for prefix in ("postgres://", "postgresql://"):
            if value.startswith(prefix):
                return "postgresql+asyncpg://" + value[len(prefix):]
        return value

    @property
    def enabled(self) -> bool:
        return self.url is not None

    model_config = SettingsConfigDict(
        env_file=".env",
        secrets_dir=".secrets",
        case_sensitive=False,
        extra="ignore",
    )


class AwsConfig(BaseSettings):
    """Shared AWS credentials"""

    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    region: str = "us-east-1"

    model_config = SettingsConfigDict(
        env_prefix="AWS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class BedrockConfig(BaseSettings):
    """Amazon Bedrock configuration for lyric generation."""

    region: str = Field(
        default="us-east-1",
        validation_alias="BEDROCK_REGION",
    )
    model_id: str = Field(
        default="amazon.nova-pro-v1:0",
        validation_alias="BEDROCK_MODEL_ID",
    )
    max_tokens: int = Field(
        default=4096,
        validation_alias="BEDROCK_MAX_TOKENS",
        ge=1,
        le=8192,
    )
    temperature: float = Field(
        default=0.7,
        validation_alias="BEDROCK_TEMPERATURE",
        ge=0.0,
        le=1.0,
    )
    top_p: float = Field(
        default=0.9,
        validation_alias="BEDROCK_TOP_P",
        ge=0.0,
        le=1.0,
    )
    api_key: SecretStr | None = Field(
        default=None,
        validation_alias="BEDROCK_API_KEY",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        secrets_dir=".secrets",
        case_sensitive=False,
        extra="ignore",
    )


class SunoConfig(BaseSettings):
    """Suno music-rendering API configuration."""

    api_key: SecretStr | None = None
    base_url: str = "https://api.sunoapi.org"
    model: str = "V4_5"
    callback_url: str = "http://localhost:8000/api/suno/callback"
    status_path: str = "/music/details"
    status_id_param: str = "id"
    timeout_seconds: float = Field(default=30.0, gt=0)
    pending_timeout_minutes: Optional[int] = Field(
        default=None,
        ge=1,
        description="Report pending songs older than this as expired. Disabled when unset.",
    )

    model_config = SettingsConfigDict(
        env_prefix="SUNO_",
        env_file=".env",
        secrets_dir=".secrets",
        case_sensitive=False,
        extra="ignore",
    )


class UploadConfig(BaseSettings):
    """Lesson document upload limits."""

    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="UPLOAD_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Application settings"""

    app_name: str = "EduSong Backend"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_file: str = "logs/app.log"
    pipeline_log_file: str = "logs/song_pipeline.log"
    audio_poll_interval_seconds: int = 15

    # Database
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)

    # AWS
    aws: AwsConfig = Field(default_factory=AwsConfig)

    # Bedrock
    bedrock: BedrockConfig = Field(default_factory=BedrockConfig)

    # Suno
    suno: SunoConfig = Field(default_factory=SunoConfig)

    # Uploads
    upload: UploadConfig = Field(default_factory=UploadConfig)

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
