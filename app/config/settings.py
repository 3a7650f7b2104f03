from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

_PLACEHOLDER_PREFIX = "your_"


def _secret_present(secret: SecretStr | None) -> bool:
    if secret is None:
        return False
    value = secret.get_secret_value().strip()
    return bool(value) and not value.startswith(_PLACEHOLDER_PREFIX)


class ChatConfig(BaseSettings):
    """Chat completion backend configuration."""

    base_url: Optional[str] = "https://api.giftedtech.co.ke/api/ai/gpt4o"
    api_key: SecretStr | None = None
    provider_name: str = "GiftedTech GPT-4o"
    timeout_seconds: float = Field(default=30.0, gt=0)

    @property
    def configured(self) -> bool:
        return bool(self.base_url) and _secret_present(self.api_key)

    model_config = SettingsConfigDict(
        env_prefix="CHAT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


class TextToSpeechConfig(BaseSettings):
    """ElevenLabs text-to-speech configuration."""

    base_url: str = "https://api.elevenlabs.io/v1"
    api_key: SecretStr | None = None
    voice_id: str = "21m00Tcm4TlvDq8ikWAM"
    model_id: str = "eleven_monolingual_v1"
    stability: float = Field(default=0.5, ge=0.0, le=1.0)
    similarity_boost: float = Field(default=0.75, ge=0.0, le=1.0)
    max_characters: int = Field(default=5000, ge=1)
    timeout_seconds: float = Field(default=30.0, gt=0)

    @property
    def configured(self) -> bool:
        return bool(self.base_url) and _secret_present(self.api_key)

    model_config = SettingsConfigDict(
        env_prefix="ELEVENLABS_",
        env_file=".env",
        secrets_dir=".secrets",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


class RecognitionConfig(BaseSettings):
    """ACRCloud audio recognition configuration."""

    host: Optional[str] = None
    access_key: SecretStr | None = None
    secret_key: SecretStr | None = None
    timeout_seconds: float = Field(default=20.0, gt=0)
    simulate: bool = Field(
        default=False,
        description="Return a simulated match when ACRCloud is not configured.",
    )

    @property
    def configured(self) -> bool:
        return (
            bool(self.host)
            and _secret_present(self.access_key)
            and _secret_present(self.secret_key)
        )

    model_config = SettingsConfigDict(
        env_prefix="ACRCLOUD_",
        env_file=".env",
        secrets_dir=".secrets",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


class MediaConfig(BaseSettings):
    """Media search and download API configuration."""

    base_url: Optional[str] = "https://api.giftedtech.co.ke/api"
    api_key: SecretStr | None = None
    search_suffix: str = " official audio"
    audio_quality: str = "128"
    video_quality: str = "720"
    search_timeout_seconds: float = Field(default=30.0, gt=0)
    download_timeout_seconds: float = Field(default=60.0, gt=0)

    @property
    def configured(self) -> bool:
        return bool(self.base_url) and _secret_present(self.api_key)

    model_config = SettingsConfigDict(
        env_prefix="MEDIA_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


class TranscriptionConfig(BaseSettings):
    """Optional speech-to-text endpoint used for voice messages."""

    base_url: Optional[str] = None
    api_key: SecretStr | None = None
    timeout_seconds: float = Field(default=30.0, gt=0)
    placeholder_text: str = "I sent a voice message. Please respond to my voice input."

    @property
    def configured(self) -> bool:
        return bool(self.base_url)

    model_config = SettingsConfigDict(
        env_prefix="TRANSCRIBE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


class UploadConfig(BaseSettings):
    """Limits applied to multipart audio uploads."""

    max_audio_size: int = Field(
        default=10 * 1024 * 1024,
        ge=1,
        validation_alias="MAX_AUDIO_SIZE",
    )
    allowed_mime_prefixes: tuple[str, ...] = ("audio/", "video/")
    accepted_formats: tuple[str, ...] = ("mp3", "wav", "m4a", "webm")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


class RateLimitConfig(BaseSettings):
    """Fixed-window request limiting per client and route."""

    enabled: bool = True
    max_requests: int = Field(default=60, ge=1)
    window_seconds: int = Field(default=60, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="RATE_LIMIT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


class AdminConfig(BaseSettings):
    """Shared-secret protection for the operational status endpoint."""

    token: SecretStr | None = Field(default=None, validation_alias="ADMIN_TOKEN")
    header_name: str = Field(default="X-Admin-Token", validation_alias="ADMIN_HEADER")

    model_config = SettingsConfigDict(
        env_file=".env",
        secrets_dir=".secrets",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


class Settings(BaseSettings):
    """Application settings"""

    app_name: str = "Bera AI"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000
    log_file: str = "logs/app.log"
    conversation_log_file: str = "logs/conversation.log"

    chat: ChatConfig = Field(default_factory=ChatConfig)
    tts: TextToSpeechConfig = Field(default_factory=TextToSpeechConfig)
    recognition: RecognitionConfig = Field(default_factory=RecognitionConfig)
    media: MediaConfig = Field(default_factory=MediaConfig)
    transcription: TranscriptionConfig = Field(default_factory=TranscriptionConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    admin: AdminConfig = Field(default_factory=AdminConfig)

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


# Global settings instance
settings = Settings()
