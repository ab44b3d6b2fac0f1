import warnings
from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self


def parse_list(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Tour Admin"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    # Remote REST backend
    BACKEND_URL: str = ""
    SERVICE_API_TIMEOUT: float = Field(default=10.0, gt=0)
    UPLOAD_TIMEOUT: float = Field(default=60.0, gt=0)

    # Signed cookie session
    SESSION_SECRET: str = Field(min_length=1)
    SESSION_COOKIE_NAME: str = "RJ_session"
    SESSION_MAX_AGE: int = 60 * 60 * 24 * 30  # 30 days

    # Localization defaults
    SUPPORTED_LANGUAGES: Annotated[list[str] | str, BeforeValidator(parse_list)] = ["es", "en"]
    DEFAULT_LANGUAGE: str = "es"
    DEFAULT_CURRENCY: str = "MXN"
    DEFAULT_COUNTRY_CODE: str = "MX"
    DEFAULT_COUNTRY_NAMES: Annotated[list[str] | str, BeforeValidator(parse_list)] = [
        "méxico",
        "mexico",
    ]

    # TTL read-through cache (cities, price range)
    CACHE_TTL_SECONDS: int = Field(default=300, gt=0)
    CACHE_MAX_ENTRIES: int = Field(default=512, ge=1)
    CACHE_STALE_SECONDS: int = Field(default=3600, gt=0)
    REDIS_URL: str | None = None

    # Login / OTP throttling
    LOGIN_RATE_LIMIT_COUNT: int = Field(default=5, ge=1)
    LOGIN_RATE_LIMIT_WINDOW_SECONDS: int = Field(default=300, ge=1)
    # peers whose X-Forwarded-For is honoured; empty means the socket peer is the client
    TRUSTED_PROXIES: Annotated[list[str] | str, BeforeValidator(parse_list)] = []

    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024

    @property
    def backend_configured(self) -> bool:
        return self.BACKEND_URL.strip() != ""

    @property
    def secure_cookies(self) -> bool:
        return self.ENVIRONMENT != "local"

    def _check_default_secret(self, var_name: str, value: str | None) -> None:
        if value == "changethis":
            message = (
                f'The value of {var_name} is "changethis", '
                "for security, please change it, at least for deployments."
            )
            if self.ENVIRONMENT == "local":
                warnings.warn(message, stacklevel=1)
            else:
                raise ValueError(message)

    @model_validator(mode="after")
    def _enforce_non_default_secrets(self) -> Self:
        self._check_default_secret("SESSION_SECRET", self.SESSION_SECRET)
        if self.DEFAULT_LANGUAGE not in self.SUPPORTED_LANGUAGES:
            raise ValueError(
                f"DEFAULT_LANGUAGE {self.DEFAULT_LANGUAGE!r} is not one of "
                f"SUPPORTED_LANGUAGES {self.SUPPORTED_LANGUAGES}"
            )
        return self


settings = Settings()  # type: ignore
