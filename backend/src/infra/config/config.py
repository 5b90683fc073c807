from functools import lru_cache
from typing import Literal, Optional
from urllib.parse import urlparse

from apscheduler.triggers.cron import CronTrigger
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from infra.utils.version import get_version


class LoggingConfig(BaseModel):
    LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    JSON_FORMAT: bool = False
    LIBRARY_LOG_LEVELS: dict[str, str | int] = Field(default_factory=dict)


class DatabaseConfig(BaseModel):
    DRIVER: Literal["postgres", "sqlite"] = "postgres"
    SQLITE_PATH: str = "./noc_monitor.db"

    USER: str | None = None
    PASSWORD: str | None = None
    HOST: str | None = None
    PORT: int | None = None
    DATABASE: str | None = None
    ECHO: bool = False
    POOL_SIZE: int = 10
    MAX_OVERFLOW: int = 20
    POOL_TIMEOUT: int = 30
    POOL_RECYCLE: int = 1800

    @model_validator(mode="after")
    def validate_required_postgres_fields(self) -> "DatabaseConfig":
        if self.DRIVER == "sqlite":
            return self

        required_fields = {
            "USER": self.USER,
            "PASSWORD": self.PASSWORD,
            "HOST": self.HOST,
            "PORT": self.PORT,
            "DATABASE": self.DATABASE,
        }
        missing_fields = [field_name for field_name, value in required_fields.items() if value in (None, "")]

        if missing_fields:
            raise ValueError(
                f"DATABASE_CONFIG fields required when DRIVER=postgres: {', '.join(missing_fields)}"
            )

        return self


class LogStorageConfig(BaseModel):
    REPOSITORIES: list[Literal["file", "database"]] = Field(default_factory=lambda: ["file"], min_length=1)
    LOGS_DIR: str = "./logs"


class MailerConfig(BaseModel):
    HOST: str = "smtp.gmail.com"
    PORT: int = 587
    USE_TLS: bool = True
    EMAIL: str
    SECRET_KEY: str


class MonitorTarget(BaseModel):
    URL: str
    INTERVAL_SECONDS: Optional[int] = Field(default=None, gt=0)
    CRON: Optional[str] = None

    @field_validator("URL", mode="after")
    @classmethod
    def is_url_valid(cls, url: str):
        parsed = urlparse(url)
        if not all([parsed.scheme, parsed.netloc]):
            raise ValueError(f"Invalid URL: {url}")

        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"URL must use http or https scheme: {url}")

        return url

    @model_validator(mode="after")
    def validate_single_schedule(self) -> "MonitorTarget":
        if (self.INTERVAL_SECONDS is None) == (self.CRON is None):
            raise ValueError(f"Target {self.URL} needs exactly one of INTERVAL_SECONDS or CRON")

        if self.CRON is not None:
            CronTrigger.from_crontab(self.CRON)

        return self


class MonitorConfig(BaseModel):
    TARGETS: list[MonitorTarget] = Field(default_factory=list)
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    EMAIL_RECIPIENTS: list[str] = Field(default_factory=list)
    EMAIL_REPORT_CRON: Optional[str] = None

    @field_validator("EMAIL_REPORT_CRON", mode="after")
    @classmethod
    def is_cron_valid(cls, cron: Optional[str]):
        if cron is not None:
            CronTrigger.from_crontab(cron)

        return cron


class Config(BaseSettings):
    APP_NAME: str = "noc-monitor"
    VERSION: str = get_version()
    ENVIRONMENT: Literal["loc", "dev", "pre", "pro"] = "dev"
    ROOT_PATH: str = "/noc-monitor"

    HOST: str = "0.0.0.0"
    PORT: int = 8080

    LOGGING_CONFIG: LoggingConfig = LoggingConfig()
    LOG_STORAGE_CONFIG: LogStorageConfig = LogStorageConfig()
    DATABASE_CONFIG: Optional[DatabaseConfig] = None
    MAILER_CONFIG: Optional[MailerConfig] = None
    MONITOR_CONFIG: MonitorConfig = MonitorConfig()

    model_config = SettingsConfigDict(
        frozen=True,
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_nested_delimiter="__",
    )

    @model_validator(mode="after")
    def validate_storage_dependencies(self) -> "Config":
        if "database" in self.LOG_STORAGE_CONFIG.REPOSITORIES and self.DATABASE_CONFIG is None:
            raise ValueError("DATABASE_CONFIG is required when LOG_STORAGE_CONFIG.REPOSITORIES includes 'database'")

        return self


@lru_cache
def get_config() -> Config:
    return Config()  # type: ignore
