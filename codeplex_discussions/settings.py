from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from codeplex_discussions.errors import ConfigurationError

DEFAULT_LOG_FILE = "codeplex_discussion_download.log"
DEFAULT_OUTPUT_DIR = "./output"
DEFAULT_PAGE_SIZE = 100


class DownloaderSettings(BaseSettings):
    """
    Environment-driven settings. Command line flags take precedence.

    The camelCase aliases accept the key names of the older app-settings
    file (codePlexForums, logFileName, pageSize, outputFolder).
    """

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    # ---- Forums ----
    codeplex_forums: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("CODEPLEX_FORUMS", "codePlexForums"),
    )
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        validation_alias=AliasChoices("PAGE_SIZE", "pageSize"),
    )

    # ---- Output ----
    output_folder: str = Field(
        default=DEFAULT_OUTPUT_DIR,
        validation_alias=AliasChoices("OUTPUT_FOLDER", "outputFolder"),
    )
    log_file_name: Optional[str] = Field(
        default=DEFAULT_LOG_FILE,
        validation_alias=AliasChoices("LOG_FILE_NAME", "logFileName"),
    )

    # ---- HTTP ----
    http_max_retries: int = Field(default=10, alias="HTTP_MAX_RETRIES")
    http_retry_delay_sec: float = Field(default=0.1, alias="HTTP_RETRY_DELAY_SEC")
    http_timeout_sec: Optional[float] = Field(default=None, alias="HTTP_TIMEOUT_SEC")
    http_user_agent: str = Field(default="codeplex-discussions/1.0", alias="HTTP_USER_AGENT")


@dataclass(frozen=True)
class DownloadConfig:
    """Validated configuration for one run."""

    forums: tuple[str, ...]
    page_size: int
    output_dir: Path
    log_file: Optional[str]


def load_settings() -> DownloaderSettings:
    return DownloaderSettings()


def split_forum_names(value: Optional[str]) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(name.strip() for name in value.split(",") if name.strip())


def resolve_config(
    settings: DownloaderSettings,
    forums: Optional[str] = None,
    output_dir: Optional[str] = None,
    log_file: Optional[str] = None,
    page_size: Optional[int] = None,
) -> DownloadConfig:
    """
    Merge command line values over settings and validate the result.

    Raises:
        ConfigurationError: no forum names, non-positive page size or
            blank output directory
    """
    forum_names = split_forum_names(forums if forums is not None else settings.codeplex_forums)
    if not forum_names:
        raise ConfigurationError("At least one forum name is required (--forums or CODEPLEX_FORUMS).")

    size = page_size if page_size is not None else settings.page_size
    if size <= 0:
        raise ConfigurationError(f"Page size must be positive, got {size}.")

    out = output_dir if output_dir is not None else settings.output_folder
    if not out or not out.strip():
        raise ConfigurationError("Output directory must not be blank.")

    log_name = log_file if log_file is not None else settings.log_file_name
    if log_name is not None and not log_name.strip():
        log_name = None

    return DownloadConfig(
        forums=forum_names,
        page_size=size,
        output_dir=Path(out),
        log_file=log_name,
    )
