"""Application configuration using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
NotebookBackend = Literal["file", "sql"]
RankingName = Literal["create_time", "lookup_times"]


class Settings(BaseSettings):
    """Application settings, configurable via environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_prefix="VOCABNOTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    data_dir: Path = Path.home() / ".config" / "vocabnote"
    notebook_path: Path | None = None
    database_url: str = ""

    # Logging
    log_level: LogLevel = "WARNING"
    log_file_enabled: bool = False
    log_file_path: Path | None = None
    log_file_max_bytes: int = 10 * 1024 * 1024  # 10 MB
    log_file_backup_count: int = 5

    @property
    def resolved_log_file_path(self) -> Path:
        """Return log file path, defaulting to data_dir/vocabnote.log if not set."""
        return self.log_file_path or self.data_dir / "vocabnote.log"

    @property
    def notebook_dir(self) -> Path:
        """Directory holding one chapter file per chapter (file backend)."""
        return self.notebook_path or self.data_dir / "notebook"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "vocabnote.db"

    @property
    def resolved_database_url(self) -> str:
        """Return the SQLAlchemy URL, defaulting to SQLite under data_dir."""
        return self.database_url or f"sqlite+aiosqlite:///{self.db_path}"

    # Dictionary
    dict_endpoint: str = "youdao"
    http_timeout: float = 10.0

    # Notebook
    notebook_backend: NotebookBackend = "file"
    chapter: str = "default"
    ranking: RankingName = "create_time"

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4.1-mini"
    openai_timeout: float = 60.0

    # Merriam-Webster Collegiate API
    mwebster_api_key: str = ""

    # ECDICT offline dictionary (stardict.db)
    ecdict_path: Path | None = None

    @property
    def resolved_ecdict_path(self) -> Path:
        return self.ecdict_path or self.data_dir / "stardict.db"

    # Lookup cache
    cache_enabled: bool = True
    cache_ttl_days: int = 30
    cache_not_found_ttl_days: int = 7

    # Raw-text lookup server
    server_host: str = "0.0.0.0"  # noqa: S104
    server_port: int = 8080
    server_root: str = "dict"


settings = Settings()
