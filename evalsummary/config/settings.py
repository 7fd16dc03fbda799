import tempfile
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "127.0.0.1"
    port: int = 3001
    cors_allow_origins: list[str] = ["*"]

    max_upload_bytes: int = 10 * 1024 * 1024
    direct_recommended_bytes: int = 5 * 1024 * 1024
    upload_dir: Path = Path(tempfile.gettempdir()) / "uploads"

    pdf_backends: list[str] = [
        "pdfplumber",
        "pymupdf",
        "pdfplumber_pages",
        "literal_scan",
        "text_operator_scan",
    ]
    pdf_min_text_length: int = 100

    cleaner_max_length: int = 100_000
    cleaner_comment_sections: bool = False
    cleaner_boilerplate_patterns: list[str] = [
        r"^(?:student )?course evaluations?(?: report| results| summary)?$",
        r"^confidential\b.{0,60}$",
        r"^(?:printed|generated|report generated) (?:on|at)\b.{0,60}$",
        r"^(?:office of|university of|college of|school of)\b.{0,60}$",
    ]

    # None picks the key prefix of summarization_provider.
    credential_prefix: str | None = None
    credential_min_length: int = 20

    summarization_provider: str = "anthropic"
    summarization_temperature: float = 0.3
    summarization_max_tokens: int = 2000
    summarization_document_max_tokens: int = 4000
    summarization_timeout_seconds: int = 120

    anthropic_base_url: str = "https://api.anthropic.com"
    anthropic_model_name: str = "claude-3-5-sonnet-20241022"
    anthropic_version: str = "2023-06-01"

    openai_model_name: str = "gpt-4o-mini"
    openai_compatible_base_url: str = ""
    openai_compatible_model_name: str = ""

    client_server_url: str = "http://127.0.0.1:3001"
    client_timeout_seconds: int = 120
    client_compression_threshold_bytes: int = 5 * 1024 * 1024
