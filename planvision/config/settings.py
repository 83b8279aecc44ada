from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pdfplumber"
    render_engine: str = "pymupdf"
    render_scale: float = 1.5

    max_text_chars: int = 100_000
    max_page_bytes: int = 4 * 1024 * 1024
    max_image_dimension: int = 2000
    jpeg_quality: int = 85
    retry_jpeg_quality: int = 80

    max_pages_per_document: int = 10
    max_batch_pages: int = 20
    max_file_size_mb: int = 50
    max_files_per_upload: int = 10
    stop_at_batch_cap: bool = False

    ingest_workers: int = 4
    temp_dir: str | None = None

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024
