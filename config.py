"""Configuration and environment settings"""

from pydantic_settings import BaseSettings
from pathlib import Path


class Settings(BaseSettings):
    """Application configuration"""

    # Preview
    PREVIEW_LIMIT: int = 100  # rows kept in ParsedTable.preview_rows

    # Encoding detection
    ENCODING_SAMPLE_BYTES: int = 8192  # only the head of a file is inspected
    ENCODING_STRATEGY: str = "heuristic"  # heuristic | chardet
    CHARDET_CONFIDENCE_THRESHOLD: float = 0.7

    # Delimited text
    CSV_DELIMITER: str = ","

    # Export
    EXPORT_DIR: str = "./output"

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    def get_export_path(self, file_name: str = "") -> Path:
        """Get export file path, creating the export directory"""
        path = Path(self.EXPORT_DIR)
        path.mkdir(parents=True, exist_ok=True)
        return path / file_name


settings = Settings()
