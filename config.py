# config.py
"""Application configuration for the document search engine"""
from pydantic_settings import BaseSettings
from utils.common import get_log_file_path

class Settings(BaseSettings):
    """Application configuration"""

    # Logger configuration
    LOGGER_NAME: str = "docsearch"
    LOG_FILE_PATH: str = get_log_file_path()
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./documents.db"
    DB_ECHO: bool = False

    # Vectorizer
    EMBEDDING_DIMENSIONS: int = 100

    # Indexing
    SECTION_ID_LENGTH: int = 100  # Prefix length of the short section identifier
    REPLACE_SECTIONS_ON_INDEX: bool = True  # False keeps append-only indexing

    # Search defaults
    DEFAULT_SEARCH_RESULTS: int = 5
    MAX_SEARCH_RESULTS: int = 100
    SNIPPET_LENGTH: int = 300

    # App metadata
    APP_TITLE: str = "Document Search Engine"
    APP_VERSION: str = "1.0.0"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

# Create a single settings instance to be used across the application
settings = Settings()
