"""
config.py

Centralized configuration management using pydantic-settings.
All modules must import settings from this file.
Direct os.getenv() calls are prohibited elsewhere.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings loaded from .env file."""

    # Database
    mysql_host: str = "127.0.0.1"
    mysql_port: int = 3306
    mysql_user: str = "clinic"
    mysql_password: str = ""
    mysql_db: str = "clinic_vitals"

    # LLM (Gemini)
    google_api_key: str = ""
    llm_model: str = "gemini-2.0-flash"
    soap_note_max_tokens: int = 768
    analytics_max_tokens: int = 1024
    llm_temperature: float = 0.3

    # Vitals history window used for trends
    vitals_history_limit: int = 20

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()
