import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="BILLED_", extra="ignore")

    store_backend: str = "memory"
    api_url: str = "http://localhost:5678"

    session_path: str = "./.billed-session.json"

    upload_timeout: float = 10.0  # seconds
    submit_timeout: float = 10.0
    list_timeout: float = 10.0

    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
