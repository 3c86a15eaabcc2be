from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from typing import Optional

load_dotenv()


class Settings(BaseSettings):
    # Template settings (None = bundled templates only)
    template_dir: Optional[str] = None

    # Asset settings
    assets_url: str = "/static/cms-admin/"

    # Plugin declarations
    plugins_config_file: str = "data/plugins_config.json"

    # Logging settings
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
