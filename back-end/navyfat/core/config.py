"""
Application Configuration
=========================
Uses pydantic-settings to load environment variables into a typed Settings object.
STANDARDS_PATH is the most important setting — it tells the app which
body-composition standards document to load at startup.
"""

from pathlib import Path

from pydantic_settings import BaseSettings

# The standards document shipped with the package
DEFAULT_STANDARDS_PATH = Path(__file__).resolve().parent.parent / "data" / "standards.json"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    The .env file is automatically read thanks to the model_config below.
    """

    # Path to the standards JSON document (meta + presets)
    STANDARDS_PATH: Path = DEFAULT_STANDARDS_PATH

    # Presets judged on every calculation, in display order
    PRESET_IDS: list[str] = ["Navy_2025-01", "Marines_2025-01"]

    # Application metadata
    APP_NAME: str = "Navy Method Body Fat Check"
    APP_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    model_config = {"env_file": ".env", "extra": "ignore"}


# Singleton instance — import this everywhere you need settings
settings = Settings()
