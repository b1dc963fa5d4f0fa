from datetime import date
from pathlib import Path
from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings

import os

# Explicitly load .env for local/dev environments only if values are missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    missing_keys = {k: v for k, v in file_env.items() if k not in os.environ and v is not None}
    for k, v in missing_keys.items():
        os.environ[k] = v


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    debug: bool = Field(default=False, description="Enable debug mode")
    allowed_origins: str = Field(default="http://localhost:3000", description="CORS allowed origins")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (e.g., plain, json)")

    # Garden Calendar
    garden_start_date: date = Field(default=date(2017, 10, 27), description="Day the first flower was planted")
    garden_end_date: date = Field(default=date(2026, 2, 14), description="Last day the garden keeps growing")

    # Garden Layout
    grid_cols: int = Field(default=64, ge=1, description="Grid columns for ordinary flowers")
    grid_rows: int = Field(default=56, ge=1, description="Grid rows for ordinary flowers")
    grid_seed: int = Field(default=20201027, description="Seed for the grid shuffle")
    emoji_seed: int = Field(default=8888, description="Seed for the emoji scatter")

    @property
    def cors_origins(self) -> list:
        """Split the comma separated origin list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate singleton settings object
settings = Settings()
