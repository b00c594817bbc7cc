"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Rendering
    default_cell_size: int = Field(default=5, description="Default on-screen cell size in pixels")
    min_cell_size: int = Field(default=2, description="Smallest accepted cell size")
    max_cell_size: int = Field(default=8, description="Largest accepted cell size")
    default_high_res: bool = Field(default=False, description="Use the high-res tier by default")

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Log format (json or console)")

    class Config:
        env_file = ".env"
        env_prefix = "TOTEM_"


settings = Settings()
