"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = Field(default="", validate_default=True)  # required
    DB_MAX_POOL_SIZE: int = 10
    DB_SERVER_SELECTION_TIMEOUT: float = 5.0  # seconds

    # Media host
    CLOUDINARY_CLOUD_NAME: str | None = os.getenv("CLOUDINARY_CLOUD_NAME")
    CLOUDINARY_API_KEY: str | None = os.getenv("CLOUDINARY_API_KEY")
    CLOUDINARY_API_SECRET: str | None = os.getenv("CLOUDINARY_API_SECRET")
    CLOUDINARY_UPLOAD_FOLDER: str = "DevEvent"
    CLOUDINARY_UPLOAD_URL: str = "https://api.cloudinary.com/v1_1"
    UPLOAD_TIMEOUT: float = 30.0

    # Application
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # File limits
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB

    class Config:
        env_file = ".env"

    @field_validator("DATABASE_URL")
    @classmethod
    def require_database_url(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError('Invalid/Missing environment variable: "DATABASE_URL"')
        return value.strip()

settings = Settings()
