from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    RESET_DB: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # "mock" keeps uploads in memory, "s3" talks to a bucket
    MEDIA_BACKEND: str = "mock"
    MEDIA_FOLDER: str = "catalog"
    MEDIA_PUBLIC_BASE_URL: Optional[str] = None
    S3_BUCKET: Optional[str] = None
    S3_REGION: str = "us-east-1"
    S3_ENDPOINT_URL: Optional[str] = None
    # e.g. "public-read"; leave unset when a bucket policy or CDN serves the objects
    S3_OBJECT_ACL: Optional[str] = None
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None

    MAX_IMAGE_BYTES: int = 2 * 1024 * 1024

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
