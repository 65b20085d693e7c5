"""
Application Configuration
Loads settings from environment variables
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from .env file"""

    # Application
    APP_ENV: str = "development"
    APP_NAME: str = "Certificate Pro"
    APP_URL: str = "http://localhost:8000"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Database (Supabase Postgres in production)
    DATABASE_URL: str = "sqlite:///./certificates.db"

    # Admin endpoints are open when no key is configured
    ADMIN_API_KEY: Optional[str] = None

    # Cloudinary (template storage + text overlay rendering)
    CLOUDINARY_CLOUD_NAME: str = "demo"
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    CLOUDINARY_UPLOAD_FOLDER: str = "certificate-templates"

    # Email: "resend" or "smtp"
    EMAIL_PROVIDER: str = "resend"
    RESEND_API_KEY: Optional[str] = None
    RESEND_FROM_EMAIL: str = "certificates@yourdomain.com"
    RESEND_API_URL: str = "https://api.resend.com/emails"
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    EMAIL_FROM: str = "certificates@yourdomain.com"

    # File Upload
    MAX_UPLOAD_SIZE: int = 5242880  # 5MB
    ALLOWED_IMAGE_TYPES: str = "image/jpeg,image/png,image/jpg"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Create global settings instance
settings = Settings()
