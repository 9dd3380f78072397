from pydantic_settings import BaseSettings
from typing import List, Optional
from datetime import timedelta
import logging


class Settings(BaseSettings):
    ENV: str = "development"
    SECRET_KEY: str = "change-me-in-production"
    DATABASE_URL: str = "sqlite:////data/vitrina.db"
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # JWT
    JWT_ACCESS_EXPIRES_DAYS: int = 7

    # Admin (credencial fija, sin gestión de usuarios)
    ADMIN_EMAIL: str = "extremeadmin@admin.com"
    ADMIN_PASSWORD: Optional[str] = None

    # Object storage
    STORAGE_DIR: str = "/data/storage"
    STORAGE_BUCKET: str = "products"
    STORAGE_PUBLIC_URL: str = "/storage"
    MAX_UPLOAD_IMAGE_SIZE: int = 2000

    # WhatsApp: el checkout y la consulta por producto usan números distintos
    CHECKOUT_WHATSAPP_PHONE: str = "5491131889898"
    INQUIRY_WHATSAPP_PHONE: str = "595975883322"

    STORE_NAME: str = "EXTREME PERFORMANCE"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def jwt_expires_delta(self) -> timedelta:
        return timedelta(days=self.JWT_ACCESS_EXPIRES_DAYS)

    class Config:
        env_file = ".env"


settings = Settings()


def setup_logging(level: Optional[str] = None):
    """Configuración de logging de la aplicación"""
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO),
        format=log_format,
        handlers=[logging.StreamHandler()]
    )
