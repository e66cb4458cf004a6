# recruitment/core/config.py
from decouple import config
from enum import Enum
from pathlib import Path


class DatabaseType(Enum):
    SQLITE = 'sqlite'
    POSTGRES = 'postgresql'


class Settings:
    # Project Settings
    PROJECT_NAME = config('PROJECT_NAME', default='Recruitment Platform')
    VERSION = config('VERSION', default='1.0.0')
    DEBUG = config('DEBUG', default=False, cast=bool)
    LOG_LEVEL = config('LOG_LEVEL', default='INFO')
    PORT = config('PORT', default=4000, cast=int)

    # Database
    DATABASE_URL = config('DATABASE_URL', default='sqlite:///./recruitment.db')

    # Token signing
    JWT_SECRET = config('JWT_SECRET', default='change_me_in_production')
    JWT_ALGORITHM = config('JWT_ALGORITHM', default='HS256')
    JWT_EXPIRES_DAYS = config('JWT_EXPIRES_DAYS', default=7, cast=int)
    RESET_TOKEN_EXPIRES_MINUTES = config('RESET_TOKEN_EXPIRES_MINUTES', default=60, cast=int)

    # SMTP Settings
    SMTP_HOST = config('SMTP_HOST', default='')
    SMTP_PORT = config('SMTP_PORT', default=587, cast=int)
    SMTP_USER = config('SMTP_USER', default='')
    SMTP_PASSWORD = config('SMTP_PASSWORD', default='')
    SMTP_FROM = config('SMTP_FROM', default='no-reply@recruitment.local')

    # Backblaze B2 Settings
    B2_APPLICATION_KEY_ID = config('B2_APPLICATION_KEY_ID', default='')
    B2_APPLICATION_KEY = config('B2_APPLICATION_KEY', default='')
    B2_BUCKET_ID = config('B2_BUCKET_ID', default='')
    B2_BUCKET_NAME = config('B2_BUCKET_NAME', default='')
    B2_API_BASE = config('B2_API_BASE', default='https://api.backblazeb2.com')
    UPLOAD_MAX_BYTES = config('UPLOAD_MAX_BYTES', default=5 * 1024 * 1024, cast=int)

    # Front end
    FRONTEND_URL = config('FRONTEND_URL', default='http://localhost:5173')

    # Feature Flags
    COMPANY_REQUIRES_APPROVAL = config('COMPANY_REQUIRES_APPROVAL', default=True, cast=bool)

    # Seed admin
    ADMIN_EMAIL = config('ADMIN_EMAIL', default='admin@recruitment.local')
    ADMIN_PASSWORD = config('ADMIN_PASSWORD', default='')

    # Define the base directory for your project
    BASE_DIR = Path(__file__).resolve().parents[2]

    # Directory paths
    LOGS_DIR = Path(config('LOGS_DIR', default=str(BASE_DIR / "logs")))

    @property
    def DATABASE_TYPE(self) -> str:
        return self.DATABASE_URL.split(':', 1)[0].split('+', 1)[0]

    @property
    def SMTP_CONFIGURED(self) -> bool:
        return bool(self.SMTP_HOST and self.SMTP_USER and self.SMTP_PASSWORD)


# Initialize settings
settings = Settings()
