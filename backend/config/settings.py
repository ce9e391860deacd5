# backend/config/settings.py
import os
from urllib.parse import quote_plus
from dotenv import load_dotenv

load_dotenv()

DEV_JWT_SECRET = "dev-only-change-me"


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _database_url() -> str:
    url = os.getenv("DATABASE_URL", "").strip()
    if url:
        return url

    host = os.getenv("DB_HOST", "").strip()
    name = os.getenv("DB_NAME", "").strip()
    user = os.getenv("DB_USER", "").strip()
    password = os.getenv("DB_PASSWORD", "").strip()
    port = os.getenv("DB_PORT", "1433").strip()

    if all([host, name, user, password]):
        odbc_str = (
            "DRIVER=ODBC Driver 17 for SQL Server;"
            f"SERVER={host},{port};"
            f"DATABASE={name};"
            f"UID={user};"
            f"PWD={password};"
            "Encrypt=yes;"
            "TrustServerCertificate=yes;"
            "Connection Timeout=30;"
        )
        return "mssql+pyodbc:///?odbc_connect=" + quote_plus(odbc_str)

    return "sqlite:///./b2b_directory.db"


class Settings:
    """Process-wide configuration read from the environment (and `.env`)."""

    def __init__(self):
        self.database_url = _database_url()
        self.sql_echo = _flag("SQL_ECHO")

        self.jwt_secret = os.getenv("JWT_SECRET", DEV_JWT_SECRET)
        self.jwt_algorithm = os.getenv("JWT_ALGORITHM", "HS256")
        self.jwt_expire_days = int(os.getenv("JWT_EXPIRE_DAYS", "30"))
        self.bcrypt_rounds = int(os.getenv("BCRYPT_ROUNDS", "12"))

        self.allow_anonymous_admin_console = _flag("ALLOW_ANONYMOUS_ADMIN_CONSOLE", "true")

        self.cors_origins = [
            o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
        ] or ["*"]
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

        self.cloudinary_cloud_name = os.getenv("CLOUDINARY_CLOUD_NAME")
        self.cloudinary_api_key = os.getenv("CLOUDINARY_API_KEY")
        self.cloudinary_api_secret = os.getenv("CLOUDINARY_API_SECRET")
        self.media_max_bytes = int(os.getenv("MEDIA_MAX_BYTES", str(10 * 1024 * 1024)))

    @property
    def uses_dev_secret(self) -> bool:
        return self.jwt_secret == DEV_JWT_SECRET

    @property
    def cloudinary_configured(self) -> bool:
        return all([self.cloudinary_cloud_name, self.cloudinary_api_key, self.cloudinary_api_secret])


settings = Settings()
