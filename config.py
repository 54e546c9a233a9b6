import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./app.db")
    DB_CREATE_TABLES = bool(data.get("DB_CREATE_TABLES", 1))
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", 0))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    LOG_FORMAT = data.get("LOG_FORMAT", "text")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRE_MINUTES", 15))
    REFRESH_TOKEN_EXPIRE_DAYS = int(data.get("REFRESH_TOKEN_EXPIRE_DAYS", 7))
    REFRESH_COOKIE_NAME = data.get("REFRESH_COOKIE_NAME", "refreshToken")
    REFRESH_COOKIE_SECURE = bool(data.get("REFRESH_COOKIE_SECURE", True))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    STORAGE_ROOT = data.get("STORAGE_ROOT", os.path.join(ROOT_PATH, "storage"))
    MAX_UPLOAD_BYTES = int(data.get("MAX_UPLOAD_BYTES", 50 * 1024 * 1024))
    VERSION_CONFLICT_RETRIES = int(data.get("VERSION_CONFLICT_RETRIES", 5))
