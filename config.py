import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./credentials.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Access tokens
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ISSUER = data.get("JWT_ISSUER", "credential-service")
    JWT_AUDIENCE = data.get("JWT_AUDIENCE", "credential-service-clients")
    ACCESS_TOKEN_MINUTES = int(data.get("ACCESS_TOKEN_MINUTES", 15))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))

    # Session (refresh) tokens
    REFRESH_TOKEN_DAYS = int(data.get("REFRESH_TOKEN_DAYS", 7))
    MAX_SESSIONS_PER_ACCOUNT = int(data.get("MAX_SESSIONS_PER_ACCOUNT", 20))
    SESSION_EVICTION = data.get("SESSION_EVICTION", "inactive_first")
    MAX_WRITE_ATTEMPTS = int(data.get("MAX_WRITE_ATTEMPTS", 3))

    # Refresh cookie
    REFRESH_COOKIE_NAME = data.get("REFRESH_COOKIE_NAME", "tm_refresh")
    COOKIE_SECURE = bool(data.get("COOKIE_SECURE", False))
    COOKIE_SAMESITE = data.get("COOKIE_SAMESITE", "lax")
