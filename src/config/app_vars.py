import os

PIKNDEL_BASE_URL = os.getenv("PIKNDEL_BASE_URL", "https://api.pikndel.com").rstrip("/")
PIKNDEL_SOURCE = int(os.getenv("PIKNDEL_SOURCE", 3))
PIKNDEL_USERNAME = os.getenv("PIKNDEL_USERNAME")
PIKNDEL_PASSWORD = os.getenv("PIKNDEL_PASSWORD")
PIKNDEL_WEBHOOK_SECRET = os.getenv("PIKNDEL_WEBHOOK_SECRET")

# Outbound request timeout in seconds
PIKNDEL_REQUEST_TIMEOUT = float(os.getenv("PIKNDEL_REQUEST_TIMEOUT", 15))

DB_HOST = os.getenv("DB_HOST")
DB_NAME = os.getenv("DB_NAME")
DB_USER = os.getenv("DB_USER")
DB_PASS = os.getenv("DB_PASS")
DB_PORT = int(os.getenv("DB_PORT", 5432))

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL and DB_HOST:
    DATABASE_URL = (
        f"postgresql+psycopg://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    )

PORT = int(os.getenv("PORT", 3000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SERVICE_NAME = "pikndel-integration"
