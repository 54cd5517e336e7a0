import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_pro"),
}
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))

CURRENT_EMPLOYER_NAME = os.getenv("CURRENT_EMPLOYER_NAME", "bd054")

# Comma-separated list of allowed front-end origins.
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
