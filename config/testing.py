import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_pro_test"),
}
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "2"))

CURRENT_EMPLOYER_NAME = os.getenv("CURRENT_EMPLOYER_NAME", "bd054")

CORS_ORIGINS = "*"
HOST = "127.0.0.1"
PORT = int(os.getenv("PORT", "3001"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
