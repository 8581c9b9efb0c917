import os

from .config import Config, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

STORAGE_BACKEND = Config.STORAGE_BACKEND
DB_CONFIG = Config.db_config()

SESSION_TTL_HOURS = Config.SESSION_TTL_HOURS
ALLOWED_ORIGINS = Config.ALLOWED_ORIGINS or ["http://localhost:3000"]
ARCHIVE_APPROVED_CARDS = Config.ARCHIVE_APPROVED_CARDS
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed demo employees on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
