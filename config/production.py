import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORAGE_BACKEND = Config.STORAGE_BACKEND
DB_CONFIG = Config.db_config()

SESSION_TTL_HOURS = Config.SESSION_TTL_HOURS
ALLOWED_ORIGINS = Config.ALLOWED_ORIGINS
ARCHIVE_APPROVED_CARDS = Config.ARCHIVE_APPROVED_CARDS
LOG_LEVEL = Config.LOG_LEVEL

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
