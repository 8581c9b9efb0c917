from .config import Config

SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"
DB_CONFIG = Config.db_config()

SESSION_TTL_HOURS = 8
ALLOWED_ORIGINS = ["http://localhost:3000"]
ARCHIVE_APPROVED_CARDS = True
LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
