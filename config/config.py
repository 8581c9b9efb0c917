import os


TRUE_VALUES = {"1", "true", "yes", "on", "y"}


def env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in TRUE_VALUES


def env_list(name: str, default: str = "") -> list:
    return [o.strip() for o in os.environ.get(name, default).split(",") if o.strip()]


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "timecard-dev-secret"

    # Storage: "mysql" keeps the sheets in MySQL, "memory" keeps them in-process.
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "mysql")

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "timecard_db")

    SESSION_TTL_HOURS = float(os.environ.get("SESSION_TTL_HOURS", "8"))
    ALLOWED_ORIGINS = env_list("ALLOWED_ORIGINS")
    ARCHIVE_APPROVED_CARDS = env_flag("ARCHIVE_APPROVED_CARDS", "1")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    AUTO_INIT_DB = env_flag("AUTO_INIT_DB")
    AUTO_SEED_DB = env_flag("AUTO_SEED_DB")

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
