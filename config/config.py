import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.environ.get(name, default)))


def env_optional_int(name: str):
    value = os.environ.get(name, "").strip()
    return int(value) if value else None


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "hrms_db")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Attendance policy
    WORK_START_TIME = os.environ.get("WORK_START_TIME", "09:00")
    LATE_GRACE_MINUTES = int(os.environ.get("LATE_GRACE_MINUTES", "0"))
    HALF_DAY_THRESHOLD_MINUTES = env_optional_int("HALF_DAY_THRESHOLD_MINUTES")

    # Leave: refuse approvals that would take a balance below zero
    STRICT_LEAVE_BALANCE = env_flag("STRICT_LEAVE_BALANCE")

    AUTO_INIT_DB = env_flag("AUTO_INIT_DB")

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
