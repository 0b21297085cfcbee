from .config import Config, env_flag

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = Config.db_config()

DEBUG = True
LOG_LEVEL = "DEBUG"

WORK_START_TIME = Config.WORK_START_TIME
LATE_GRACE_MINUTES = Config.LATE_GRACE_MINUTES
HALF_DAY_THRESHOLD_MINUTES = Config.HALF_DAY_THRESHOLD_MINUTES
STRICT_LEAVE_BALANCE = Config.STRICT_LEAVE_BALANCE

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
