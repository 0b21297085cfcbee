import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hrms_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

WORK_START_TIME = "09:00"
LATE_GRACE_MINUTES = 0
HALF_DAY_THRESHOLD_MINUTES = None
STRICT_LEAVE_BALANCE = False

AUTO_INIT_DB = False
