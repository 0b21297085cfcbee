import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = Config.db_config()

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

WORK_START_TIME = Config.WORK_START_TIME
LATE_GRACE_MINUTES = Config.LATE_GRACE_MINUTES
HALF_DAY_THRESHOLD_MINUTES = Config.HALF_DAY_THRESHOLD_MINUTES
STRICT_LEAVE_BALANCE = Config.STRICT_LEAVE_BALANCE

AUTO_INIT_DB = Config.AUTO_INIT_DB
