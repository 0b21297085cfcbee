"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time
from decimal import Decimal

from .enums import LeaveCategory

DEFAULT_WORK_START = time(9, 0)
DEFAULT_LATE_GRACE_MINUTES = 0
STANDARD_DAY_MINUTES = 8 * 60
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_LIST_LIMIT = 200
MIN_YEAR = 1900
MAX_YEAR = 9999

DEFAULT_LEAVE_BALANCE = {
    LeaveCategory.CASUAL: 12,
    LeaveCategory.SICK: 15,
    LeaveCategory.ANNUAL: 20,
    LeaveCategory.MATERNITY: 180,
    LeaveCategory.PATERNITY: 15,
}

# Salary structure, as fractions of basic salary unless fixed.
HRA_RATE = Decimal("0.40")
DA_RATE = Decimal("0.20")
TRAVEL_ALLOWANCE = Decimal("2000")
PF_RATE = Decimal("0.12")
TAX_RATE = Decimal("0.10")
INSURANCE_PREMIUM = Decimal("500")

MONEY_QUANTUM = Decimal("0.01")
