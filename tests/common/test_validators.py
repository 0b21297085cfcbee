import pytest

from hrms.common.validators import require_month
from hrms.core.exceptions import ValidationError


def test_require_month_coerces_strings():
    assert require_month("2", "2024") == (2, 2024)


@pytest.mark.parametrize(
    "month,year",
    [(0, 2024), (13, 2024), (2, 0), (2, 10000), ("feb", 2024), (2, None)],
)
def test_require_month_rejects_bad_period(month, year):
    with pytest.raises(ValidationError):
        require_month(month, year)
