"""Credit qualification decision."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

QUALIFYING_INCOME = Decimal('20000')
LIMIT_RATE = Decimal('0.10')
MAX_CREDIT_LIMIT = Decimal('5000')

QUALIFIED_MESSAGE = ('Congratulations! You are qualified for a credit line. '
                     'A credit card will be sent to you in the mail.')
DECLINED_MESSAGE = "We're sorry, you do not qualify for a credit line at this time."


@dataclass(frozen=True)
class Qualification:
    qualified: bool
    credit_limit: Decimal
    message: str


def credit_limit_for(gross_income) -> Decimal:
    """10% of annual income rounded to whole dollars, capped at 5000."""
    limit = (Decimal(str(gross_income)) * LIMIT_RATE).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    return min(limit, MAX_CREDIT_LIMIT)


def qualify(gross_income) -> Qualification:
    """Decide qualification from declared gross income alone."""
    income = Decimal(str(gross_income))
    if income >= QUALIFYING_INCOME:
        return Qualification(True, credit_limit_for(income), QUALIFIED_MESSAGE)
    return Qualification(False, Decimal('0'), DECLINED_MESSAGE)
