"""Age helpers shared by every calculator."""

from datetime import date
from typing import Optional


def age_on(birthday: date, as_of: Optional[date] = None) -> int:
    """Whole years between ``birthday`` and ``as_of`` (today by default)."""
    as_of = as_of or date.today()
    age = as_of.year - birthday.year
    if (as_of.month, as_of.day) < (birthday.month, birthday.day):
        age -= 1
    return age
