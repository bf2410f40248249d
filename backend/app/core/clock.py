"""Time source dependency.

Validity decisions read the current time through a ``Clock`` so that the
API can be exercised against fixed instants.
"""

from collections.abc import Callable
from datetime import datetime

from app.models.shared import utc_now

Clock = Callable[[], datetime]


def get_clock() -> Clock:
    return utc_now
