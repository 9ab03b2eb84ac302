"""Timestamp convention.

Every stored timestamp is naive local time. Values that arrive with an offset
(``...Z``, ``+02:00``) are converted to local time and stripped, so stored
rows stay comparable with each other and with the ISO strings used in
date-window queries.
"""

from datetime import datetime


def as_local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)
