"""Shared constants for tests."""
from datetime import date, time

# A Monday, far enough ahead that no slot is ever in the past
MONDAY = date(2031, 3, 3)
TEN_AM = time(10, 0)
