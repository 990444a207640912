"""
Credential Domain Enums
"""

from enum import Enum


class SessionEviction(str, Enum):
    """Which session records the window drops first when it is full"""

    recency = "recency"
    inactive_first = "inactive_first"
