"""Reference clock for booking rules (naive local wall-clock time)"""

from datetime import datetime
from typing import Callable

Clock = Callable[[], datetime]


def get_clock() -> Clock:
    """Dependency hook so tests can pin "now" """
    return datetime.now
