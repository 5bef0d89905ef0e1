from .relay_logger import RelayLogger
from .timestamps import utc_now_iso

__all__ = ["RelayLogger", "utc_now_iso"]
