"""DateTime Utilities Module"""

import datetime as _dt
from zoneinfo import ZoneInfo

from kink import di

from beacon.core.config import Configuration


class DateTimeUtils:
    @staticmethod
    def timezone() -> ZoneInfo:
        """Zone of the active configuration, so a swapped config takes effect."""
        return ZoneInfo(di[Configuration].app_timezone)

    @staticmethod
    def now() -> _dt.datetime:
        """Current time in the application timezone."""
        return _dt.datetime.now(tz=DateTimeUtils.timezone())

    @staticmethod
    def isoformat(dt: _dt.datetime) -> str:
        if dt.tzinfo is None:
            msg = f'refusing to format naive datetime: {dt!r}'
            raise ValueError(msg)
        return dt.isoformat()
