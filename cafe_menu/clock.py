#!/usr/bin/env python3
"""Wall clock used by the monitor, replaceable in tests."""

from datetime import date, datetime, time
from typing import Optional

import dateutil.tz


class Clock:
    def __init__(self, timezone: Optional[str] = None):
        tz = dateutil.tz.gettz(timezone) if timezone else None
        if timezone and tz is None:
            raise ValueError(f"Unknown timezone: {timezone}")
        self.tz = tz or dateutil.tz.tzlocal()

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def now_time(self) -> time:
        return self.now().time().replace(tzinfo=None)

    def today(self) -> date:
        return self.now().date()


class FixedClock(Clock):
    def __init__(self, moment: datetime):
        self.tz = moment.tzinfo
        self.moment = moment

    def now(self) -> datetime:
        return self.moment
