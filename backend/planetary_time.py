# -*- coding: utf-8 -*-
"""Planetary day and hour rulers for a local date and time."""

import datetime
import logging
from typing import Optional, Tuple

import pytz

from models import Planet

logger = logging.getLogger(__name__)

# datetime.weekday(): Monday == 0
PLANETARY_DAY_RULERS = {
    0: Planet.MOON,      # Monday
    1: Planet.MARS,      # Tuesday
    2: Planet.MERCURY,   # Wednesday
    3: Planet.JUPITER,   # Thursday
    4: Planet.VENUS,     # Friday
    5: Planet.SATURN,    # Saturday
    6: Planet.SUN        # Sunday
}

# Chaldean order
PLANET_SEQUENCE = [
    Planet.SATURN,
    Planet.JUPITER,
    Planet.MARS,
    Planet.SUN,
    Planet.VENUS,
    Planet.MERCURY,
    Planet.MOON,
]


class PlanetaryTimeManager:
    """Resolve local time in a timezone and the planets ruling it"""

    def get_timezone(self, timezone_str: Optional[str]) -> Tuple[datetime.tzinfo, str]:
        if not timezone_str:
            return pytz.UTC, "UTC"
        try:
            return pytz.timezone(timezone_str), timezone_str
        except pytz.UnknownTimeZoneError:
            logger.warning(f"Unknown timezone {timezone_str!r} - using UTC")
            return pytz.UTC, "UTC"

    def parse_datetime_with_timezone(self, date_str: str, time_str: str = "12:00",
                                     timezone_str: Optional[str] = None
                                     ) -> Tuple[datetime.datetime, datetime.datetime, str]:
        """
        Parse date and time strings in a timezone

        Returns:
            Tuple of (local_datetime, utc_datetime, timezone_used)
        """
        dt_naive = datetime.datetime.strptime(f"{date_str} {time_str}", "%Y-%m-%d %H:%M")
        tz, timezone_used = self.get_timezone(timezone_str)

        try:
            dt_local = tz.localize(dt_naive, is_dst=None)
        except pytz.AmbiguousTimeError:
            # DST "fall back" - choose the standard-time occurrence
            dt_local = tz.localize(dt_naive, is_dst=False)
            logger.warning(f"Ambiguous time {dt_naive} - using standard time")
        except pytz.NonExistentTimeError:
            # DST "spring forward" - advance by one hour
            dt_adjusted = dt_naive + datetime.timedelta(hours=1)
            dt_local = tz.localize(dt_adjusted)
            logger.warning(f"Non-existent time {dt_naive} - using {dt_adjusted}")

        return dt_local, dt_local.astimezone(pytz.UTC), timezone_used

    def current_local_time(self, timezone_str: Optional[str] = None) -> datetime.datetime:
        tz, _ = self.get_timezone(timezone_str)
        return datetime.datetime.now(pytz.UTC).astimezone(tz)

    def day_ruler(self, dt_local: datetime.datetime) -> Planet:
        return PLANETARY_DAY_RULERS[dt_local.weekday()]

    def hour_ruler(self, dt_local: datetime.datetime) -> Planet:
        """Simplified planetary hour: one planet per clock hour from midnight"""
        start_idx = PLANET_SEQUENCE.index(self.day_ruler(dt_local))
        return PLANET_SEQUENCE[(start_idx + dt_local.hour) % 7]


def day_ruler_for(date_str: Optional[str] = None, time_str: str = "12:00",
                  timezone_str: Optional[str] = None) -> Planet:
    """Day ruler for a local date, or for now when no date is given"""
    manager = PlanetaryTimeManager()
    if date_str:
        dt_local, _, _ = manager.parse_datetime_with_timezone(date_str, time_str, timezone_str)
    else:
        dt_local = manager.current_local_time(timezone_str)
    return manager.day_ruler(dt_local)
