"""Pure parsing helpers for profile URLs and video durations."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

# Returned for durations with hour or day units so they always clear the
# short-form threshold.
LONG_DURATION_SENTINEL = 61

_MINUTES_SECONDS_PATTERN = re.compile(r"^PT(?:(\d+)M)?(?:(\d+)S)?$")
_LONG_UNIT_PATTERN = re.compile(r"\d+[HD]")


class ProfileUrlShape(str, Enum):
    """Recognised shapes of a YouTube channel profile URL."""

    CHANNEL_ID = "channel_id"
    USERNAME = "username"
    HANDLE = "handle"
    CUSTOM_NAME = "custom_name"


# Evaluated in order, first match wins.
PROFILE_URL_PATTERNS: list[tuple[ProfileUrlShape, re.Pattern[str]]] = [
    (ProfileUrlShape.CHANNEL_ID, re.compile(r"/channel/([a-zA-Z0-9_-]+)")),
    (ProfileUrlShape.USERNAME, re.compile(r"/user/([a-zA-Z0-9_-]+)")),
    (ProfileUrlShape.HANDLE, re.compile(r"/@([a-zA-Z0-9_.-]+)")),
    (ProfileUrlShape.CUSTOM_NAME, re.compile(r"/c/([a-zA-Z0-9_-]+)")),
]


@dataclass(frozen=True)
class ProfileUrlMatch:
    """The shape a profile URL matched and the value extracted from it."""

    shape: ProfileUrlShape
    value: str


def match_profile_url(url: str | None) -> ProfileUrlMatch | None:
    """
    Match a profile URL against the known shapes in priority order.

    Args:
        url: Channel profile URL as entered in the channel source

    Returns:
        The first matching shape and its captured value, or None
    """
    if not url:
        return None

    for shape, pattern in PROFILE_URL_PATTERNS:
        match = pattern.search(url)
        if match:
            return ProfileUrlMatch(shape=shape, value=match.group(1))
    return None


def parse_duration_seconds(duration: object) -> int:
    """
    Convert an ISO 8601 video duration into seconds.

    Only minute/second encodings are converted exactly. Encodings with hour
    or day units return LONG_DURATION_SENTINEL. Anything missing or
    unparseable returns 0, which the short-form filter treats as unknown.

    Args:
        duration: ISO 8601 duration such as "PT4M13S"

    Returns:
        Duration in seconds
    """
    if not isinstance(duration, str) or not duration:
        return 0

    value = duration.strip().upper()
    if _LONG_UNIT_PATTERN.search(value):
        return LONG_DURATION_SENTINEL

    match = _MINUTES_SECONDS_PATTERN.match(value)
    if not match:
        return 0

    minutes = int(match.group(1) or 0)
    seconds = int(match.group(2) or 0)
    return minutes * 60 + seconds


def is_short_form_duration(duration_seconds: int | None, max_seconds: int = 60) -> bool:
    """Whether a known duration falls in the short-form range (0, max_seconds]."""
    if not duration_seconds:
        return False
    return 0 < duration_seconds <= max_seconds


def has_title_marker(title: str, marker: str) -> bool:
    """Case-insensitive substring check of a title marker such as '#shorts'."""
    if not marker:
        return False
    return marker.lower() in (title or "").lower()
