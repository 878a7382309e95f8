import re
from typing import Optional

DEFAULT_RANGE_SECONDS = 3600
MAX_RANGE_SECONDS = 43200

_DURATION_RE = re.compile(r'^(\d+)([mh])$', re.IGNORECASE)


def parse_duration(text: str) -> Optional[int]:
    """Parse '30m' or '2h' into seconds. Anything else gives None."""
    match = _DURATION_RE.match((text or '').strip())
    if not match:
        return None
    num = int(match.group(1))
    return num * 3600 if match.group(2).lower() == 'h' else num * 60


def validate_range(seconds: Optional[int], max_seconds: int = MAX_RANGE_SECONDS) -> bool:
    return seconds is not None and 0 < seconds <= max_seconds
