"""
Common utilities for Nexus Cache.
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r"^(?:(\d+)d)?(?:(\d+)h)?(?:(\d+)m)?(?:(\d+)s)?$")


def parseDuration(durationStr: str) -> int:
    """
    Parse duration string to seconds.

    Args:
        durationStr: String in one of formats:
            1. `DDdHHhMMmSSs` (e.g., "1d2h30m15s") - each section is optional but at least one must be present
            2. `HH:MM[:SS]` (e.g., "2:30" or "2:30:15")
            3. Plain number of seconds (e.g., "300")

    Returns:
        Total duration in seconds as integer.

    Raises:
        ValueError: If the string doesn't match any supported format.
    """
    durationStr = durationStr.strip().lower()

    if durationStr.isdigit():
        return int(durationStr)

    match = _DURATION_RE.match(durationStr)
    if match and any(match.groups()):
        days, hours, minutes, seconds = (int(part) if part else 0 for part in match.groups())
        return days * 24 * 3600 + hours * 3600 + minutes * 60 + seconds

    timeParts = durationStr.split(":")
    if 2 <= len(timeParts) <= 3:
        try:
            hours = int(timeParts[0])
            minutes = int(timeParts[1])
            seconds = int(timeParts[2]) if len(timeParts) == 3 else 0

            if 0 <= minutes < 60 and 0 <= seconds < 60:
                return hours * 3600 + minutes * 60 + seconds
        except ValueError:
            pass  # Will raise ValueError at end

    raise ValueError(
        f"Invalid duration format: {durationStr}. Expected formats: '[DDd][HHh][MMm][SSs]', 'HH:MM[:SS]' or seconds"
    )


def toSeconds(value: Any) -> float:
    """
    Convert config value (number or duration string) to seconds.

    Raises:
        ValueError: If value is neither a number nor a valid duration string
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration value: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return float(parseDuration(value))
    raise ValueError(f"Invalid duration value: {value!r}")


_TRUE_STRINGS = frozenset(("true", "yes", "on", "1"))
_FALSE_STRINGS = frozenset(("false", "no", "off", "0"))


def toBool(value: Any) -> bool:
    """
    Convert config flag to bool.

    Strings come from ${VAR} substitution, so "true"/"false", "yes"/"no",
    "on"/"off" and "1"/"0" are accepted in any case.

    Raises:
        ValueError: If value is neither a bool nor a known flag string
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        flag = value.strip().lower()
        if flag in _TRUE_STRINGS:
            return True
        if flag in _FALSE_STRINGS:
            return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def jsonDumps(data: Any, compact: Optional[bool] = None, **kwargs) -> str:
    dumpKwargs = {
        "ensure_ascii": False,
        "default": str,
        "sort_keys": True,
    }

    if compact is None:
        # If indent is passed, then user want pretty-printed JSON,
        #  no need to use compact separators
        compact = "indent" not in kwargs

    if compact:
        dumpKwargs["separators"] = (",", ":")
    dumpKwargs.update(kwargs)
    return json.dumps(data, **dumpKwargs)


def load_dotenv(path: str = ".env", populateEnv: bool = True) -> Dict[str, str]:
    """
    Simple dotenv file loader.
    Read file line by line and put key-value pairs into dictionary.
    Missing file is not an error, empty dict is returned.

    Args:
        path: Path to .env file (default ".env")
        populateEnv: Whether to populate environment variables (default True),
            already set variables are not overridden

    Returns:
        Dictionary of key-value pairs from .env file
    """
    ret: Dict[str, str] = {}
    envPath = Path(path)
    if not envPath.is_file():
        logger.debug(f"No .env file at {path}")
        return ret

    with open(envPath, "rt") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            ret[key.strip()] = value.strip().strip('"')

    if populateEnv:
        for k, v in ret.items():
            os.environ.setdefault(k, v)
    return ret
