from __future__ import annotations

import sys

MINIMUM_PYTHON = (3, 11)
MISSING_BROWSER_HINT = "Chromium not installed. Run: python -m playwright install chromium"

_MISSING_BROWSER_ERROR_HINTS = (
    "executable doesn't exist",
    "executable does not exist",
    "download new browsers",
    "playwright install",
    "could not find browser",
    "failed to launch chromium because executable",
)


def is_missing_browser_error(exc: Exception) -> bool:
    message = str(exc).lower()
    return any(hint in message for hint in _MISSING_BROWSER_ERROR_HINTS)


def ensure_supported_python(version_info: tuple[int, ...] | None = None) -> None:
    current = tuple(version_info or sys.version_info[:3])
    if current[:2] < MINIMUM_PYTHON:
        raise SystemExit(
            "smartlocator requires Python 3.11+. "
            f"Current interpreter: {sys.executable} (Python {'.'.join(str(part) for part in current)})"
        )
