"""Logging utilities for mazechase rounds.

Provides color-coded console output so round events (power mode, deaths,
round end) stand out from routine loop messages.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for event types
    BLUE = "\033[94m"      # Deterministic simulation steps (planning, movement)
    YELLOW = "\033[93m"    # Power mode transitions
    RED = "\033[91m"       # Life lost, game over, degenerate fallbacks
    GREEN = "\033[92m"     # Round complete, adversary eaten
    CYAN = "\033[96m"      # Info/metadata

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if MAZECHASE_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("MAZECHASE_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def log_deterministic(message: str) -> None:
    """Log a deterministic simulation step (blue)."""
    print(colored(f"{LOG_TAG_DETERMINISTIC} {message}", Color.BLUE))


def log_power(message: str) -> None:
    """Log a power mode transition (yellow)."""
    print(colored(f"{LOG_TAG_POWER} {message}", Color.YELLOW))


def log_error(message: str) -> None:
    """Log a life loss or handled fallback (red)."""
    print(colored(f"{LOG_TAG_ERROR} {message}", Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(f"{LOG_TAG_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(f"{LOG_TAG_INFO} {message}", Color.CYAN))


def pathing_debug_enabled() -> bool:
    """Return True when MAZECHASE_DEBUG_PATHING asks for pathfinder fallback logs."""
    return os.getenv("MAZECHASE_DEBUG_PATHING", "").lower() in ("1", "true", "yes")


# Markers for event types (color-blind accessible)
LOG_TAG_DETERMINISTIC = "[•]"
LOG_TAG_POWER = "[⚡]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"
