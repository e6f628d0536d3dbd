"""
mazechase Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

from .schemas import GameSettings

# Load .env file if it exists
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_optional_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


class Config:
    """Application configuration loaded from environment variables."""

    # Maze configuration
    # Layout name resolved by LayoutLoader; "classic" uses the built-in layout
    LAYOUT: str = os.getenv("MAZECHASE_LAYOUT", "classic")
    PORTALS_ENABLED: bool = _env_bool("MAZECHASE_PORTALS_ENABLED", "true")

    # Round configuration
    STARTING_LIVES: int = int(os.getenv("MAZECHASE_LIVES", "3"))
    POWER_SECONDS: float = float(os.getenv("MAZECHASE_POWER_SECONDS", "8.0"))
    # Seconds to wait before restarting after game over. Unset disables auto-restart.
    AUTO_RESTART_SECONDS: float | None = _env_optional_float("MAZECHASE_AUTO_RESTART")

    # Randomness for frightened adversaries. Unset means nondeterministic.
    SEED: int | None = int(os.environ["MAZECHASE_SEED"]) if os.getenv("MAZECHASE_SEED") else None

    # Loop pacing
    FPS: int = int(os.getenv("MAZECHASE_FPS", "60"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    LAYOUTS_DIR: Path = PROJECT_ROOT / "examples" / "layouts"

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are out of range."""
        if cls.STARTING_LIVES < 1:
            raise ValueError(
                "MAZECHASE_LIVES must be at least 1 "
                f"(got {cls.STARTING_LIVES})"
            )

        if cls.POWER_SECONDS <= 0:
            raise ValueError(
                "MAZECHASE_POWER_SECONDS must be positive "
                f"(got {cls.POWER_SECONDS})"
            )

        if cls.FPS <= 0:
            raise ValueError(f"MAZECHASE_FPS must be positive (got {cls.FPS})")

        if cls.AUTO_RESTART_SECONDS is not None and cls.AUTO_RESTART_SECONDS < 0:
            raise ValueError(
                "MAZECHASE_AUTO_RESTART must be zero or positive when set "
                f"(got {cls.AUTO_RESTART_SECONDS})"
            )

    @classmethod
    def game_settings(cls) -> GameSettings:
        """Build GameSettings from the environment-driven values."""
        cls.validate()
        return GameSettings(
            portals_enabled=cls.PORTALS_ENABLED,
            starting_lives=cls.STARTING_LIVES,
            power_duration=cls.POWER_SECONDS,
            auto_restart_delay=cls.AUTO_RESTART_SECONDS,
        )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        auto_restart = (
            "off" if cls.AUTO_RESTART_SECONDS is None else f"{cls.AUTO_RESTART_SECONDS}s"
        )
        lines = [
            "mazechase Configuration:",
            f"  Layout: {cls.LAYOUT}",
            f"  Portals: {'on' if cls.PORTALS_ENABLED else 'off'}",
            f"  Lives: {cls.STARTING_LIVES}",
            f"  Power Duration: {cls.POWER_SECONDS}s",
            f"  Auto Restart: {auto_restart}",
            f"  Seed: {cls.SEED if cls.SEED is not None else 'random'}",
            f"  FPS: {cls.FPS}",
            f"  Log Level: {cls.LOG_LEVEL}",
        ]
        return "\n".join(lines)
