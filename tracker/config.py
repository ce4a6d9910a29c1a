"""
Application configuration from environment variables (.env supported).
"""

import os
from pathlib import Path
from typing import Final

from dotenv import load_dotenv

load_dotenv()


class Config:
    DATA_PATH: Final[Path] = Path(os.getenv("TRACKER_DATA_PATH", "data/tracker.json"))
    LOG_LEVEL: Final[str] = os.getenv("TRACKER_LOG_LEVEL", "INFO")
    MONTHS_BACK: Final[int] = int(os.getenv("TRACKER_MONTHS_BACK", "6"))

    @classmethod
    def validate(cls) -> None:
        if cls.MONTHS_BACK <= 0:
            raise ValueError(f"TRACKER_MONTHS_BACK must be positive, got {cls.MONTHS_BACK}")
