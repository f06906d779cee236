"""Configuration, read from the environment (and a .env file if present)."""

import os
from datetime import datetime
from typing import Optional
from dotenv import load_dotenv

from .models import naive_local

# Load environment variables
load_dotenv()


class Config:
    # Optional .csv/.xlsx catalog; the built-in seed catalog is used otherwise
    CATALOG_PATH = os.getenv('EVENTBOARD_CATALOG') or None

    LOG_LEVEL = os.getenv('EVENTBOARD_LOG_LEVEL', 'WARNING').upper()

    @staticmethod
    def now() -> Optional[datetime]:
        """Pinned clock from EVENTBOARD_NOW (e.g. 2025-11-16T14:25:00), or None.

        Read on demand so a --now flag can take precedence over a bad value.
        """
        raw = os.getenv('EVENTBOARD_NOW')
        if not raw:
            return None
        try:
            return naive_local(datetime.fromisoformat(raw.strip()))
        except ValueError:
            raise ValueError(f"EVENTBOARD_NOW must be an ISO timestamp, got {raw!r}") from None
