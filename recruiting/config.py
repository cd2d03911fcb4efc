"""
Recruiting settings, read from the environment (.env supported).
"""

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    # Days a dismissed suggestion blocks a new one of the same rule type
    dismiss_cooldown_days: int = 14
    # Days a completed suggestion blocks a new one of the same rule type
    recreate_window_days: int = 7
    # Suggestions visible at once
    surface_limit: int = 3
    # Bearer token for the scheduled batch endpoint
    cron_secret: Optional[str] = None

    class Config:
        frozen = True


@lru_cache()
def get_settings() -> Settings:
    return Settings(
        dismiss_cooldown_days=int(os.getenv("SUGGESTION_DISMISS_COOLDOWN_DAYS", "14")),
        recreate_window_days=int(os.getenv("SUGGESTION_RECREATE_WINDOW_DAYS", "7")),
        surface_limit=int(os.getenv("SUGGESTION_SURFACE_LIMIT", "3")),
        cron_secret=os.getenv("CRON_SECRET") or None,
    )
