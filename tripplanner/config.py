from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_DEFAULT_PLACES_CSV = Path(__file__).resolve().parent / "data" / "places.csv"


@dataclass(frozen=True)
class AppConfig:
    session_secret: str = os.getenv("SESSION_SECRET", "trip-planner-secret-change-in-production")
    places_csv: Path = Path(os.getenv("PLACES_CSV", str(_DEFAULT_PLACES_CSV)))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    nearby_limit: int = 6
    popular_limit: int = 4
    popular_places: tuple[str, ...] = (
        "Marina Beach",
        "Meenakshi Temple",
        "Ooty Hill Station",
        "Rameshwaram Temple",
    )
    recommend_candidate_limit: int = 8
    recommend_result_limit: int = 4


DEFAULT_APP_CONFIG = AppConfig()
