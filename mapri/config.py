from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_DEFAULT_SEED_PATH = Path(__file__).resolve().parent / "data" / "places.csv"


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AppConfig:
    session_secret: str = os.getenv("SESSION_SECRET", "mapri-secret-change-in-production")
    seed_path: Path = Path(os.getenv("MAPRI_SEED_PATH", str(_DEFAULT_SEED_PATH)))
    seed_enabled: bool = _as_bool(os.getenv("MAPRI_SEED"), True)
    log_level: str = os.getenv("MAPRI_LOG_LEVEL", "INFO")


DEFAULT_APP_CONFIG = AppConfig()


def configure_logging(config: AppConfig = DEFAULT_APP_CONFIG) -> None:
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
