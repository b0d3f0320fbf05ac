"""
Configuration for car cost comparisons.
Defaults match the values the page opens with; each one can be overridden
from the environment or a local .env file.
"""

import logging
import math
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_PETROL_PRICE = 1.433
DEFAULT_DIESEL_PRICE = 1.465
DEFAULT_MAX_DISTANCE_KM = 100000
DEFAULT_STEP_KM = 100
DEFAULT_LOG_LEVEL = "WARNING"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the calculator and the page."""

    petrol_price: float = DEFAULT_PETROL_PRICE
    diesel_price: float = DEFAULT_DIESEL_PRICE
    max_distance_km: int = DEFAULT_MAX_DISTANCE_KM
    step_km: int = DEFAULT_STEP_KM
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def sample_count(self) -> int:
        """Number of distance points on the sampling grid, both ends included."""
        return self.max_distance_km // self.step_km + 1


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if not math.isfinite(value):
        logging.getLogger(__name__).warning("Ignoring %s=%r, using %s", name, raw, default)
        return default
    return value


def _env_int(name: str, default: int) -> int:
    value = int(_env_float(name, default))
    if value <= 0:
        logging.getLogger(__name__).warning("Ignoring non-positive %s, using %s", name, default)
        return default
    return value


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    Build settings from the environment.

    Args:
        dotenv_path: Optional .env file to read before the environment.
            Variables already set in the environment win.

    Returns:
        Settings with defaults for anything unset or unparsable
    """
    load_dotenv(dotenv_path)
    return Settings(
        petrol_price=_env_float("CAR_COST_PETROL_PRICE", DEFAULT_PETROL_PRICE),
        diesel_price=_env_float("CAR_COST_DIESEL_PRICE", DEFAULT_DIESEL_PRICE),
        max_distance_km=_env_int("CAR_COST_MAX_DISTANCE_KM", DEFAULT_MAX_DISTANCE_KM),
        step_km=_env_int("CAR_COST_STEP_KM", DEFAULT_STEP_KM),
        log_level=os.environ.get("CAR_COST_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> logging.Logger:
    """Attach a stream handler to the package logger if none is set up yet."""
    logger = logging.getLogger('car_cost')
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    return logger
