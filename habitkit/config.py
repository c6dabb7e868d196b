"""Application configuration for habitkit."""

from __future__ import annotations

import os
from typing import Dict, Type

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


class BaseConfig:
    """Base configuration loaded for all environments."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "change-me")
    JSON_SORT_KEYS = False

    ACCOUNT_NAME = os.environ.get("ACCOUNT_NAME", "Habit Tracker")
    # how far back the streak walk looks before it stops counting
    STREAK_LOOKBACK_DAYS = int(os.environ.get("STREAK_LOOKBACK_DAYS", "30"))
    NOTIFICATION_FEED_SIZE = int(os.environ.get("NOTIFICATION_FEED_SIZE", "50"))

    SEED_DEMO_DATA = _flag("SEED_DEMO_DATA")
    DEMO_SEED = int(os.environ["DEMO_SEED"]) if os.environ.get("DEMO_SEED") else None

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    ENV = "development"
    SEED_DEMO_DATA = _flag("SEED_DEMO_DATA", "true")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG").upper()


class TestingConfig(BaseConfig):
    TESTING = True
    SEED_DEMO_DATA = False
    DEMO_SEED = 7


class ProductionConfig(BaseConfig):
    ENV = "production"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING").upper()


config_by_name: Dict[str, Type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    # CI pipelines set APP_ENV=ci; map to testing defaults.
    "ci": TestingConfig,
}
