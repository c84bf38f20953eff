"""Pytest configuration for the test suite.

This file is automatically loaded by pytest and sets up:
1. Loading of .env file for local overrides
2. Logging configuration with third-party library suppression
3. Fresh settings/configuration caches around every test
"""

import os
from pathlib import Path

import pytest

# Load .env file
from dotenv import load_dotenv

# tests/conftest.py -> tests -> project_root
_project_root = Path(__file__).resolve().parent.parent
_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

# Configure logging with third-party suppression
from pharma_reports.core.app_config import clear_config_cache
from pharma_reports.core.config import get_settings
from pharma_reports.middleware.logging import setup_logging

_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
setup_logging(log_level=_log_level, log_format="text")


@pytest.fixture(autouse=True)
def reset_config_caches():
    """Drop cached settings and configuration so env changes take effect."""
    get_settings.cache_clear()
    clear_config_cache()
    yield
    get_settings.cache_clear()
    clear_config_cache()
