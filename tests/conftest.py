import os

import pytest

# Settings are read on first import of the web app; pin the local zone for tests.
os.environ.setdefault("DEFAULT_TIMEZONE", "UTC")

from unixtime.config.settings import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
