import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `infrastructure.configuration`) works during pytest collection
# regardless of the directory pytest is invoked from.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest  # noqa: E402

from infrastructure.services.providers import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Give every test a fresh settings singleton."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
