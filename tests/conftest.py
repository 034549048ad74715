import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so we can import bookbrowser
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

from bookbrowser.config import config  # noqa: E402


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    """Known API key for every test"""
    monkeypatch.setattr(config, "API_KEY", "test-key")
    return "test-key"
