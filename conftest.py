# Ensure project root is on sys.path so 'ircstream' is importable when running
# pytest from a checkout without installing the package.
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.resolve()
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def concise_logging(monkeypatch):
    """Run every test with the concise (non-DEBUG) log layout."""
    monkeypatch.delenv("DEBUG", raising=False)
    yield
