import pytest
from pathlib import Path

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_text():
    """The documented application configuration used across suites."""
    return (FIXTURES / "app.cfg").read_text(encoding="utf-8")
