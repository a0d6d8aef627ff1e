"""Shared test fixtures for relief portal tests."""

import os
import sys
from pathlib import Path

import pytest

# Add parent directory to path so we can import the modules
sys.path.insert(0, str(Path(__file__).parent.parent))

# No background polling against the real widget during tests
os.environ["POLL_INTERVAL_SECONDS"] = "0"


@pytest.fixture
def widget_html() -> str:
    """Trimmed rendering of a large GoFundMe widget."""
    return (
        '<div class="progress-meter">'
        '<span class="amount">$3,250</span> raised of <span class="goal">$7,000</span> goal'
        "</div>"
        '<div class="donations">42 donations</div>'
    )


@pytest.fixture
def narrow_space_html() -> str:
    """Widget markup with no-break spaces between symbol and amount."""
    return "<p>\u20ac\u202f1,250 raised of \u20ac\u00a05,000</p>"


@pytest.fixture
def no_totals_html() -> str:
    return "<html><body><h1>Page not found</h1><p>Try again later.</p></body></html>"
