"""Pytest configuration and shared fixtures."""

import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from freight_calc.config.settings import Settings
from freight_calc.models.shipment_models import ShipmentRequest
from tests.test_fixtures import create_sample_snapshot, create_sample_request

# Inside the mock and sample FSC windows
QUOTE_DATE = date(2024, 6, 1)


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, google_sheets_api_key="", snapshot_path=None)


@pytest.fixture
def sample_snapshot():
    """Create a sample table snapshot for testing."""
    return create_sample_snapshot()


@pytest.fixture
def sample_request() -> ShipmentRequest:
    """A 5 kg shipment to the USA without over-charges."""
    return create_sample_request()


@pytest.fixture
def quote_date() -> date:
    return QUOTE_DATE
