"""Shared fixtures for Rauk Inventory SDK tests."""

import pytest
import respx

from rauk_inventory import RaukInventory, RaukInventoryClient

API_KEY_ID = "123456789012345678901234"  # 24 characters
API_SECRET = "1234567890123456789012345678901234567890123456789012345678901234"  # 64 characters
API_PUBLIC_KEY = "12345678901234567890123456789012"  # 32 characters
API_BASE_URL = "https://inventory.rauk.local"
QUERY_URL = f"{API_BASE_URL}/query"

CONFIG = {
    "api_key_id": API_KEY_ID,
    "api_secret": API_SECRET,
    "api_public_key": API_PUBLIC_KEY,
    "api_base_url": API_BASE_URL,
}


@pytest.fixture
def mock_api():
    """Create a respx mock for the inventory API."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def client():
    return RaukInventoryClient(**CONFIG)


@pytest.fixture(autouse=True)
def reset_inventory():
    """Make sure no process-wide client leaks between tests."""
    RaukInventory.reset()
    yield
    RaukInventory.reset()
