"""
Shared fixtures for the fieldrules test suite.
"""

from datetime import datetime
from unittest.mock import Mock

import pytest

from fieldrules.database.presence import CallablePresenceVerifier
from fieldrules.provider import boot


FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture
def clock():
    """Clock frozen at 2024-06-15 12:00 local time"""
    return lambda: FIXED_NOW


@pytest.fixture
def registry():
    """Registry with host and extension rules"""
    return boot()


@pytest.fixture
def count_func():
    """Row-count function reporting no matching rows"""
    return Mock(return_value=0)


@pytest.fixture
def verifier(count_func):
    """Synchronous presence verifier around count_func"""
    return CallablePresenceVerifier(count_func)
