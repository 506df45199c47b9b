"""Shared test fixtures."""

import pytest

from mcp_bitcoin_outputs.keys import parse_public_key

from vectors import G_COMPRESSED, G_UNCOMPRESSED


@pytest.fixture
def g_key():
    """Compressed generator key."""
    return parse_public_key(G_COMPRESSED)


@pytest.fixture
def g_key_uncompressed():
    """Uncompressed generator key."""
    return parse_public_key(G_UNCOMPRESSED)
