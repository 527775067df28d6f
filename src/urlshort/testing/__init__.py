"""Test utilities for urlshort applications::

    from urlshort.testing import TestClient
"""

from urlshort.testing.client import TestClient

__all__ = ["TestClient"]
