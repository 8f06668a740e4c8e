"""
Common test utilities for integration tests across OrgCal services.

Provides a base class with HTTP call detection rakes that prevent real
external HTTP calls during testing while allowing TestClient to work.
"""

from unittest.mock import patch

from fastapi.testclient import TestClient


class BaseSelectiveHTTPIntegrationTest:
    """Base class for tests that need TestClient but must not reach the network."""

    def setup_method(self, method=None):
        """Set up test environment with selective HTTP call detection."""
        self.http_patches = [
            # Patch async httpx client (most likely to be used for real external calls)
            patch(
                "httpx.AsyncClient._send_single_request",
                side_effect=AssertionError(
                    "Real HTTP call detected! AsyncClient._send_single_request was called"
                ),
            ),
            # Patch urllib (basic HTTP library)
            patch(
                "urllib.request.urlopen",
                side_effect=AssertionError(
                    "Real HTTP call detected! urllib.request.urlopen was called"
                ),
            ),
            # Note: We don't patch httpx.Client.send because TestClient uses it internally
        ]

        for http_patch in self.http_patches:
            http_patch.start()

    def teardown_method(self, method=None):
        """Clean up after each test method."""
        for http_patch in self.http_patches:
            http_patch.stop()

    def create_test_client(self, app):
        """Create a FastAPI test client for the given app."""
        return TestClient(app)
