"""
Pytest configuration for Ticket Scanner tests.

Sets up the test environment before the app is imported, plus shared
fixtures.
"""
import io
import os

import pytest
from unittest.mock import MagicMock
from PIL import Image

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ["BASE_PATH"] = ""
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-supabase-key")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")
os.environ["SESSION_SECRET"] = "test-session-secret-with-enough-length-for-hs256"
os.environ["APP_PASSWORD"] = "open-sesame"
os.environ["PAGE_SIZE"] = "10"
os.environ["LINE_BATCH_SIZE"] = "10"
os.environ["MAX_UPLOAD_MB"] = "10"


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client.
    Returns a MagicMock that simulates Supabase client behavior.
    """
    mock_client = MagicMock()
    return mock_client


@pytest.fixture
def valid_image_bytes():
    """Create a valid PNG image in memory."""
    img = Image.new("RGB", (100, 100), color="white")
    img_bytes = io.BytesIO()
    img.save(img_bytes, format="PNG")
    img_bytes.seek(0)
    return img_bytes.getvalue()


@pytest.fixture
def session_cookie():
    """A valid signed session token."""
    from ticket_scanner.auth.session import issue_session_token

    return issue_session_token()
