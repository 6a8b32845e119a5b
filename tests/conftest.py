"""
Pytest configuration and fixtures for relay tests.
"""
import os
import sys
import json
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

# Set testing environment before importing app
os.environ['FLASK_ENV'] = 'testing'

from relay.app import create_app
from relay.config import RelaySettings
from relay.netlify_client import NetlifyClient


@pytest.fixture
def settings():
    """Settings matching TestingConfig."""
    return RelaySettings(
        netlify_token='test-token',
        netlify_api_url='https://netlify.test/api/v1',
        max_name_attempts=5,
    )


@pytest.fixture
def make_response(mocker):
    """Factory for fake requests.Response objects."""
    def _make(status_code=200, payload=None, text=None):
        response = mocker.MagicMock()
        response.status_code = status_code
        response.ok = 200 <= status_code < 400
        if text is not None:
            response.text = text
            response.json.side_effect = ValueError('No JSON object could be decoded')
        else:
            response.text = json.dumps(payload)
            response.json.return_value = payload
        return response
    return _make


@pytest.fixture
def session(mocker):
    """Fake requests.Session; set .request.side_effect per test."""
    return mocker.MagicMock()


@pytest.fixture
def netlify_client(settings, session):
    return NetlifyClient(settings, session=session)


@pytest.fixture
def app(netlify_client):
    """Create application for testing."""
    return create_app('testing', netlify_client=netlify_client)


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def site_payload():
    return {
        'id': 'site-123',
        'name': 'portfolio-jane',
        'url': 'http://portfolio-jane.netlify.app',
        'ssl_url': 'https://portfolio-jane.netlify.app',
        'admin_url': 'https://app.netlify.com/sites/portfolio-jane',
    }


@pytest.fixture
def deploy_payload():
    return {
        'id': 'deploy-456',
        'state': 'uploaded',
        'ssl_url': 'https://portfolio-jane.netlify.app',
    }
