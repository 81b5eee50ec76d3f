from unittest.mock import MagicMock, AsyncMock

import pytest

from cloudbucket_sdk.config import ClientConfig
from cloudbucket_sdk.models import APIResponse
from cloudbucket_sdk.storage import StorageManager
from cloudbucket_sdk.transport import Transport


@pytest.fixture
def config():
    return ClientConfig(endpoint="https://storage.example.com/", api_key="test-key", timeout=5)


@pytest.fixture
def envelope():
    return APIResponse(data={"_id": "b1", "name": "logs", "isPublic": False}, errors=None)


@pytest.fixture
def transport(envelope):
    mock_transport = MagicMock(spec=Transport)
    mock_transport.post.return_value = envelope
    return mock_transport


@pytest.fixture
def async_transport(envelope):
    mock_transport = MagicMock(spec=Transport)
    mock_transport.post = AsyncMock(return_value=envelope)
    return mock_transport


@pytest.fixture
def storage(transport):
    return StorageManager(transport)
