"""Fixtures for AWS client tests.

Provides factory-as-fixture pattern for creating configurable fake boto3 clients
used across AWS client unit tests.
"""

from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from infrastructure.clients.aws import AWSClients
from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.configuration.integrations.aws import AwsSettings


class FakePaginator:
    """Fake boto3 paginator that yields provided pages."""

    def __init__(self, pages):
        self._pages = list(pages)
        self.calls: List[Dict[str, Any]] = []

    def paginate(self, **kwargs):
        self.calls.append(kwargs)
        for page in self._pages:
            yield page


class FakeClient:
    """Configurable fake boto3 client for unit tests.

    Supports:
    - Paginated responses via `get_paginator()`
    - API method responses via `__getattr__` lookup, static or callable
    """

    def __init__(
        self,
        paginated_pages: Optional[List[Dict[str, Any]]] = None,
        api_responses: Optional[Dict[str, Any]] = None,
    ):
        self.paginator = FakePaginator(paginated_pages or [])
        self._api_responses = api_responses or {}

    def get_paginator(self, *args, **kwargs):
        return self.paginator

    def __getattr__(self, name: str):
        if name.startswith("_") or name not in self._api_responses:
            raise AttributeError(name)
        resp = self._api_responses[name]

        def _call(*_args, **_kwargs):
            if callable(resp):
                return resp(**_kwargs)
            return resp

        return _call


@pytest.fixture
def make_fake_client():
    """Factory fixture for creating configurable fake boto3 clients.

    Usage:
        def test_something(make_fake_client, monkeypatch):
            client = make_fake_client(paginated_pages=[{...}, {...}])
            monkeypatch.setattr(executor, "get_boto3_client", lambda *a, **k: client)
    """

    def _factory(
        paginated_pages: Optional[List[Dict[str, Any]]] = None,
        api_responses: Optional[Dict[str, Any]] = None,
    ) -> FakeClient:
        return FakeClient(paginated_pages=paginated_pages, api_responses=api_responses)

    return _factory


@pytest.fixture
def mock_aws_settings():
    """Mock AwsSettings with a region and a LocalStack endpoint."""
    settings = MagicMock(spec=AwsSettings)
    settings.AWS_REGION = "us-east-1"
    settings.ENDPOINT_URL = "http://localhost:4566"
    return settings


@pytest.fixture
def aws_factory(mock_aws_settings):
    """AWSClients facade built from mock settings."""
    return AWSClients(aws_settings=mock_aws_settings)


@pytest.fixture
def dynamodb_client():
    """DynamoDBClient with a plain regional SessionProvider."""
    return DynamoDBClient(session_provider=SessionProvider(region="us-east-1"))
