"""
Pytest configuration and shared fixtures for the storefront API.

This module provides common test fixtures and configuration used across
unit, integration, and end-to-end tests.
"""

import json
import os
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import Mock
from urllib.parse import urlencode

import pytest

# Powertools and the env model read these at import time, before any fixture runs
os.environ.update({
    "AWS_DEFAULT_REGION": "us-east-1",
    "AWS_ACCESS_KEY_ID": "test",
    "AWS_SECRET_ACCESS_KEY": "test",
    "TABLE_STORE_BACKEND": "memory",
    "ENVIRONMENT": "test",
    "APP_VERSION": "test-1.0.0",
    "POWERTOOLS_SERVICE_NAME": "test-storefront-sheets-api",
    "POWERTOOLS_METRICS_NAMESPACE": "TestStorefrontSheets",
    "LOG_LEVEL": "DEBUG",
    "POWERTOOLS_TRACE_DISABLED": "true",
})

from storefront.dal.memory_handler import InMemoryTableStore  # noqa: E402
from storefront.dal.schema import ORDERS_SCHEMA  # noqa: E402

PRODUCTS_HEADER = ["ID", "Title", "Description", "Price", "Image URL"]


# Sample data fixtures
@pytest.fixture
def products_values() -> List[List[Any]]:
    """Products table as it is typically maintained by hand."""
    return [
        PRODUCTS_HEADER,
        ["P1", "Mango pickle", "500g jar", 249, "https://img.example.com/p1.jpg"],
        ["P2", "Lime pickle", "", "", ""],
        ["P3", "Gift box", "Assorted", "not a price", "https://img.example.com/p3.jpg"],
    ]


@pytest.fixture
def orders_values() -> List[List[Any]]:
    """Orders table with three orders, two of them for the same phone."""
    return [
        ORDERS_SCHEMA.header,
        ["ord-1", "2024-01-15T10:30:00+00:00", "P1", "Mango pickle", 249, 2, 40, 538,
         "Asha Rao", "555-1234", "12 MG Road", "560001", "Bengaluru", "NEW"],
        ["ord-2", "2024-01-16T09:00:00+00:00", "P2", "Lime pickle", 199, 1, 0, 199,
         "Ravi Kumar", " 555-1234 ", "4 Park Street", "700016", "Kolkata", "SHIPPED"],
        ["ord-3", "2024-01-17T18:45:00+00:00", "P1", "Mango pickle", 249, 1, 0, 249,
         "Meera Iyer", "555-12345", "7 Marine Drive", "400002", "Mumbai", "NEW"],
    ]


@pytest.fixture
def memory_store(products_values, orders_values) -> InMemoryTableStore:
    """In-memory store holding the sample Products and Orders tables."""
    return InMemoryTableStore({"Products": products_values, "Orders": orders_values})


@pytest.fixture
def empty_store() -> InMemoryTableStore:
    """In-memory store with no tables at all."""
    return InMemoryTableStore()


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-storefront-function"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-storefront-function"
    context.memory_limit_in_mb = 512
    context.get_remaining_time_in_millis = lambda: 30000
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-storefront-function"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    return context


def _api_gateway_event(
    method: str,
    path: str = "/",
    query: Optional[Dict[str, str]] = None,
    body: Optional[str] = None,
    content_type: Optional[str] = None,
) -> Dict[str, Any]:
    headers = {"User-Agent": "test-agent/1.0"}
    if content_type:
        headers["Content-Type"] = content_type
    return {
        "resource": path,
        "path": path,
        "httpMethod": method,
        "headers": headers,
        "multiValueHeaders": {key: [value] for key, value in headers.items()},
        "queryStringParameters": query,
        "multiValueQueryStringParameters": {key: [value] for key, value in query.items()} if query else None,
        "pathParameters": None,
        "stageVariables": None,
        "body": body,
        "isBase64Encoded": False,
        "requestContext": {
            "requestId": "test-request-id-123",
            "accountId": "123456789012",
            "stage": "test",
            "httpMethod": method,
            "path": path,
            "resourcePath": path,
            "protocol": "HTTP/1.1",
            "requestTime": "01/Jan/2024:12:00:00 +0000",
            "requestTimeEpoch": 1704110400000,
            "identity": {
                "sourceIp": "127.0.0.1",
                "userAgent": "test-agent/1.0",
            },
        },
    }


@pytest.fixture
def get_event() -> Callable[..., Dict[str, Any]]:
    """Build an API Gateway GET event from query parameters."""

    def build(path: str = "/", **query: str) -> Dict[str, Any]:
        return _api_gateway_event("GET", path=path, query=query or None)

    return build


@pytest.fixture
def post_form_event() -> Callable[..., Dict[str, Any]]:
    """Build an API Gateway POST event with a form-encoded body."""

    def build(**fields: Any) -> Dict[str, Any]:
        return _api_gateway_event(
            "POST",
            body=urlencode(fields),
            content_type="application/x-www-form-urlencoded",
        )

    return build


@pytest.fixture
def post_json_event() -> Callable[..., Dict[str, Any]]:
    """Build an API Gateway POST event with a JSON body."""

    def build(payload: Any = None, raw: Optional[str] = None) -> Dict[str, Any]:
        return _api_gateway_event(
            "POST",
            body=raw if raw is not None else json.dumps(payload),
            content_type="application/json",
        )

    return build


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "e2e" in str(item.fspath):
            item.add_marker(pytest.mark.e2e)
