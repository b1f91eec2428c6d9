"""
Pytest configuration and shared fixtures for the product service.

This module provides the test environment, in-memory store doubles for logic
tests, moto-backed AWS resources for integration tests, and API Gateway
HTTP API event builders.
"""

import json
import os
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import Mock

import pytest

# Set before importing product_service so Powertools picks them up at import time
TEST_TABLE_NAME = "test-products-table"
TEST_BUCKET_NAME = "test-product-images"

os.environ.update({
    "AWS_DEFAULT_REGION": "us-east-1",
    "AWS_ACCESS_KEY_ID": "test",
    "AWS_SECRET_ACCESS_KEY": "test",
    "PRODUCTS_TABLE_NAME": TEST_TABLE_NAME,
    "IMAGES_BUCKET_NAME": TEST_BUCKET_NAME,
    "POWERTOOLS_SERVICE_NAME": "test-product-service",
    "POWERTOOLS_METRICS_NAMESPACE": "TestProductService",
    "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
    "LOG_LEVEL": "DEBUG",
})

import boto3  # noqa: E402
from moto import mock_aws  # noqa: E402

from product_service.handlers.utils.errors import OperationalError  # noqa: E402
from product_service.handlers.utils.observability import metrics  # noqa: E402
from product_service.models.product import ProductRecord  # noqa: E402


class InMemoryRecordStore:
    """Record store double that keeps products in a dict."""

    def __init__(self, records: Optional[List[ProductRecord]] = None):
        self.records: Dict[str, ProductRecord] = {record.id: record for record in records or []}
        self.get_calls: List[str] = []
        self.put_calls: List[ProductRecord] = []
        self.delete_calls: List[str] = []
        self.get_error: Optional[Exception] = None
        self.put_error: Optional[Exception] = None
        self.delete_error: Optional[Exception] = None

    def get(self, product_id: str) -> Optional[ProductRecord]:
        self.get_calls.append(product_id)
        if self.get_error:
            raise self.get_error
        return self.records.get(product_id)

    def put(self, record: ProductRecord) -> ProductRecord:
        self.put_calls.append(record)
        if self.put_error:
            raise self.put_error
        self.records[record.id] = record
        return record

    def delete(self, product_id: str) -> None:
        self.delete_calls.append(product_id)
        if self.delete_error:
            raise self.delete_error
        self.records.pop(product_id, None)

    def list_all(self) -> List[ProductRecord]:
        return list(self.records.values())


class InMemoryBlobStore:
    """Blob store double that keeps objects in a dict."""

    def __init__(self, host: str = "bucket.example.com"):
        self.host = host
        self.objects: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}
        self.put_calls: List[str] = []
        self.delete_calls: List[str] = []
        self.put_error: Optional[Exception] = None
        self.delete_error: Optional[Exception] = None

    def url_for(self, key: str) -> str:
        return f"https://{self.host}/{key}"

    def put(self, key: str, body: bytes, content_type: str) -> str:
        self.put_calls.append(key)
        if self.put_error:
            raise self.put_error
        self.objects[key] = body
        self.content_types[key] = content_type
        return self.url_for(key)

    def delete(self, key: str) -> None:
        self.delete_calls.append(key)
        if self.delete_error:
            raise self.delete_error
        self.objects.pop(key, None)


def make_operational_error(service_name: str = "DynamoDB", operation: str = "GetItem") -> OperationalError:
    return OperationalError(
        message=f"{service_name} {operation} failed: connection reset by peer",
        service_name=service_name,
        operation=operation,
    )


# Sample data fixtures
@pytest.fixture
def sample_product() -> ProductRecord:
    """A product without an image."""
    return ProductRecord.create(
        name="Ceramic mug",
        description="350ml, dishwasher safe",
        price=12.5,
    )


@pytest.fixture
def sample_product_with_image() -> ProductRecord:
    """A product whose image lives in the in-memory blob store."""
    return ProductRecord.create(
        name="Desk lamp",
        description="LED, warm white",
        price=39.0,
        image_url="https://bucket.example.com/products/abc/photo.png",
    )


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def operational_error() -> Callable[..., OperationalError]:
    """Factory for simulated store faults."""
    return make_operational_error


# AWS fixtures
@pytest.fixture
def aws_resources():
    """Create the products table and images bucket in moto."""
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")
        table = dynamodb.create_table(
            TableName=TEST_TABLE_NAME,
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
        table.wait_until_exists()

        s3 = boto3.client("s3", region_name="us-east-1")
        s3.create_bucket(Bucket=TEST_BUCKET_NAME)

        yield {"table": table, "s3": s3}


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-product-function"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-product-function"
    context.memory_limit_in_mb = 512
    context.get_remaining_time_in_millis.return_value = 30000
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-product-function"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    return context


@pytest.fixture
def http_api_event() -> Callable[..., Dict[str, Any]]:
    """Build an API Gateway HTTP API (payload 2.0) event."""

    def build(
        method: str = "GET",
        path: str = "/products",
        path_parameters: Optional[Dict[str, str]] = None,
        body: Any = None,
    ) -> Dict[str, Any]:
        if body is not None and not isinstance(body, str):
            body = json.dumps(body)
        return {
            "version": "2.0",
            "routeKey": f"{method} {path}",
            "rawPath": path,
            "rawQueryString": "",
            "headers": {
                "content-type": "application/json",
                "user-agent": "test-agent/1.0",
            },
            "requestContext": {
                "accountId": "123456789012",
                "apiId": "api-id",
                "domainName": "id.execute-api.us-east-1.amazonaws.com",
                "domainPrefix": "id",
                "http": {
                    "method": method,
                    "path": path,
                    "protocol": "HTTP/1.1",
                    "sourceIp": "127.0.0.1",
                    "userAgent": "test-agent/1.0",
                },
                "requestId": "test-request-id-123",
                "routeKey": f"{method} {path}",
                "stage": "$default",
                "time": "01/Jan/2024:12:00:00 +0000",
                "timeEpoch": 1704110400000,
            },
            "pathParameters": path_parameters,
            "body": body,
            "isBase64Encoded": False,
        }

    return build


@pytest.fixture(autouse=True)
def reset_metrics():
    """Drop metrics buffered by code running outside a handler."""
    metrics.clear_metrics()
    yield
    metrics.clear_metrics()


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
