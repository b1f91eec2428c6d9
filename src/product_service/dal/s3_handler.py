"""
S3 implementation of the product image blob store.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

import boto3
from aws_lambda_powertools.metrics import MetricUnit
from botocore.exceptions import BotoCoreError, ClientError

from product_service.handlers.utils.errors import OperationalError
from product_service.handlers.utils.observability import logger, metrics, tracer


class BlobStoreError(OperationalError):
    """Raised when an images bucket operation fails."""

    def __init__(self, message: str, operation: str, bucket_name: str, key: str, error_code: str = "BLOB_STORE_ERROR"):
        super().__init__(
            message=message,
            service_name="S3",
            operation=operation,
            error_code=error_code,
        )
        self.bucket_name = bucket_name
        self.key = key


class S3ImageHandler:
    """Blob store for product images backed by an S3 bucket."""

    def __init__(
        self,
        bucket_name: str,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ):
        self.bucket_name = bucket_name

        client_kwargs: Dict[str, Any] = {}
        if region_name:
            client_kwargs['region_name'] = region_name
        if endpoint_url:
            client_kwargs['endpoint_url'] = endpoint_url

        self.s3 = boto3.client('s3', **client_kwargs)

    def url_for(self, key: str) -> str:
        """Virtual-hosted style URL for an object key."""
        return f"https://{self.bucket_name}.s3.amazonaws.com/{quote(key)}"

    def _raise(self, operation: str, key: str, error: Exception) -> None:
        if isinstance(error, ClientError):
            error_code = error.response.get('Error', {}).get('Code', 'Unknown')
            message = error.response.get('Error', {}).get('Message', str(error))
        else:
            error_code = 'CONNECTION_ERROR'
            message = str(error)

        metrics.add_metric(name=f"S3{operation}Error", unit=MetricUnit.Count, value=1)
        logger.error(f"S3 {operation} error", extra={
            "error_code": error_code,
            "error_message": message,
            "bucket_name": self.bucket_name,
            "key": key,
        })
        raise BlobStoreError(
            message=f"S3 error: {message}",
            operation=operation,
            bucket_name=self.bucket_name,
            key=key,
            error_code=f"S3_{error_code}",
        ) from error

    @tracer.capture_method
    def put(self, key: str, body: bytes, content_type: str) -> str:
        """
        Upload an object.

        Returns:
            The object's URL

        Raises:
            BlobStoreError: If the S3 call fails
        """
        try:
            self.s3.put_object(Bucket=self.bucket_name, Key=key, Body=body, ContentType=content_type)
        except (ClientError, BotoCoreError) as e:
            self._raise("PutObject", key, e)

        logger.info("Image uploaded to S3", extra={
            "bucket_name": self.bucket_name,
            "key": key,
            "size_bytes": len(body),
        })
        return self.url_for(key)

    @tracer.capture_method
    def delete(self, key: str) -> None:
        """
        Delete an object. S3 treats a missing key as success.

        Raises:
            BlobStoreError: If the S3 call fails
        """
        try:
            self.s3.delete_object(Bucket=self.bucket_name, Key=key)
        except (ClientError, BotoCoreError) as e:
            self._raise("DeleteObject", key, e)

        logger.info("Image deleted from S3", extra={
            "bucket_name": self.bucket_name,
            "key": key,
        })
