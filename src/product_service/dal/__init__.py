"""
Data Access Layer (DAL) for the product service.

This module defines the record store and blob store interfaces consumed by
the logic layer, plus factory functions that build the AWS-backed
implementations for a single invocation.
"""

from typing import List, Optional, Protocol, runtime_checkable

from product_service.models.product import ProductRecord


@runtime_checkable
class RecordStore(Protocol):
    """Key-value persistence for product records."""

    def get(self, product_id: str) -> Optional[ProductRecord]:
        """Return the record, or None when no record has this id.

        A stored item that does not match the product model is still
        returned, so it can be deleted.
        """
        ...

    def put(self, record: ProductRecord) -> ProductRecord:
        """Create or replace a record."""
        ...

    def delete(self, product_id: str) -> None:
        """Delete a record. Deleting a missing id is not an error."""
        ...

    def list_all(self) -> List[ProductRecord]:
        """Return every record in the store."""
        ...


@runtime_checkable
class BlobStore(Protocol):
    """Object storage for product images."""

    def put(self, key: str, body: bytes, content_type: str) -> str:
        """Store an object and return its URL."""
        ...

    def delete(self, key: str) -> None:
        """Delete an object. Deleting a missing key is not an error."""
        ...

    def url_for(self, key: str) -> str:
        """Return the URL under which an object key is published."""
        ...


def get_record_store(table_name: str, endpoint_url: Optional[str] = None) -> RecordStore:
    """
    Factory function to get the record store.

    Args:
        table_name: Name of the products table
        endpoint_url: Optional DynamoDB endpoint override

    Returns:
        Record store instance
    """
    # Import here to avoid circular imports
    from product_service.dal.dynamodb_handler import DynamoDBProductHandler

    return DynamoDBProductHandler(table_name=table_name, endpoint_url=endpoint_url)


def get_blob_store(bucket_name: str, endpoint_url: Optional[str] = None) -> BlobStore:
    """
    Factory function to get the blob store.

    Args:
        bucket_name: Name of the images bucket
        endpoint_url: Optional S3 endpoint override

    Returns:
        Blob store instance
    """
    from product_service.dal.s3_handler import S3ImageHandler

    return S3ImageHandler(bucket_name=bucket_name, endpoint_url=endpoint_url)


__all__ = [
    'RecordStore',
    'BlobStore',
    'get_record_store',
    'get_blob_store',
]
