"""
Business Logic Layer Module.

The logic layer sits between the Lambda handlers and the data access layer.
It receives its record and blob stores as arguments so every invocation (and
every test) decides which concrete stores are used.
"""

from product_service.logic.create_product import create_product
from product_service.logic.delete_product import (
    Classification,
    DeletionOutcome,
    DeletionState,
    ProductDeletionWorkflow,
    ProductNotFoundError,
    delete_product,
)
from product_service.logic.images import CleanupFailure, CleanupResult, extract_blob_key
from product_service.logic.list_products import list_products

__all__ = [
    "Classification",
    "CleanupFailure",
    "CleanupResult",
    "DeletionOutcome",
    "DeletionState",
    "ProductDeletionWorkflow",
    "ProductNotFoundError",
    "create_product",
    "delete_product",
    "extract_blob_key",
    "list_products",
]
