"""
Service Models Package

This package contains the Pydantic models used throughout the service:
the product domain model, request validation models and response models.
"""

from .input import CreateProductRequest
from .output import (
    CreateProductOutput,
    DeleteProductOutput,
    ErrorOutput,
    ListProductsOutput,
)
from .product import ProductRecord

__all__ = [
    # Input models
    "CreateProductRequest",

    # Output models
    "CreateProductOutput",
    "DeleteProductOutput",
    "ErrorOutput",
    "ListProductsOutput",

    # Domain models
    "ProductRecord",
]
