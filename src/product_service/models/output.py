"""
Output models for API responses using Pydantic.
"""

from typing import Annotated, Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class DeleteProductOutput(BaseModel):
    """Response model for a successful product deletion."""

    model_config = ConfigDict(populate_by_name=True)

    message: Annotated[str, Field(
        default='Product deleted successfully',
        description='Human readable result'
    )] = 'Product deleted successfully'

    product_id: Annotated[str, Field(
        alias='productId',
        description='Identifier of the deleted product'
    )]


class CreateProductOutput(BaseModel):
    """Response model for a successful product creation."""

    message: Annotated[str, Field(
        default='Product created successfully',
        description='Human readable result'
    )] = 'Product created successfully'

    product: Annotated[Dict[str, Any], Field(
        description='The stored product record'
    )]


class ListProductsOutput(BaseModel):
    """Response model for listing products."""

    products: Annotated[List[Dict[str, Any]], Field(
        default_factory=list,
        description='Product records, newest first'
    )]

    count: Annotated[int, Field(
        ge=0,
        description='Number of products returned'
    )]


class ErrorOutput(BaseModel):
    """Response model for error bodies."""

    message: Annotated[str, Field(
        description='User facing error message',
        examples=['Product not found']
    )]
