"""
Environment variable models for type-safe configuration.

The provisioning layer injects the table and bucket names into every product
function; this module validates them with Pydantic through aws-lambda-env-modeler.
"""

from typing import Annotated, Optional

from aws_lambda_env_modeler import get_environment_variables
from pydantic import BaseModel, Field

from product_service.handlers.utils.errors import ConfigurationError


class ProductHandlerEnvVars(BaseModel):
    """Environment variables shared by the product handlers."""

    # DynamoDB table holding product records
    PRODUCTS_TABLE_NAME: Annotated[str, Field(
        description='DynamoDB table name for product storage',
        min_length=1
    )]

    # S3 bucket holding product images
    IMAGES_BUCKET_NAME: Annotated[str, Field(
        default='',
        description='S3 bucket name for product images'
    )] = ''

    # Service name for observability
    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        default='product-service',
        description='Service name for AWS Powertools'
    )] = 'product-service'

    # Log level for AWS Powertools Logger
    LOG_LEVEL: Annotated[str, Field(
        default='INFO',
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'

    # Local endpoints (DynamoDB Local, LocalStack)
    DYNAMODB_ENDPOINT: Annotated[Optional[str], Field(
        default=None,
        description='Override endpoint URL for DynamoDB'
    )] = None

    S3_ENDPOINT: Annotated[Optional[str], Field(
        default=None,
        description='Override endpoint URL for S3'
    )] = None

    CORS_ALLOW_ORIGIN: Annotated[str, Field(
        default='*',
        description='CORS allowed origins for API responses'
    )] = '*'


def get_handler_env_vars() -> ProductHandlerEnvVars:
    """
    Get validated environment variables for product handlers.

    Returns:
        Validated environment variables

    Raises:
        ConfigurationError: If a required variable is missing or invalid
    """
    try:
        return get_environment_variables(model=ProductHandlerEnvVars)
    except ValueError as e:
        raise ConfigurationError(f"Invalid function configuration: {e}") from e


class CorsEnvVars(BaseModel):
    """CORS setting, readable even when the rest of the configuration is invalid."""

    CORS_ALLOW_ORIGIN: Annotated[str, Field(
        default='*',
        description='CORS allowed origins for API responses'
    )] = '*'


def get_cors_allow_origin() -> str:
    """Origin for the ``Access-Control-Allow-Origin`` header of every response."""
    return get_environment_variables(model=CorsEnvVars).CORS_ALLOW_ORIGIN
