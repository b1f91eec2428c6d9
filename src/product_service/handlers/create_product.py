"""
Create Product Handler - Lambda function for ``POST /products``.
"""

import json
from typing import Any, Dict

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEventV2, event_source
from aws_lambda_powertools.utilities.typing import LambdaContext

from product_service.dal import get_blob_store, get_record_store
from product_service.handlers.models.env_vars import get_handler_env_vars
from product_service.handlers.utils.errors import (
    ConfigurationError,
    InvalidInputError,
    create_api_response,
    create_error_context,
    handle_service_errors,
)
from product_service.handlers.utils.observability import logger, metrics, tracer
from product_service.logic.create_product import create_product
from product_service.models.input import CreateProductRequest
from product_service.models.output import CreateProductOutput


@handle_service_errors
def handle_create_product(event: APIGatewayProxyEventV2) -> Dict[str, Any]:
    """
    Create a product from the JSON request body.

    Args:
        event: API Gateway HTTP API event

    Returns:
        API Gateway response
    """
    env_vars = get_handler_env_vars()
    if not env_vars.IMAGES_BUCKET_NAME:
        raise ConfigurationError("IMAGES_BUCKET_NAME is not set")

    request_id = event.request_context.request_id or "unknown"
    context = create_error_context(
        request_id=request_id,
        operation="create_product",
    )

    # Parse and validate request
    try:
        request_body = json.loads(event.decoded_body or "{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidInputError(
            message="Invalid JSON in request body",
            context=context,
        ) from e
    if not isinstance(request_body, dict):
        raise InvalidInputError(
            message="Request body must be a JSON object",
            context=context,
        )

    # pydantic.ValidationError is converted to a 400 by handle_service_errors
    create_request = CreateProductRequest.model_validate(request_body)

    product = create_product(
        request=create_request,
        record_store=get_record_store(env_vars.PRODUCTS_TABLE_NAME, endpoint_url=env_vars.DYNAMODB_ENDPOINT),
        blob_store=get_blob_store(env_vars.IMAGES_BUCKET_NAME, endpoint_url=env_vars.S3_ENDPOINT),
        context=context,
    )

    response = CreateProductOutput(product=product.to_api_dict())
    return create_api_response(
        status_code=201,
        body=response.model_dump_json(),
        headers={"Location": f"/products/{product.id}"},
        allow_origin=env_vars.CORS_ALLOW_ORIGIN,
    )


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_HTTP)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> Dict[str, Any]:
    """Main Lambda handler function."""
    metrics.add_metric(name="RequestCount", unit=MetricUnit.Count, value=1)
    tracer.put_annotation("service", "create-product")
    return handle_create_product(event)
