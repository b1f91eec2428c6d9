"""
Delete Product Handler - Lambda function for ``DELETE /products/{id}``.

Builds the record and image stores for this invocation, runs the deletion
workflow and maps its terminal outcome onto an HTTP response.
"""

from typing import Any, Dict

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEventV2, event_source
from aws_lambda_powertools.utilities.typing import LambdaContext

from product_service.dal import get_blob_store, get_record_store
from product_service.handlers.models.env_vars import get_handler_env_vars
from product_service.handlers.utils.errors import (
    ConfigurationError,
    create_api_response,
    create_error_context,
    handle_service_errors,
)
from product_service.handlers.utils.observability import logger, metrics, tracer
from product_service.logic.delete_product import ProductDeletionWorkflow


@handle_service_errors
def handle_delete_product(event: APIGatewayProxyEventV2) -> Dict[str, Any]:
    """
    Delete the product named by the ``id`` path parameter.

    Args:
        event: API Gateway HTTP API event

    Returns:
        API Gateway response
    """
    env_vars = get_handler_env_vars()
    if not env_vars.IMAGES_BUCKET_NAME:
        raise ConfigurationError("IMAGES_BUCKET_NAME is not set")

    product_id = (event.path_parameters or {}).get('id')
    request_id = event.request_context.request_id or "unknown"

    context = create_error_context(
        request_id=request_id,
        operation="delete_product",
        resource_id=product_id,
    )

    workflow = ProductDeletionWorkflow(
        record_store=get_record_store(env_vars.PRODUCTS_TABLE_NAME, endpoint_url=env_vars.DYNAMODB_ENDPOINT),
        blob_store=get_blob_store(env_vars.IMAGES_BUCKET_NAME, endpoint_url=env_vars.S3_ENDPOINT),
        context=context,
    )
    outcome = workflow.run(product_id)

    logger.info("Delete product request completed", extra={
        "product_id": product_id,
        "state": outcome.state.value,
        "classification": outcome.classification.value,
        "status_code": outcome.status_code,
    })

    return create_api_response(
        status_code=outcome.status_code,
        body=outcome.to_response_body(),
        allow_origin=env_vars.CORS_ALLOW_ORIGIN,
    )


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_HTTP)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> Dict[str, Any]:
    """
    Main Lambda handler function.

    Args:
        event: Lambda event payload
        context: Lambda context object

    Returns:
        API Gateway response
    """
    metrics.add_metric(name="RequestCount", unit=MetricUnit.Count, value=1)
    tracer.put_annotation("service", "delete-product")
    return handle_delete_product(event)
