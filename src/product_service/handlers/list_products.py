"""
List Products Handler - Lambda function for ``GET /products``.
"""

from typing import Any, Dict

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEventV2, event_source
from aws_lambda_powertools.utilities.typing import LambdaContext

from product_service.dal import get_record_store
from product_service.handlers.models.env_vars import get_handler_env_vars
from product_service.handlers.utils.errors import create_api_response, handle_service_errors
from product_service.handlers.utils.observability import logger, metrics, tracer
from product_service.logic.list_products import list_products
from product_service.models.output import ListProductsOutput


@handle_service_errors
def handle_list_products(event: APIGatewayProxyEventV2) -> Dict[str, Any]:
    env_vars = get_handler_env_vars()

    products = list_products(
        record_store=get_record_store(env_vars.PRODUCTS_TABLE_NAME, endpoint_url=env_vars.DYNAMODB_ENDPOINT),
    )

    response = ListProductsOutput(
        products=[product.to_api_dict() for product in products],
        count=len(products),
    )
    return create_api_response(
        status_code=200,
        body=response.model_dump_json(),
        allow_origin=env_vars.CORS_ALLOW_ORIGIN,
    )


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_HTTP)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> Dict[str, Any]:
    """Main Lambda handler function."""
    metrics.add_metric(name="RequestCount", unit=MetricUnit.Count, value=1)
    tracer.put_annotation("service", "list-products")
    return handle_list_products(event)
