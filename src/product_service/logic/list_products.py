"""
Product listing.
"""

from typing import List

from aws_lambda_powertools.metrics import MetricUnit

from product_service.dal import RecordStore
from product_service.handlers.utils.observability import logger, metrics, tracer
from product_service.models.product import ProductRecord


@tracer.capture_method
def list_products(record_store: RecordStore) -> List[ProductRecord]:
    """
    Return every product, newest first.

    Raises:
        OperationalError: If reading the record store fails
    """
    products = sorted(record_store.list_all(), key=lambda product: product.created_at, reverse=True)

    metrics.add_metric(name="ProductsListed", unit=MetricUnit.Count, value=len(products))
    logger.info("Products listed", extra={"products_count": len(products)})
    return products
