"""
Product creation: store the optional image, then the record.
"""

from typing import Optional
from uuid import uuid4

from aws_lambda_powertools.metrics import MetricUnit

from product_service.dal import BlobStore, RecordStore
from product_service.handlers.utils.errors import ErrorContext, InvalidInputError, OperationalError
from product_service.handlers.utils.observability import logger, metrics, tracer
from product_service.logic.images import build_image_key, delete_image_best_effort
from product_service.models.input import CreateProductRequest
from product_service.models.product import ProductRecord


@tracer.capture_method
def create_product(
    request: CreateProductRequest,
    record_store: RecordStore,
    blob_store: BlobStore,
    context: Optional[ErrorContext] = None,
) -> ProductRecord:
    """
    Create a product.

    Args:
        request: Validated create request
        record_store: Store holding product records
        blob_store: Store holding product images
        context: Error context for tracing

    Returns:
        The stored product

    Raises:
        InvalidInputError: If the image payload cannot be decoded
        OperationalError: If storing the image or the record fails
    """
    try:
        image = request.decode_image()
    except ValueError as e:
        raise InvalidInputError(
            message=str(e),
            field_errors=[{"field": "imageData", "message": str(e)}],
            context=context,
        ) from e

    product_id = str(uuid4())
    tracer.put_annotation("product_id", product_id)

    image_url = None
    if image is not None:
        body, content_type = image
        image_url = blob_store.put(build_image_key(product_id, content_type), body, content_type)

    record = ProductRecord.create(
        name=request.name,
        description=request.description,
        price=request.price,
        image_url=image_url,
        product_id=product_id,
    )

    try:
        stored = record_store.put(record)
    except OperationalError as e:
        e.context = e.context or context
        if image_url is not None:
            cleanup = delete_image_best_effort(blob_store, image_url)
            logger.warning("Product record not stored, removed uploaded image", extra={
                "product_id": product_id,
                "image_cleanup": "ok" if cleanup.ok else "failed",
            })
        raise

    metrics.add_metric(name="ProductCreated", unit=MetricUnit.Count, value=1)
    logger.info("Product created successfully", extra={
        "product_id": product_id,
        "has_image": image_url is not None,
    })
    return stored
