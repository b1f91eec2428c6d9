"""
DynamoDB implementation of the product record store.

Every boto error is converted into a ``RecordStoreError`` so the logic layer
only has to reason about one operational failure type.
"""

import functools
import time
from typing import Any, Callable, Dict, List, Optional, TypeVar

import boto3
from aws_lambda_powertools.metrics import MetricUnit
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from product_service.handlers.utils.errors import OperationalError
from product_service.handlers.utils.observability import logger, metrics, tracer
from product_service.models.product import ProductRecord

F = TypeVar('F', bound=Callable[..., Any])


class RecordStoreError(OperationalError):
    """Raised when a products table operation fails."""

    def __init__(self, message: str, operation: str, table_name: str, error_code: str = "RECORD_STORE_ERROR"):
        super().__init__(
            message=message,
            service_name="DynamoDB",
            operation=operation,
            error_code=error_code,
        )
        self.table_name = table_name


def _handle_dynamodb_errors(operation: str) -> Callable[[F], F]:
    """Decorator to handle DynamoDB errors consistently."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(self: 'DynamoDBProductHandler', *args: Any, **kwargs: Any) -> Any:
            operation_start = time.time()
            try:
                result = func(self, *args, **kwargs)
            except ClientError as e:
                error_code = e.response.get('Error', {}).get('Code', 'Unknown')
                error_message = e.response.get('Error', {}).get('Message', str(e))

                metrics.add_metric(name=f"DynamoDB{operation}Error", unit=MetricUnit.Count, value=1)
                logger.error(f"DynamoDB {operation} error", extra={
                    "error_code": error_code,
                    "error_message": error_message,
                    "table_name": self.table_name,
                    "operation": operation,
                })

                if error_code == 'ResourceNotFoundException':
                    raise RecordStoreError(
                        message=f"Table {self.table_name} not found",
                        operation=operation,
                        table_name=self.table_name,
                        error_code="TABLE_NOT_FOUND",
                    ) from e
                if error_code in ('ProvisionedThroughputExceededException', 'ThrottlingException'):
                    raise RecordStoreError(
                        message="DynamoDB throttling detected",
                        operation=operation,
                        table_name=self.table_name,
                        error_code="THROTTLING_ERROR",
                    ) from e
                raise RecordStoreError(
                    message=f"DynamoDB error: {error_message}",
                    operation=operation,
                    table_name=self.table_name,
                    error_code=f"DYNAMODB_{error_code}",
                ) from e
            except BotoCoreError as e:
                metrics.add_metric(name=f"DynamoDB{operation}Error", unit=MetricUnit.Count, value=1)
                logger.error(f"DynamoDB connection error during {operation}", extra={
                    "error": str(e),
                    "table_name": self.table_name,
                })
                raise RecordStoreError(
                    message=f"Database connection error: {str(e)}",
                    operation=operation,
                    table_name=self.table_name,
                    error_code="DATABASE_CONNECTION_ERROR",
                ) from e

            duration_ms = (time.time() - operation_start) * 1000
            metrics.add_metric(name=f"DynamoDB{operation}Duration", unit=MetricUnit.Milliseconds, value=duration_ms)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


class DynamoDBProductHandler:
    """Product record store backed by a DynamoDB table keyed on ``id``."""

    def __init__(
        self,
        table_name: str,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ):
        """
        Initialize DynamoDB handler.

        Args:
            table_name: Name of the DynamoDB table
            region_name: AWS region name
            endpoint_url: DynamoDB endpoint URL (for local testing)
        """
        self.table_name = table_name

        resource_kwargs: Dict[str, Any] = {}
        if region_name:
            resource_kwargs['region_name'] = region_name
        if endpoint_url:
            resource_kwargs['endpoint_url'] = endpoint_url

        self.dynamodb = boto3.resource('dynamodb', **resource_kwargs)
        self.table = self.dynamodb.Table(table_name)

        logger.debug("DynamoDB handler initialized", extra={
            "table_name": table_name,
            "endpoint_url": endpoint_url,
        })

    @tracer.capture_method
    @_handle_dynamodb_errors("GetItem")
    def get(self, product_id: str) -> Optional[ProductRecord]:
        """
        Get a product by id.

        Args:
            product_id: Product identifier

        Returns:
            The product, or None if not found. An item that does not match the
            product model is still returned, built from its raw attributes.

        Raises:
            RecordStoreError: If the DynamoDB call fails
        """
        response = self.table.get_item(Key={'id': product_id})
        item = response.get('Item')
        if not item:
            logger.debug("Product not found", extra={"product_id": product_id})
            return None
        return self._to_record(item, strict=False)

    @tracer.capture_method
    @_handle_dynamodb_errors("PutItem")
    def put(self, record: ProductRecord) -> ProductRecord:
        """
        Store a product record.

        Raises:
            RecordStoreError: If the DynamoDB call fails
        """
        self.table.put_item(Item=record.to_dynamodb_item())
        logger.info("Product stored successfully", extra={
            "table_name": self.table_name,
            "product_id": record.id,
        })
        return record

    @tracer.capture_method
    @_handle_dynamodb_errors("DeleteItem")
    def delete(self, product_id: str) -> None:
        """
        Delete a product by id. A missing item is not an error.

        Raises:
            RecordStoreError: If the DynamoDB call fails
        """
        response = self.table.delete_item(Key={'id': product_id}, ReturnValues='ALL_OLD')
        if response.get('Attributes'):
            logger.info("Product deleted successfully", extra={
                "table_name": self.table_name,
                "product_id": product_id,
            })
        else:
            logger.warning("Product not found for deletion", extra={
                "table_name": self.table_name,
                "product_id": product_id,
            })

    @tracer.capture_method
    @_handle_dynamodb_errors("Scan")
    def list_all(self) -> List[ProductRecord]:
        """
        Scan the whole table, following continuation keys.

        Items that do not match the product model are skipped.

        Raises:
            RecordStoreError: If the DynamoDB call fails
        """
        items: List[Dict[str, Any]] = []
        scan_kwargs: Dict[str, Any] = {}
        while True:
            response = self.table.scan(**scan_kwargs)
            items.extend(response.get('Items', []))
            last_evaluated_key = response.get('LastEvaluatedKey')
            if not last_evaluated_key:
                break
            scan_kwargs['ExclusiveStartKey'] = last_evaluated_key

        logger.info("Scan completed successfully", extra={
            "table_name": self.table_name,
            "items_count": len(items),
        })
        records = [self._to_record(item, strict=True) for item in items]
        return [record for record in records if record is not None]

    def _to_record(self, item: Dict[str, Any], strict: bool) -> Optional[ProductRecord]:
        try:
            return ProductRecord.model_validate(item)
        except ValidationError as e:
            metrics.add_metric(name="MalformedProductItem", unit=MetricUnit.Count, value=1)
            logger.warning("Stored product item does not match the product model", extra={
                "product_id": item.get('id'),
                "table_name": self.table_name,
                "error": str(e),
            })
            if strict:
                return None
            return ProductRecord.from_partial_item(item)
