"""
Product deletion workflow.

Deleting a product removes its record and, when the record references an
image, the image object. The image removal is best-effort: an orphaned image
can be garbage collected later, while a product that cannot be deleted is a
user-facing failure. Each run ends in exactly one terminal state.

    Start -> Rejected
    Start -> Fetching -> FetchFailed | NotFound | Found
    Found -> [CleaningImage] -> DeletingRecord -> DeleteFailed | Deleted
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from aws_lambda_powertools.metrics import MetricUnit

from product_service.dal import BlobStore, RecordStore
from product_service.handlers.utils.errors import (
    BaseServiceError,
    ErrorContext,
    InvalidInputError,
    OperationalError,
    ResourceNotFoundError,
    log_error_metrics,
    public_error_code,
)
from product_service.handlers.utils.observability import logger, metrics, tracer
from product_service.logic.images import CleanupResult, delete_image_best_effort
from product_service.models.output import DeleteProductOutput
from product_service.models.product import ProductRecord


class DeletionState(str, Enum):
    """States of a single deletion run."""

    START = 'Start'
    FETCHING = 'Fetching'
    FOUND = 'Found'
    CLEANING_IMAGE = 'CleaningImage'
    DELETING_RECORD = 'DeletingRecord'
    REJECTED = 'Rejected'
    FETCH_FAILED = 'FetchFailed'
    NOT_FOUND = 'NotFound'
    DELETE_FAILED = 'DeleteFailed'
    DELETED = 'Deleted'

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_RESPONSES


class Classification(str, Enum):
    """Caller-facing classification of a terminal state."""

    SUCCESS = 'success'
    INVALID_INPUT = 'invalid-input'
    NOT_FOUND = 'not-found'
    OPERATIONAL_ERROR = 'operational-error'


# terminal state -> (classification, status code, response message, metric name)
_TERMINAL_RESPONSES = {
    DeletionState.REJECTED: (Classification.INVALID_INPUT, 400, 'Product ID is required', 'ProductDeleteRejected'),
    DeletionState.FETCH_FAILED: (Classification.OPERATIONAL_ERROR, 500, 'Failed to retrieve product', 'ProductFetchFailed'),
    DeletionState.NOT_FOUND: (Classification.NOT_FOUND, 404, 'Product not found', 'ProductNotFound'),
    DeletionState.DELETE_FAILED: (Classification.OPERATIONAL_ERROR, 500, 'Failed to delete product', 'ProductDeleteFailed'),
    DeletionState.DELETED: (Classification.SUCCESS, 200, 'Product deleted successfully', 'ProductDeleted'),
}


class ProductNotFoundError(ResourceNotFoundError):
    """Raised when a product is not found."""

    def __init__(self, product_id: str, context: Optional[ErrorContext] = None):
        super().__init__(
            resource_type="Product",
            resource_id=product_id,
            context=context,
        )


@dataclass(frozen=True)
class DeletionOutcome:
    """Terminal result of a deletion run."""

    state: DeletionState
    product_id: Optional[str]
    cleanup: Optional[CleanupResult] = None
    error: Optional[BaseServiceError] = None

    @property
    def classification(self) -> Classification:
        return _TERMINAL_RESPONSES[self.state][0]

    @property
    def status_code(self) -> int:
        return _TERMINAL_RESPONSES[self.state][1]

    @property
    def message(self) -> str:
        return _TERMINAL_RESPONSES[self.state][2]

    @property
    def succeeded(self) -> bool:
        return self.state == DeletionState.DELETED

    def to_response_body(self) -> Dict[str, Any]:
        """Response body; failures expose only the message and an error id."""
        if self.succeeded:
            return DeleteProductOutput(message=self.message, product_id=self.product_id).model_dump(by_alias=True)

        body: Dict[str, Any] = {'message': self.message}
        if self.error is not None:
            body['error'] = {'code': public_error_code(self.error), 'error_id': self.error.error_id}
        return body


class ProductDeletionWorkflow:
    """Deletes a product record and, best-effort, its image."""

    def __init__(
        self,
        record_store: RecordStore,
        blob_store: BlobStore,
        context: Optional[ErrorContext] = None,
    ):
        """
        Initialize the workflow.

        Args:
            record_store: Store holding product records
            blob_store: Store holding product images
            context: Error context for tracing
        """
        self.record_store = record_store
        self.blob_store = blob_store
        self.context = context
        self.state = DeletionState.START

    def _transition(self, state: DeletionState) -> None:
        logger.debug("Deletion state transition", extra={
            "from_state": self.state.value,
            "to_state": state.value,
        })
        self.state = state

    def _finish(
        self,
        state: DeletionState,
        product_id: Optional[str],
        cleanup: Optional[CleanupResult] = None,
        error: Optional[BaseServiceError] = None,
    ) -> DeletionOutcome:
        self._transition(state)
        metrics.add_metric(name=_TERMINAL_RESPONSES[state][3], unit=MetricUnit.Count, value=1)
        tracer.put_annotation("deletion_outcome", state.value)
        if error is not None:
            log_error_metrics(error)
        return DeletionOutcome(state=state, product_id=product_id, cleanup=cleanup, error=error)

    @tracer.capture_method
    def run(self, product_id: Optional[str]) -> DeletionOutcome:
        """
        Delete a product.

        Args:
            product_id: Identifier from the request, possibly missing or empty

        Returns:
            The terminal outcome. Store failures are reported in the outcome,
            never raised.
        """
        self.state = DeletionState.START

        if not product_id:
            return self._finish(
                DeletionState.REJECTED,
                product_id,
                error=InvalidInputError(message='Product ID is required', context=self.context),
            )

        tracer.put_annotation("product_id", product_id)
        logger.info("Deleting product", extra={"product_id": product_id})

        self._transition(DeletionState.FETCHING)
        try:
            product = self.record_store.get(product_id)
        except OperationalError as e:
            e.context = e.context or self.context
            return self._finish(DeletionState.FETCH_FAILED, product_id, error=e)

        if product is None:
            return self._finish(
                DeletionState.NOT_FOUND,
                product_id,
                error=ProductNotFoundError(product_id=product_id, context=self.context),
            )

        self._transition(DeletionState.FOUND)
        cleanup = self._cleanup_image(product)

        self._transition(DeletionState.DELETING_RECORD)
        try:
            self.record_store.delete(product_id)
        except OperationalError as e:
            e.context = e.context or self.context
            return self._finish(DeletionState.DELETE_FAILED, product_id, cleanup=cleanup, error=e)

        logger.info("Product deleted", extra={
            "product_id": product_id,
            "image_cleanup": None if cleanup is None else ("ok" if cleanup.ok else "failed"),
        })
        return self._finish(DeletionState.DELETED, product_id, cleanup=cleanup)

    def _cleanup_image(self, product: ProductRecord) -> Optional[CleanupResult]:
        if not product.has_image:
            return None

        self._transition(DeletionState.CLEANING_IMAGE)
        # the result is recorded in the outcome only; it never changes the classification
        return delete_image_best_effort(self.blob_store, product.image_url)


def delete_product(
    product_id: Optional[str],
    record_store: RecordStore,
    blob_store: BlobStore,
    context: Optional[ErrorContext] = None,
) -> DeletionOutcome:
    """Run one deletion against the given stores."""
    workflow = ProductDeletionWorkflow(record_store=record_store, blob_store=blob_store, context=context)
    return workflow.run(product_id)
