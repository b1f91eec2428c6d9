"""
Product image helpers: object key layout, URL-to-key recovery and
best-effort image removal.
"""

import mimetypes
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote, urlsplit
from uuid import uuid4

from aws_lambda_powertools.metrics import MetricUnit

from product_service.dal import BlobStore
from product_service.handlers.utils.observability import logger, metrics, tracer

IMAGE_KEY_PREFIX = 'products'
DEFAULT_IMAGE_EXTENSION = '.jpg'

# mimetypes maps image/jpeg to .jpe on some platforms
_PREFERRED_EXTENSIONS = {
    'image/jpeg': '.jpg',
    'image/jpg': '.jpg',
    'image/png': '.png',
    'image/gif': '.gif',
    'image/webp': '.webp',
}


class InvalidImageUrlError(ValueError):
    """Raised when an image URL does not carry an object key."""


def build_image_key(product_id: str, content_type: str) -> str:
    """Object key for a new image of a product: ``products/<id>/<uuid><ext>``."""
    extension = _PREFERRED_EXTENSIONS.get(content_type) or mimetypes.guess_extension(content_type) or DEFAULT_IMAGE_EXTENSION
    return f"{IMAGE_KEY_PREFIX}/{product_id}/{uuid4().hex}{extension}"


def extract_blob_key(image_url: str) -> str:
    """
    Recover the object key from an image URL.

    The key is the URL's path component without its first slash, so
    ``https://bucket.example.com/products/abc/photo.png`` yields
    ``products/abc/photo.png``.

    Raises:
        InvalidImageUrlError: If the URL has no scheme, host or path
    """
    parts = urlsplit(image_url.strip())
    if not parts.scheme or not parts.netloc:
        raise InvalidImageUrlError(f"Image URL is not absolute: {image_url!r}")

    path = unquote(parts.path)
    key = path[1:] if path.startswith('/') else path
    if not key:
        raise InvalidImageUrlError(f"Image URL has no object key: {image_url!r}")
    return key


@dataclass(frozen=True)
class CleanupFailure:
    """Why a best-effort image removal did not happen."""

    reason: str
    error: Optional[Exception] = None


@dataclass(frozen=True)
class CleanupResult:
    """Outcome of a best-effort image removal. Failures are reported, never raised."""

    key: Optional[str]
    failure: Optional[CleanupFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@tracer.capture_method
def delete_image_best_effort(blob_store: BlobStore, image_url: str) -> CleanupResult:
    """
    Delete the object behind ``image_url``.

    Never raises: a malformed URL or a blob store failure is logged, counted
    and returned as the failure variant of ``CleanupResult``.
    """
    key: Optional[str] = None
    try:
        key = extract_blob_key(image_url)
        blob_store.delete(key)
    except Exception as e:
        logger.warning("Image cleanup failed, leaving orphaned image", extra={
            "image_url": image_url,
            "key": key,
            "error": str(e),
            "error_type": type(e).__name__,
        })
        metrics.add_metric(name="ImageCleanupFailed", unit=MetricUnit.Count, value=1)
        return CleanupResult(key=key, failure=CleanupFailure(reason=str(e), error=e))

    metrics.add_metric(name="ImageDeleted", unit=MetricUnit.Count, value=1)
    return CleanupResult(key=key)
