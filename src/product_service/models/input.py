"""
Input models for request validation using Pydantic.
"""

import base64
import binascii
import re
from typing import Annotated, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_IMAGE_CONTENT_TYPE = 'image/jpeg'

_DATA_URL_PATTERN = re.compile(r'^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.*)$', re.DOTALL)


class CreateProductRequest(BaseModel):
    """Request model for creating a new product."""

    model_config = ConfigDict(populate_by_name=True)

    name: Annotated[str, Field(
        min_length=1,
        max_length=200,
        description='Product name',
        examples=['Ceramic mug']
    )]

    description: Annotated[str, Field(
        default='',
        max_length=2000,
        description='Free-text product description'
    )] = ''

    price: Annotated[float, Field(
        ge=0,
        allow_inf_nan=False,
        description='Unit price, must be finite and not negative',
        examples=[12.5]
    )]

    image_data: Annotated[Optional[str], Field(
        default=None,
        alias='imageData',
        description='Base64 encoded image, optionally as a data URL',
        examples=['data:image/png;base64,iVBORw0KGgo=']
    )] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names made only of whitespace."""
        if not v.strip():
            raise ValueError('name must not be blank')
        return v.strip()

    @field_validator('image_data')
    @classmethod
    def validate_image_data(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty image payload as no image."""
        if v is not None and not v.strip():
            return None
        return v

    def decode_image(self) -> Optional[Tuple[bytes, str]]:
        """
        Decode the image payload.

        Returns:
            Tuple of (image bytes, content type), or None when no image was sent

        Raises:
            ValueError: If the payload is not valid base64
        """
        if self.image_data is None:
            return None

        content_type = DEFAULT_IMAGE_CONTENT_TYPE
        payload = self.image_data.strip()
        match = _DATA_URL_PATTERN.match(payload)
        if match:
            content_type = match.group('mime').lower()
            payload = match.group('payload')

        try:
            body = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError('imageData is not valid base64') from exc

        if not body:
            raise ValueError('imageData decodes to an empty image')
        return body, content_type
