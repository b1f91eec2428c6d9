"""
Product domain model.

``ProductRecord`` is the persisted entity stored in the products table. Field
names are snake_case in Python and camelCase in DynamoDB and API payloads.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Any, Dict, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ProductRecord(BaseModel):
    """Core Product domain model."""

    model_config = ConfigDict(populate_by_name=True)

    id: Annotated[str, Field(
        min_length=1,
        description='Unique identifier for the product',
        examples=['3f9c1e0a-6d0b-4bde-9a43-1c3f0a2f9b11']
    )]

    name: Annotated[str, Field(
        description='Product name',
        examples=['Ceramic mug']
    )]

    description: Annotated[str, Field(
        default='',
        description='Free-text product description'
    )] = ''

    price: Annotated[float, Field(
        ge=0,
        allow_inf_nan=False,
        description='Unit price',
        examples=[12.5]
    )]

    image_url: Annotated[Optional[str], Field(
        default=None,
        alias='imageUrl',
        description='URL of the product image in the images bucket'
    )] = None

    created_at: Annotated[str, Field(
        alias='createdAt',
        description='ISO timestamp when the product was created'
    )]

    updated_at: Annotated[str, Field(
        alias='updatedAt',
        description='ISO timestamp when the product was last updated'
    )]

    @classmethod
    def create(
        cls,
        name: str,
        price: float,
        description: str = '',
        image_url: Optional[str] = None,
        product_id: Optional[str] = None,
    ) -> 'ProductRecord':
        """
        Create a new product with generated ID and timestamps.

        Args:
            name: Product name
            price: Unit price
            description: Product description
            image_url: URL of an already stored image
            product_id: Identifier to use instead of a generated one

        Returns:
            New ProductRecord instance
        """
        now = utc_now_iso()
        return cls(
            id=product_id or str(uuid4()),
            name=name,
            description=description,
            price=price,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def from_partial_item(cls, item: Dict[str, Any]) -> 'ProductRecord':
        """
        Build a record from a stored item that does not pass validation.

        Only ``id`` and a string ``imageUrl`` are relied on; the other fields
        are copied as stored, or filled with empty values when absent.
        """
        image_url = item.get('imageUrl')
        return cls.model_construct(
            id=str(item['id']),
            name=item.get('name', ''),
            description=item.get('description', ''),
            price=item.get('price', 0),
            image_url=image_url if isinstance(image_url, str) and image_url else None,
            created_at=item.get('createdAt', ''),
            updated_at=item.get('updatedAt', ''),
        )

    @property
    def has_image(self) -> bool:
        return bool(self.image_url)

    def to_api_dict(self) -> Dict[str, Any]:
        """Serialize with camelCase keys, omitting an absent image URL."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_dynamodb_item(self) -> Dict[str, Any]:
        """Serialize for boto3's DynamoDB resource API, which rejects floats."""
        item = self.to_api_dict()
        item['price'] = Decimal(str(self.price))
        return item
