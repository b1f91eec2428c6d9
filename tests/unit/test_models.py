"""
Unit tests for Pydantic models.

This module tests the validation and serialization of the product domain
model and the request/response models.
"""

import base64
from decimal import Decimal

import pytest
from pydantic import ValidationError

from product_service.models.input import CreateProductRequest
from product_service.models.output import DeleteProductOutput, ListProductsOutput
from product_service.models.product import ProductRecord


class TestProductRecord:
    """Test cases for ProductRecord model."""

    def test_create_generates_id_and_timestamps(self):
        product = ProductRecord.create(name="Mug", price=10)

        assert product.id
        assert product.created_at == product.updated_at
        assert product.image_url is None
        assert not product.has_image

    def test_create_with_explicit_id(self):
        product = ProductRecord.create(name="Mug", price=10, product_id="prod-1")
        assert product.id == "prod-1"

    def test_ids_are_unique(self):
        assert ProductRecord.create(name="A", price=1).id != ProductRecord.create(name="B", price=1).id

    def test_parses_camel_case_item(self):
        product = ProductRecord.model_validate({
            "id": "prod-1",
            "name": "Lamp",
            "description": "LED",
            "price": Decimal("39.90"),
            "imageUrl": "https://bucket.example.com/products/prod-1/a.png",
            "createdAt": "2024-01-01T12:00:00+00:00",
            "updatedAt": "2024-01-01T12:00:00+00:00",
        })

        assert product.price == pytest.approx(39.9)
        assert product.image_url == "https://bucket.example.com/products/prod-1/a.png"
        assert product.has_image

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            ProductRecord.create(name="Mug", price=-1)

    def test_non_finite_price_rejected(self):
        with pytest.raises(ValidationError):
            ProductRecord.create(name="Mug", price=float("inf"))

    def test_partial_item_keeps_id_and_image_url(self):
        product = ProductRecord.from_partial_item({
            "id": "legacy",
            "name": "Old lamp",
            "price": Decimal("-5"),
            "imageUrl": "https://bucket.example.com/products/legacy/a.png",
        })

        assert product.id == "legacy"
        assert product.image_url == "https://bucket.example.com/products/legacy/a.png"
        assert product.has_image
        assert product.created_at == ""

    @pytest.mark.parametrize("image_url", [None, "", 42])
    def test_partial_item_ignores_unusable_image_url(self, image_url):
        item = {"id": "legacy", "name": "x", "price": 1}
        if image_url is not None:
            item["imageUrl"] = image_url

        product = ProductRecord.from_partial_item(item)

        assert product.image_url is None
        assert not product.has_image

    def test_api_dict_uses_camel_case_and_omits_missing_image(self):
        data = ProductRecord.create(name="Mug", price=10, product_id="prod-1").to_api_dict()

        assert data["id"] == "prod-1"
        assert "createdAt" in data
        assert "updatedAt" in data
        assert "imageUrl" not in data
        assert "image_url" not in data

    def test_dynamodb_item_uses_decimal_price(self):
        item = ProductRecord.create(name="Mug", price=12.5).to_dynamodb_item()
        assert item["price"] == Decimal("12.5")


class TestCreateProductRequest:
    """Test cases for CreateProductRequest model."""

    def test_valid_request(self):
        request = CreateProductRequest.model_validate({
            "name": "Mug",
            "description": "350ml",
            "price": 12.5,
        })

        assert request.name == "Mug"
        assert request.price == 12.5
        assert request.image_data is None
        assert request.decode_image() is None

    def test_name_is_trimmed(self):
        assert CreateProductRequest(name="  Mug  ", price=1).name == "Mug"

    @pytest.mark.parametrize("payload", [
        {"price": 1},
        {"name": "", "price": 1},
        {"name": "   ", "price": 1},
        {"name": "Mug"},
        {"name": "Mug", "price": -0.01},
        {"name": "Mug", "price": float("inf")},
        {"name": "Mug", "price": float("nan")},
        {"name": "Mug", "price": "free"},
        {"name": "A" * 201, "price": 1},
    ])
    def test_invalid_requests(self, payload):
        with pytest.raises(ValidationError):
            CreateProductRequest.model_validate(payload)

    def test_plain_base64_image_defaults_to_jpeg(self):
        request = CreateProductRequest.model_validate({
            "name": "Mug",
            "price": 1,
            "imageData": base64.b64encode(b"\xff\xd8\xff").decode(),
        })

        assert request.decode_image() == (b"\xff\xd8\xff", "image/jpeg")

    def test_data_url_image(self):
        encoded = base64.b64encode(b"\x89PNG").decode()
        request = CreateProductRequest.model_validate({
            "name": "Mug",
            "price": 1,
            "imageData": f"data:image/png;base64,{encoded}",
        })

        assert request.decode_image() == (b"\x89PNG", "image/png")

    def test_empty_image_is_no_image(self):
        request = CreateProductRequest.model_validate({"name": "Mug", "price": 1, "imageData": ""})
        assert request.decode_image() is None

    def test_invalid_base64_raises_value_error(self):
        request = CreateProductRequest.model_validate({"name": "Mug", "price": 1, "imageData": "%%%not-base64"})

        with pytest.raises(ValueError, match="not valid base64"):
            request.decode_image()


class TestOutputModels:

    def test_delete_output_serializes_product_id_in_camel_case(self):
        output = DeleteProductOutput(product_id="prod-1")

        assert output.model_dump(by_alias=True) == {
            "message": "Product deleted successfully",
            "productId": "prod-1",
        }

    def test_list_output(self):
        output = ListProductsOutput(products=[{"id": "a"}], count=1)
        assert output.count == 1
