"""
Product Service.

Serverless CRUD backend for product records with optional images, split in
three layers:

- handlers: Lambda entry points for the HTTP API routes
- logic: creation, listing and the product deletion workflow
- dal: DynamoDB record store and S3 image store
- models: Pydantic domain, request and response models
"""

__version__ = "1.0.0"
