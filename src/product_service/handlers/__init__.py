"""
AWS Lambda Handlers Module.

One module per API route, each exposing a ``lambda_handler`` entry point:

- ``product_service.handlers.create_product.lambda_handler``: POST /products
- ``product_service.handlers.list_products.lambda_handler``: GET /products
- ``product_service.handlers.delete_product.lambda_handler``: DELETE /products/{id}

Handlers parse the API Gateway HTTP API event, build the record and image
stores for the invocation, call the logic layer and shape the response.
"""
