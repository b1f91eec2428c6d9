"""
Centralized observability utilities for the product Lambda handlers.

This module provides configured instances of AWS Lambda Powertools for logging,
tracing, and metrics collection shared by the handler, logic and data access layers.
"""

import os

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

# Default metrics namespace for business KPIs
METRICS_NAMESPACE = 'ProductService'

# JSON output format, service name can be set by environment variable "POWERTOOLS_SERVICE_NAME"
logger: Logger = Logger()

# Service name can be set by environment variable "POWERTOOLS_SERVICE_NAME"
# Disabled by setting POWERTOOLS_TRACE_DISABLED to "True"
tracer: Tracer = Tracer()

# Namespace and service name can be set by environment variables:
# - POWERTOOLS_METRICS_NAMESPACE (falls back to METRICS_NAMESPACE)
# - POWERTOOLS_SERVICE_NAME
metrics = Metrics(namespace=os.getenv('POWERTOOLS_METRICS_NAMESPACE', METRICS_NAMESPACE))
