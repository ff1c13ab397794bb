"""
AWS Lambda Handlers Module.

Entry points for the storefront API. The handler layer parses API Gateway
events into command models, routes them to the logic layer and renders every
outcome, success or failure, as a JSON envelope.
"""

from storefront.handlers.utils.observability import logger, metrics, tracer

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
