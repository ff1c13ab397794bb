"""
REST API resolver for the storefront handlers.

The storefront page talks to a single URL: reads are GETs carrying the action
in the query string, writes are POSTs carrying it in a form-encoded body.
"""

import os

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, CORSConfig

# API path constants
API_PATH = '/'
HEALTH_PATH = '/health'

# The storefront is a static page served from another origin
cors_config = CORSConfig(
    allow_origin=os.environ.get('CORS_ALLOW_ORIGIN', '*'),
    max_age=600,
    allow_headers=['content-type'],
)

app = APIGatewayRestResolver(cors=cors_config)
