"""
Environment variable models for type-safe configuration.

Lambda configuration for the storefront API is read once per container through
aws_lambda_env_modeler, which validates the variables against the Pydantic
model below and caches the result.
"""

from typing import Annotated, Literal, Optional

from aws_lambda_env_modeler import BaseModel, get_environment_variables
from pydantic import Field, model_validator


class StorefrontEnvVars(BaseModel):
    """Environment variables for the storefront handlers."""

    # Which table store backs the Products / Orders tables
    TABLE_STORE_BACKEND: Annotated[Literal['gsheets', 'memory'], Field(
        description='Table store implementation: Google Sheets or in-process memory'
    )] = 'gsheets'

    # Google Sheets document key (the long id in the spreadsheet URL)
    SPREADSHEET_ID: Annotated[str, Field(
        description='Google Sheets document key holding the Products and Orders tabs'
    )] = ''

    PRODUCTS_TABLE_NAME: Annotated[str, Field(
        description='Name of the product catalog table',
        min_length=1
    )] = 'Products'

    ORDERS_TABLE_NAME: Annotated[str, Field(
        description='Name of the orders table',
        min_length=1
    )] = 'Orders'

    # Service account JSON, either from Secrets Manager or from a file
    GOOGLE_CREDENTIALS_SECRET_NAME: Annotated[Optional[str], Field(
        description='Secrets Manager secret holding the Google service account JSON'
    )] = None

    GOOGLE_APPLICATION_CREDENTIALS: Annotated[Optional[str], Field(
        description='Path to a Google service account JSON file'
    )] = None

    AWS_REGION: Annotated[str, Field(
        description='AWS region for service deployment'
    )] = 'us-east-1'

    ENVIRONMENT: Annotated[str, Field(
        description='Deployment environment name',
        pattern=r'^(dev|test|staging|prod)$'
    )] = 'dev'

    APP_VERSION: Annotated[str, Field(
        description='Application version string'
    )] = '1.0.0'

    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        description='Service name for AWS Powertools'
    )] = 'storefront-sheets-api'

    LOG_LEVEL: Annotated[str, Field(
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'

    @model_validator(mode='after')
    def require_spreadsheet_for_gsheets(self) -> 'StorefrontEnvVars':
        """A Google Sheets backend is useless without a document key."""
        if self.TABLE_STORE_BACKEND == 'gsheets' and not self.SPREADSHEET_ID:
            raise ValueError('SPREADSHEET_ID is required when TABLE_STORE_BACKEND is gsheets')
        return self


def get_handler_env_vars() -> StorefrontEnvVars:
    """
    Get typed environment variables for the storefront handlers.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=StorefrontEnvVars)
