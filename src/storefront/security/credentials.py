"""
Google service account credentials for the Sheets table store.

The service account JSON is kept in AWS Secrets Manager in deployed
environments and read through the Powertools parameters utility. For local
runs a key file path may be given instead.
"""

from typing import Any, Dict, Optional

from aws_lambda_powertools.utilities.parameters import SecretsProvider
from aws_lambda_powertools.utilities.parameters.exceptions import GetParameterError, TransformParameterError
from google.oauth2.service_account import Credentials

from storefront.handlers.utils.errors import StoreUnavailableError
from storefront.handlers.utils.observability import logger, tracer

SCOPES = ['https://www.googleapis.com/auth/spreadsheets']

# Secret values are cached by the provider for this many seconds
SECRET_MAX_AGE_SECONDS = 300


@tracer.capture_method
def load_service_account_info(secret_name: str, provider: Optional[SecretsProvider] = None) -> Dict[str, Any]:
    """
    Fetch the service account JSON document from Secrets Manager.

    Args:
        secret_name: Name or ARN of the secret
        provider: Secrets provider to use; a new one is created when omitted

    Returns:
        Parsed service account info

    Raises:
        StoreUnavailableError: If the secret is missing or not a JSON object
    """
    provider = provider or SecretsProvider()
    try:
        info = provider.get(secret_name, max_age=SECRET_MAX_AGE_SECONDS, transform='json')
    except (GetParameterError, TransformParameterError) as e:
        logger.error('Unable to load Google service account secret', extra={
            'secret_name': secret_name,
            'error': str(e),
        })
        raise StoreUnavailableError(
            message=f'Google credentials unavailable: {e}',
            store_name='gsheets',
        ) from e

    if not isinstance(info, dict):
        raise StoreUnavailableError(
            message=f'Secret {secret_name} does not hold a service account JSON object',
            store_name='gsheets',
        )
    return info


def get_google_credentials(
    secret_name: Optional[str] = None,
    credentials_file: Optional[str] = None,
) -> Credentials:
    """
    Build service account credentials scoped for Google Sheets.

    The secret takes precedence over the key file when both are configured.
    """
    try:
        if secret_name:
            info = load_service_account_info(secret_name)
            logger.debug('Using Google credentials from Secrets Manager', extra={'secret_name': secret_name})
            return Credentials.from_service_account_info(info, scopes=SCOPES)
        if credentials_file:
            logger.debug('Using Google credentials file', extra={'path': credentials_file})
            return Credentials.from_service_account_file(credentials_file, scopes=SCOPES)
    except (ValueError, OSError) as e:
        raise StoreUnavailableError(
            message=f'Invalid Google service account credentials: {e}',
            store_name='gsheets',
        ) from e

    raise StoreUnavailableError(
        message='No Google credentials configured; set GOOGLE_CREDENTIALS_SECRET_NAME or GOOGLE_APPLICATION_CREDENTIALS',
        store_name='gsheets',
    )
