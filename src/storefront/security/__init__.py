"""
Security Module.

Credential handling for the external services the API talks to. Google
service account keys are loaded from AWS Secrets Manager or a local key file.
"""

from storefront.security.credentials import get_google_credentials, load_service_account_info

__all__ = [
    "get_google_credentials",
    "load_service_account_info",
]
