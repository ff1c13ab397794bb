"""Shared utilities for the storefront handlers: observability, errors and the REST resolver."""
