"""Environment variable models for the storefront handlers."""
