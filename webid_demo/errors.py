"""
Error types for the login and listing pipelines.
Handlers never catch these; the app-wide error boundary in main.py turns them into 500 JSON.
"""


class WebIdDemoError(Exception):
    """Base class for downstream failures surfaced to the client as 500."""


class TokenExchangeError(WebIdDemoError):
    """Authorization code could not be exchanged at the token endpoint."""


class IdTokenError(WebIdDemoError):
    """ID token failed verification (only raised when verification is enabled)."""


class FederationError(WebIdDemoError):
    """STS AssumeRoleWithWebIdentity failed or no ID token was available."""


class StorageError(WebIdDemoError):
    """S3 listing failed."""
