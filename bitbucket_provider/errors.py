"""
Bitbucket provider errors.
"""


class BitbucketError(Exception):
    """Base exception for all provider errors."""
    pass


class ConfigurationError(BitbucketError):
    """Errors in configuration."""
    pass


class InvalidIdentityError(BitbucketError):
    """A resource ID that is not of the form WORKSPACE/SLUG."""
    pass


class RemoteError(BitbucketError):
    """Transport failure or non-2xx response from the Bitbucket API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        method: str | None = None,
        path: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.path = path


class EmptyResponseError(BitbucketError):
    """The API answered successfully but without a body."""
    pass


class DecodeError(BitbucketError):
    """The API answered with a body that is not a valid group payload."""
    pass
