"""Exception hierarchy for the few edges of the client that do raise.

``ApiClient.request`` and the verb wrappers never raise; failures there are
returned as data inside ``ApiResponse``. The errors below are reserved for
``download`` (which bypasses the envelope), credential persistence and
malformed request bodies.
"""

from __future__ import annotations

from homekrew_api.models.responses import ApiError


class HomekrewClientError(Exception):
    """Base error for all client-specific errors."""

    message: str = "API client error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


class DownloadError(HomekrewClientError):
    """A binary download failed; carries the classified error."""

    message = "Download failed"

    def __init__(self, error: ApiError) -> None:
        self.error = error
        super().__init__(error.message, code=error.code.value, status=error.status)


class CredentialStoreError(HomekrewClientError):
    """The credential store could not be written."""

    message = "Credential store write failed"


class InvalidBodyError(HomekrewClientError):
    """A request body was constructed in a shape the transport cannot send."""

    message = "Invalid request body"
