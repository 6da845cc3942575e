"""Errors raised by conversation repositories."""


class RepositoryError(Exception):
    """Base class for repository failures."""


class NetworkError(RepositoryError):
    """The request failed before a response arrived."""


class ServerError(RepositoryError):
    """The backend answered with a non-success response.

    Attributes:
        status_code: HTTP status of the response, if known
        details: Human readable explanation sent by the backend
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details

    def __str__(self) -> str:
        text = super().__str__()
        if self.status_code is not None:
            text = f"{text} (HTTP {self.status_code})"
        if self.details:
            text = f"{text}: {self.details}"
        return text
