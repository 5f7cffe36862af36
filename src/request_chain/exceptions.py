"""ChainException hierarchy for aborts and misuse of the dispatch layer."""

from __future__ import annotations


class ChainException(Exception):
    """Base for all chain exceptions."""


class ChainAbort(ChainException):
    """Raised by a handler to stop the chain; ChainApp renders ``status_code``."""

    def __init__(self, detail: str, *, status_code: int = 400) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class ChainInternalError(ChainException):
    """Wraps an unexpected handler exception caught by ChainApp."""

    def __init__(self, detail: str, *, cause: Exception | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.cause = cause


class ChainError(ChainException):
    """The dispatcher was driven with an unsupported ASGI scope."""


class ContextReleased(ChainException):
    """Request or response accessed on a context that is not bound."""

    def __init__(self, detail: str = "Context is not bound to a request") -> None:
        super().__init__(detail)


class ResponseClosed(ChainException):
    """Write attempted after the response was finished."""

    def __init__(self, detail: str = "Response already finished") -> None:
        super().__init__(detail)
