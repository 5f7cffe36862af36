"""Request Chain - per-request execution context and handler chains for ASGI."""

from request_chain.app import ChainApp
from request_chain.context import ABORT_INDEX, Context
from request_chain.exceptions import (
    ChainAbort,
    ChainError,
    ChainException,
    ChainInternalError,
    ContextReleased,
    ResponseClosed,
)
from request_chain.handlers import recovery, request_logger, require_header
from request_chain.params import Param, Params
from request_chain.pool import ContextPool
from request_chain.response import ResponseWriter

__all__ = [
    "ABORT_INDEX",
    "ChainAbort",
    "ChainApp",
    "ChainError",
    "ChainException",
    "ChainInternalError",
    "Context",
    "ContextPool",
    "ContextReleased",
    "Param",
    "Params",
    "ResponseClosed",
    "ResponseWriter",
    "recovery",
    "request_logger",
    "require_header",
]
