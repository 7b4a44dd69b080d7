from .search import (
    DecodeError,
    EndpointNotFoundError,
    NetworkError,
    RequestHandle,
    ResultItem,
    SearchError,
    SearchState,
    ShapeMismatch,
)

__all__ = [
    "DecodeError",
    "EndpointNotFoundError",
    "NetworkError",
    "RequestHandle",
    "ResultItem",
    "SearchError",
    "SearchState",
    "ShapeMismatch",
]
