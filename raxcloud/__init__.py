"""
Rackspace Cloud client
Async clients for Cloud Monitoring and next-gen compute, with keystone
authentication and transparent marker-based pagination.
"""
__version__ = "1.0.0"

from .api_client import ApiClient
from .exceptions import (
    AuthError,
    DecodeError,
    InvalidArgument,
    NotFound,
    PaginationLoopDetected,
    RaxCloudError,
    TransportError,
    UnexpectedStatus,
    UnsupportedEndpoint,
)
from .transport import AiohttpTransport, RestResponse

__all__ = [
    "ApiClient",
    "AiohttpTransport",
    "RestResponse",
    "AuthError",
    "DecodeError",
    "InvalidArgument",
    "NotFound",
    "PaginationLoopDetected",
    "RaxCloudError",
    "TransportError",
    "UnexpectedStatus",
    "UnsupportedEndpoint",
]
