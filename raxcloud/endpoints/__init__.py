"""
Endpoint definitions for Rackspace cloud APIs.
"""

from .compute_endpoints import endpoint_by_name, get_compute_endpoints
from .monitoring_endpoints import get_monitoring_endpoints, monitoring_path

__all__ = ["endpoint_by_name", "get_compute_endpoints", "get_monitoring_endpoints", "monitoring_path"]
