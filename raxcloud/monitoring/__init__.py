"""
Rackspace Cloud Monitoring client.
"""

from .client import MonitoringClient, make_api_key_monitoring_client, make_password_monitoring_client
from .models import HOST_INFO_SHAPES, Check, Entity, HostInfoType

__all__ = [
    "MonitoringClient",
    "make_api_key_monitoring_client",
    "make_password_monitoring_client",
    "HOST_INFO_SHAPES",
    "Check",
    "Entity",
    "HostInfoType",
]
