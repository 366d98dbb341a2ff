"""
Configuration management for the Rackspace cloud client.
"""

from .config_loader import ConfigLoader, load_config

__all__ = ["ConfigLoader", "load_config"]
