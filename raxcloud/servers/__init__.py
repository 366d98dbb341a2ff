"""
Next-gen compute client.
"""

from .models import Flavor, Image, Link, NewServer, Server
from .region import RegionClient, make_regional_client

__all__ = ["Flavor", "Image", "Link", "NewServer", "Server", "RegionClient", "make_regional_client"]
