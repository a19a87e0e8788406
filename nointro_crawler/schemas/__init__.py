"""
nointro_crawler/schemas package marker.
"""

from nointro_crawler.schemas.status_event import StatusEvent

__all__ = ["StatusEvent"]
