"""
Object handlers that provision parts of a SharePoint site.
"""

from spprovision.handlers.base import HandlerBase
from spprovision.handlers.lists import ListsHandler

__all__ = [
    "HandlerBase",
    "ListsHandler",
]
