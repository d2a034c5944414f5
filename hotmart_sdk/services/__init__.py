"""
Hotmart endpoint services. Each wraps one API area on top of the shared
HotmartHttpClient.
"""

from .pages import PagesService
from .students import StudentsService
from .subscriptions import SubscriptionsService

__all__ = [
    "PagesService",
    "StudentsService",
    "SubscriptionsService",
]
