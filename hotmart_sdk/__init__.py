"""
Hotmart Python SDK

An asyncio client for the Hotmart REST API with client-credentials
authentication, transparent token refresh and typed wrappers for the
Club (students, pages) and Payments (subscriptions) endpoints.
"""

from .client import HotmartHttpClient
from .sdk import HotmartSDK, create_hotmart_sdk
from .services import PagesService, StudentsService, SubscriptionsService
from .storage import TokenCache, TokenState
from .types import (
    HotmartConfig,
    AccessToken,
    ApiResponse,
    PageInfo,
    Student,
    StudentProgress,
    StudentLessons,
    Lesson,
    Page,
    Subscription,
    SubscriptionSummary,
    SubscriptionActionResponse,
    GetStudentsOptions,
    StudentProgressOptions,
    GetPagesOptions,
    GetSubscriptionsOptions,
    GetSubscriptionsSummaryOptions,
    CancelSubscriptionRequest,
    ReactivateSubscriptionRequest,
    StudentAccess,
    SubscriptionAccess,
    AccessVerification,
    AccessSummary,
    QuickCheckResult,
)
from .errors import (
    HotmartError,
    ConfigurationError,
    ValidationError,
    AuthenticationError,
    NetworkError,
    ApiError,
    UnauthorizedError,
    is_hotmart_error,
)

__version__ = "0.1.0"
__all__ = [
    # Clients
    "HotmartSDK",
    "HotmartHttpClient",
    "create_hotmart_sdk",
    # Services
    "PagesService",
    "StudentsService",
    "SubscriptionsService",
    # Token cache
    "TokenCache",
    "TokenState",
    # Types
    "HotmartConfig",
    "AccessToken",
    "ApiResponse",
    "PageInfo",
    "Student",
    "StudentProgress",
    "StudentLessons",
    "Lesson",
    "Page",
    "Subscription",
    "SubscriptionSummary",
    "SubscriptionActionResponse",
    "GetStudentsOptions",
    "StudentProgressOptions",
    "GetPagesOptions",
    "GetSubscriptionsOptions",
    "GetSubscriptionsSummaryOptions",
    "CancelSubscriptionRequest",
    "ReactivateSubscriptionRequest",
    "StudentAccess",
    "SubscriptionAccess",
    "AccessVerification",
    "AccessSummary",
    "QuickCheckResult",
    # Errors
    "HotmartError",
    "ConfigurationError",
    "ValidationError",
    "AuthenticationError",
    "NetworkError",
    "ApiError",
    "UnauthorizedError",
    "is_hotmart_error",
]
