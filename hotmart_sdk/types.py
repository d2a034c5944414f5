"""
Hotmart SDK Type Definitions

Configuration, token and record types for the Hotmart REST API.
Record classes mirror the JSON payloads returned by the Club and
Payments endpoints.
"""

import os
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Literal, Optional, TypeVar


PRODUCTION_API_URL = "https://developers.hotmart.com"
SANDBOX_API_URL = "https://sandbox.hotmart.com"
PRODUCTION_AUTH_URL = "https://api-sec-vlc.hotmart.com/security/oauth/token"
SANDBOX_AUTH_URL = "https://sandbox.hotmart.com/security/oauth/token"

T = TypeVar("T")


def from_timestamp(value: Optional[int]) -> Optional[datetime]:
    """Convert an epoch-seconds timestamp to an aware UTC datetime."""
    if not value:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


@dataclass(frozen=True)
class HotmartConfig:
    """SDK configuration options."""

    # OAuth client credentials
    client_id: str
    client_secret: str
    # Use sandbox hosts for both authentication and API calls
    is_sandbox: bool = False
    # Override for the API host (authentication host is never overridden)
    base_url: Optional[str] = None
    # Request timeout in seconds (default: 30)
    timeout: float = 30.0
    # Enable debug logging (default: False)
    debug: bool = False
    # Custom headers to include in API requests
    headers: Optional[Dict[str, str]] = None

    @property
    def api_base_url(self) -> str:
        """API host for this environment."""
        if self.base_url:
            return self.base_url.rstrip("/")
        return SANDBOX_API_URL if self.is_sandbox else PRODUCTION_API_URL

    @property
    def auth_url(self) -> str:
        """OAuth token endpoint for this environment."""
        return SANDBOX_AUTH_URL if self.is_sandbox else PRODUCTION_AUTH_URL

    @classmethod
    def from_env(cls, **overrides: Any) -> "HotmartConfig":
        """
        Build configuration from environment variables.

        Reads HOTMART_CLIENT_ID, HOTMART_CLIENT_SECRET, HOTMART_SANDBOX and
        HOTMART_BASE_URL. Keyword arguments take precedence.
        """
        values: Dict[str, Any] = {
            "client_id": os.getenv("HOTMART_CLIENT_ID", ""),
            "client_secret": os.getenv("HOTMART_CLIENT_SECRET", ""),
            "is_sandbox": os.getenv("HOTMART_SANDBOX", "").strip().lower() in ("1", "true", "yes"),
            "base_url": os.getenv("HOTMART_BASE_URL") or None,
        }
        values.update(overrides)
        return cls(**values)


@dataclass
class AccessToken:
    """Token returned by the client-credentials exchange."""

    access_token: str
    expires_in: int
    token_type: str = "bearer"
    scope: str = ""
    jti: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccessToken":
        """Create from dictionary."""
        return cls(
            access_token=data["access_token"],
            expires_in=int(data["expires_in"]),
            token_type=data.get("token_type", "bearer"),
            scope=data.get("scope", ""),
            jti=data.get("jti", ""),
        )


# =============================================================================
# Pagination
# =============================================================================

@dataclass
class PageInfo:
    """Cursor information attached to list responses."""

    results_per_page: int = 0
    total_results: Optional[int] = None
    next_page_token: Optional[str] = None
    prev_page_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PageInfo":
        return cls(
            results_per_page=data.get("results_per_page", 0),
            total_results=data.get("total_results"),
            next_page_token=data.get("next_page_token") or None,
            prev_page_token=data.get("prev_page_token") or None,
        )


@dataclass
class ApiResponse(Generic[T]):
    """Paginated list response."""

    items: List[T]
    page_info: PageInfo


# =============================================================================
# Club: Students
# =============================================================================

StudentRole = Literal["STUDENT", "FREE_STUDENT", "OWNER", "ADMIN", "CONTENT_EDITOR", "MODERATOR"]
PlusAccess = Literal[
    "WITHOUT_PLUS_ACCESS", "HOLDER", "DEPENDENT", "HOLDER_WITH_DEPENDENTS", "HOLDER_WITHOUT_DEPENDENTS"
]
StudentStatus = Literal["ACTIVE", "BLOCKED", "BLOCKED_BY_OWNER", "OVERDUE"]
StudentType = Literal["BUYER", "IMPORTED", "FREE", "OWNER", "GUEST"]
StudentEngagement = Literal["NONE", "LOW", "MEDIUM", "HIGH"]
AccessType = Literal["paid", "free", "none"]


@dataclass
class StudentProgress:
    completed_percentage: float = 0
    total: int = 0
    completed: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StudentProgress":
        return cls(
            completed_percentage=data.get("completed_percentage", 0),
            total=data.get("total", 0),
            completed=data.get("completed", 0),
        )


@dataclass
class Student:
    """Club member record."""

    user_id: str
    name: str
    email: str
    role: StudentRole
    status: StudentStatus
    type: StudentType
    plus_access: PlusAccess = "WITHOUT_PLUS_ACCESS"
    engagement: StudentEngagement = "NONE"
    progress: StudentProgress = field(default_factory=StudentProgress)
    locale: str = ""
    class_id: str = ""
    access_count: int = 0
    is_deletable: bool = False
    last_access_date: Optional[int] = None
    first_access_date: Optional[int] = None
    purchase_date: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Student":
        """Create from dictionary."""
        return cls(
            user_id=data["user_id"],
            name=data.get("name") or "",
            email=data.get("email") or "",
            role=data.get("role", "STUDENT"),
            status=data.get("status", "ACTIVE"),
            type=data.get("type", "BUYER"),
            plus_access=data.get("plus_access", "WITHOUT_PLUS_ACCESS"),
            engagement=data.get("engagement", "NONE"),
            progress=StudentProgress.from_dict(data.get("progress") or {}),
            locale=data.get("locale", ""),
            class_id=data.get("class_id", ""),
            access_count=data.get("access_count", 0),
            is_deletable=data.get("is_deletable", False),
            last_access_date=data.get("last_access_date"),
            first_access_date=data.get("first_access_date"),
            purchase_date=data.get("purchase_date"),
        )


@dataclass
class Lesson:
    page_id: str
    page_name: str
    module_name: str
    is_module_extra: bool = False
    is_completed: bool = False
    completed_date: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Lesson":
        return cls(
            page_id=data["page_id"],
            page_name=data.get("page_name", ""),
            module_name=data.get("module_name", ""),
            is_module_extra=data.get("is_module_extra", False),
            is_completed=data.get("is_completed", False),
            completed_date=data.get("completed_date"),
        )


@dataclass
class StudentLessons:
    lessons: List[Lesson] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StudentLessons":
        return cls(lessons=[Lesson.from_dict(lesson) for lesson in data.get("lessons") or []])


@dataclass
class GetStudentsOptions:
    """Query options for listing Club members."""

    subdomain: str
    email: Optional[str] = None
    max_results: Optional[int] = None
    page_token: Optional[str] = None

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {"subdomain": self.subdomain}
        if self.email:
            params["email"] = self.email
        if self.max_results:
            params["max_results"] = self.max_results
        if self.page_token:
            params["page_token"] = self.page_token
        return params


@dataclass
class StudentProgressOptions:
    subdomain: str
    user_id: str


@dataclass
class StudentAccess:
    """Result of checking a single email against the Club."""

    has_access: bool
    student: Optional[Student]
    access_type: AccessType
    status: Optional[StudentStatus]


# =============================================================================
# Club: Pages
# =============================================================================

PageType = Literal["CONTENT", "ADVERTISEMENT", "QUIZ", "WEBINAR"]
LiberationType = Literal["BY_DATE", "BY_DAYS", "BY_QUIZ"]


@dataclass
class Rate:
    rate: int
    total: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rate":
        return cls(rate=data.get("rate", 0), total=data.get("total", 0))


@dataclass
class Liberation:
    type: LiberationType
    liberation_days: Optional[int] = None
    liberation_date: Optional[str] = None
    page_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Liberation":
        return cls(
            type=data.get("type", "BY_DAYS"),
            liberation_days=data.get("liberation_days"),
            liberation_date=data.get("liberation_date"),
            page_id=data.get("page_id"),
        )


@dataclass
class Expiration:
    duration_days: int
    type: Literal["BY_DAYS"] = "BY_DAYS"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Expiration":
        return cls(duration_days=data.get("duration_days", 0), type=data.get("type", "BY_DAYS"))


@dataclass
class ClassInfo:
    """Club class (cohort) a dripping rule applies to."""

    id: str
    name: str
    default_class: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassInfo":
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            default_class=data.get("default_class", False),
        )


@dataclass
class DrippingConfig:
    liberation: Liberation
    expiration: Optional[Expiration] = None
    classes: List[ClassInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DrippingConfig":
        expiration = data.get("expiration")
        return cls(
            liberation=Liberation.from_dict(data.get("liberation") or {}),
            expiration=Expiration.from_dict(expiration) if expiration else None,
            classes=[ClassInfo.from_dict(c) for c in data.get("classes") or []],
        )


@dataclass
class Page:
    """Club module page."""

    page_id: str
    name: str
    type: PageType
    page_order: int = 0
    total_comments: int = 0
    rates: List[Rate] = field(default_factory=list)
    rates_average: float = 0
    published: bool = False
    has_media: bool = False
    dripping_configs: List[DrippingConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Page":
        """Create from dictionary."""
        return cls(
            page_id=data["page_id"],
            name=data.get("name") or "",
            type=data.get("type", "CONTENT"),
            page_order=data.get("page_order", 0),
            total_comments=data.get("total_comments", 0),
            rates=[Rate.from_dict(r) for r in data.get("rates") or []],
            rates_average=data.get("rates_average", 0),
            published=data.get("published", False),
            has_media=data.get("has_media", False),
            dripping_configs=[DrippingConfig.from_dict(d) for d in data.get("dripping_configs") or []],
        )


@dataclass
class GetPagesOptions:
    product_id: int
    module_id: str

    def to_params(self) -> Dict[str, Any]:
        return {"product_id": self.product_id}


@dataclass
class DrippingInfo:
    """Flattened view of a page dripping rule."""

    liberation_type: LiberationType
    liberation_days: Optional[int]
    liberation_date: Optional[str]
    expiration_days: Optional[int]
    classes: List[ClassInfo]


# =============================================================================
# Payments: Subscriptions
# =============================================================================

SubscriptionStatus = Literal[
    "ACTIVE",
    "INACTIVE",
    "DELAYED",
    "CANCELLED_BY_CUSTOMER",
    "CANCELLED_BY_SELLER",
    "CANCELLED_BY_ADMIN",
    "STARTED",
    "OVERDUE",
]
BillingType = Literal["SUBSCRIPTION", "SMART_INSTALLMENT", "SMART_RECOVERY"]

CANCELLED_STATUSES: List[SubscriptionStatus] = [
    "CANCELLED_BY_CUSTOMER",
    "CANCELLED_BY_SELLER",
    "CANCELLED_BY_ADMIN",
]


@dataclass
class Plan:
    name: str
    id: Optional[int] = None
    recurrency_period: Optional[int] = None
    max_charge_cycles: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Plan":
        return cls(
            name=data.get("name") or "",
            id=data.get("id"),
            recurrency_period=data.get("recurrency_period"),
            max_charge_cycles=data.get("max_charge_cycles"),
        )


@dataclass
class Product:
    id: int
    name: str
    ucode: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        return cls(id=data.get("id", 0), name=data.get("name", ""), ucode=data.get("ucode"))


@dataclass
class Price:
    value: float
    currency_code: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Price":
        return cls(value=data.get("value", 0), currency_code=data.get("currency_code", ""))


@dataclass
class Subscriber:
    name: str
    email: str
    ucode: Optional[str] = None
    id: Optional[int] = None
    phone: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subscriber":
        return cls(
            name=data.get("name") or "",
            email=data.get("email") or "",
            ucode=data.get("ucode"),
            id=data.get("id"),
            phone=data.get("phone"),
        )


@dataclass
class Subscription:
    """Payments subscription record."""

    subscriber_code: str
    subscription_id: int
    status: SubscriptionStatus
    accession_date: int
    plan: Plan
    product: Product
    subscriber: Subscriber
    trial: bool = False
    end_accession_date: Optional[int] = None
    request_date: Optional[int] = None
    date_next_charge: Optional[int] = None
    transaction: Optional[str] = None
    price: Optional[Price] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subscription":
        """Create from dictionary."""
        price = data.get("price")
        return cls(
            subscriber_code=data["subscriber_code"],
            subscription_id=data.get("subscription_id", 0),
            status=data.get("status", "INACTIVE"),
            accession_date=data.get("accession_date", 0),
            plan=Plan.from_dict(data.get("plan") or {}),
            product=Product.from_dict(data.get("product") or {}),
            subscriber=Subscriber.from_dict(data.get("subscriber") or {}),
            trial=data.get("trial", False),
            end_accession_date=data.get("end_accession_date"),
            request_date=data.get("request_date"),
            date_next_charge=data.get("date_next_charge"),
            transaction=data.get("transaction"),
            price=Price.from_dict(price) if price else None,
        )


@dataclass
class LastRecurrency:
    number: int
    request_date: int
    status: str
    transaction_number: int
    billing_type: BillingType

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LastRecurrency":
        return cls(
            number=data.get("number", 0),
            request_date=data.get("request_date", 0),
            status=data.get("status", ""),
            transaction_number=data.get("transaction_number", 0),
            billing_type=data.get("billing_type", "SUBSCRIPTION"),
        )


@dataclass
class UnpaidRecurrency:
    number: int
    charge_date: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UnpaidRecurrency":
        return cls(number=data.get("number", 0), charge_date=data.get("charge_date", 0))


@dataclass
class Offer:
    code: str


@dataclass
class SubscriptionSummary:
    """Subscription summary with recurrency details."""

    subscriber_code: str
    subscription_id: int
    status: SubscriptionStatus
    lifetime: int
    accession_date: int
    plan: Plan
    product: Product
    subscriber: Subscriber
    last_recurrency: Optional[LastRecurrency] = None
    unpaid_recurrencies: List[UnpaidRecurrency] = field(default_factory=list)
    trial: bool = False
    end_accession_date: Optional[int] = None
    offer: Optional[Offer] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SubscriptionSummary":
        last = data.get("last_recurrency")
        offer = data.get("offer")
        return cls(
            subscriber_code=data["subscriber_code"],
            subscription_id=data.get("subscription_id", 0),
            status=data.get("status", "INACTIVE"),
            lifetime=data.get("lifetime", 0),
            accession_date=data.get("accession_date", 0),
            plan=Plan.from_dict(data.get("plan") or {}),
            product=Product.from_dict(data.get("product") or {}),
            subscriber=Subscriber.from_dict(data.get("subscriber") or {}),
            last_recurrency=LastRecurrency.from_dict(last) if last else None,
            unpaid_recurrencies=[UnpaidRecurrency.from_dict(u) for u in data.get("unpaid_recurrencies") or []],
            trial=data.get("trial", False),
            end_accession_date=data.get("end_accession_date"),
            offer=Offer(code=offer["code"]) if offer else None,
        )


@dataclass
class GetSubscriptionsOptions:
    """Query options for listing subscriptions."""

    max_results: Optional[int] = None
    page_token: Optional[str] = None
    product_id: Optional[int] = None
    plan: Optional[List[str]] = None
    plan_id: Optional[int] = None
    accession_date: Optional[int] = None
    end_accession_date: Optional[int] = None
    status: Optional[List[SubscriptionStatus]] = None
    subscriber_code: Optional[str] = None
    subscriber_email: Optional[str] = None
    transaction: Optional[str] = None
    trial: Optional[bool] = None
    cancelation_date: Optional[int] = None
    end_cancelation_date: Optional[int] = None
    date_next_charge: Optional[int] = None
    end_date_next_charge: Optional[int] = None

    def to_params(self) -> Dict[str, Any]:
        """Convert to query parameters, skipping unset filters."""
        params: Dict[str, Any] = {}
        for name, value in self.__dict__.items():
            if name == "trial":
                if value is not None:
                    params[name] = value
            elif value:
                params[name] = value
        return params


@dataclass
class GetSubscriptionsSummaryOptions:
    max_results: Optional[int] = None
    page_token: Optional[str] = None
    product_id: Optional[int] = None
    subscriber_code: Optional[str] = None
    accession_date: Optional[int] = None
    end_accession_date: Optional[int] = None
    date_next_charge: Optional[int] = None

    def to_params(self) -> Dict[str, Any]:
        return {name: value for name, value in self.__dict__.items() if value}


@dataclass
class CancelSubscriptionRequest:
    subscriber_code: List[str]
    send_mail: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"subscriber_code": self.subscriber_code}
        if self.send_mail is not None:
            result["send_mail"] = self.send_mail
        return result


@dataclass
class ReactivateSubscriptionRequest:
    subscriber_code: Optional[List[str]] = None
    charge: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.subscriber_code is not None:
            result["subscriber_code"] = self.subscriber_code
        if self.charge is not None:
            result["charge"] = self.charge
        return result


@dataclass
class ChangeBillingDayRequest:
    due_day: int

    def to_dict(self) -> Dict[str, Any]:
        return {"due_day": self.due_day}


@dataclass
class SuccessSubscriptionAction:
    status: SubscriptionStatus
    subscriber_code: str
    creation_date: str
    interval_between_charges: int
    shopper: Subscriber
    current_recurrence: Optional[int] = None
    date_last_recurrence: Optional[str] = None
    date_next_charge: Optional[str] = None
    due_day: Optional[int] = None
    trial_period: Optional[int] = None
    interval_type_between_charges: Optional[str] = None
    max_charge_cycles: Optional[int] = None
    activation_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SuccessSubscriptionAction":
        return cls(
            status=data.get("status", "ACTIVE"),
            subscriber_code=data.get("subscriber_code", ""),
            creation_date=data.get("creation_date", ""),
            interval_between_charges=data.get("interval_between_charges", 0),
            shopper=Subscriber.from_dict(data.get("shopper") or {}),
            current_recurrence=data.get("current_recurrence"),
            date_last_recurrence=data.get("date_last_recurrence"),
            date_next_charge=data.get("date_next_charge"),
            due_day=data.get("due_day"),
            trial_period=data.get("trial_period"),
            interval_type_between_charges=data.get("interval_type_between_charges"),
            max_charge_cycles=data.get("max_charge_cycles"),
            activation_date=data.get("activation_date"),
        )


@dataclass
class FailSubscriptionAction:
    status: SubscriptionStatus
    error: str
    subscriber_code: str
    creation_date: str
    interval_between_charges: int
    shopper: Subscriber

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FailSubscriptionAction":
        return cls(
            status=data.get("status", "INACTIVE"),
            error=data.get("error", ""),
            subscriber_code=data.get("subscriber_code", ""),
            creation_date=data.get("creation_date", ""),
            interval_between_charges=data.get("interval_between_charges", 0),
            shopper=Subscriber.from_dict(data.get("shopper") or {}),
        )


@dataclass
class SubscriptionActionResponse:
    """Outcome of a bulk cancel/reactivate call."""

    success_subscriptions: List[SuccessSubscriptionAction] = field(default_factory=list)
    fail_subscriptions: List[FailSubscriptionAction] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SubscriptionActionResponse":
        data = data or {}
        return cls(
            success_subscriptions=[
                SuccessSubscriptionAction.from_dict(s) for s in data.get("success_subscriptions") or []
            ],
            fail_subscriptions=[
                FailSubscriptionAction.from_dict(f) for f in data.get("fail_subscriptions") or []
            ],
        )


@dataclass
class SubscriptionAccess:
    has_active_subscription: bool
    subscriptions: List[Subscription]
    active_subscriptions: List[Subscription]


# =============================================================================
# Facade results
# =============================================================================

FacadeAccessType = Literal["paid", "free", "subscription", "none"]
QuickCheckType = Literal["student", "subscriber", "both", "none"]


@dataclass
class AccessVerification:
    """Combined Club and Payments access for one email."""

    is_student: bool
    is_subscriber: bool
    has_access: bool
    access_type: FacadeAccessType
    student: Optional[Student]
    subscriptions: List[Subscription]


@dataclass
class QuickCheckResult:
    has_access: bool
    type: QuickCheckType


@dataclass
class StudentInfo:
    name: str
    role: StudentRole
    status: StudentStatus
    type: StudentType
    progress: StudentProgress
    last_access: Optional[datetime] = None
    first_access: Optional[datetime] = None


@dataclass
class SubscriptionDetail:
    subscriber_code: str
    status: SubscriptionStatus
    plan_name: str
    product_name: str
    accession_date: datetime
    next_charge_date: Optional[datetime]
    trial: bool


@dataclass
class SubscriptionInfo:
    total_subscriptions: int
    active_subscriptions: int
    subscriptions: List[SubscriptionDetail]


@dataclass
class AccessSummary:
    """Human-oriented access report for one email."""

    email: str
    has_access: bool
    access_type: FacadeAccessType
    is_active: bool
    is_student: bool
    is_subscriber: bool
    student_info: Optional[StudentInfo] = None
    subscription_info: Optional[SubscriptionInfo] = None
