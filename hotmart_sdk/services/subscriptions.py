"""
Payments subscriptions endpoints and predicates.
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, TypeVar

from ..errors import ValidationError
from ..types import (
    CANCELLED_STATUSES,
    ApiResponse,
    CancelSubscriptionRequest,
    ChangeBillingDayRequest,
    GetSubscriptionsOptions,
    GetSubscriptionsSummaryOptions,
    PageInfo,
    ReactivateSubscriptionRequest,
    Subscription,
    SubscriptionAccess,
    SubscriptionActionResponse,
    SubscriptionSummary,
    from_timestamp,
)

if TYPE_CHECKING:
    from ..client import HotmartHttpClient


SUBSCRIPTIONS_PATH = "/payments/api/v1/subscriptions"
PAGE_SIZE = 100

T = TypeVar("T")


def _to_api_response(response: Optional[Dict[str, Any]], parse: Callable[[Dict[str, Any]], T]) -> ApiResponse[T]:
    response = response or {}
    return ApiResponse(
        items=[parse(item) for item in response.get("items") or []],
        page_info=PageInfo.from_dict(response.get("page_info") or {}),
    )


class SubscriptionsService:
    """Payments subscription operations."""

    def __init__(self, client: "HotmartHttpClient") -> None:
        self._client = client

    async def get_subscriptions(
        self, options: Optional[GetSubscriptionsOptions] = None
    ) -> ApiResponse[Subscription]:
        options = options or GetSubscriptionsOptions()
        response = await self._client.get(SUBSCRIPTIONS_PATH, params=options.to_params())
        return _to_api_response(response, Subscription.from_dict)

    async def get_subscriptions_summary(
        self, options: Optional[GetSubscriptionsSummaryOptions] = None
    ) -> ApiResponse[SubscriptionSummary]:
        options = options or GetSubscriptionsSummaryOptions()
        response = await self._client.get(f"{SUBSCRIPTIONS_PATH}/summary", params=options.to_params())
        return _to_api_response(response, SubscriptionSummary.from_dict)

    async def get_subscription_by_code(self, subscriber_code: str) -> Optional[Subscription]:
        response = await self.get_subscriptions(GetSubscriptionsOptions(subscriber_code=subscriber_code))
        return response.items[0] if response.items else None

    async def get_subscriptions_by_email(self, email: str) -> List[Subscription]:
        response = await self.get_subscriptions(GetSubscriptionsOptions(subscriber_email=email))
        return response.items

    # =========================================================================
    # Actions
    # =========================================================================

    async def cancel_subscriptions(self, request: CancelSubscriptionRequest) -> SubscriptionActionResponse:
        response = await self._client.post(f"{SUBSCRIPTIONS_PATH}/cancel", json=request.to_dict())
        return SubscriptionActionResponse.from_dict(response)

    async def cancel_subscription(self, subscriber_code: str, send_mail: bool = True) -> SubscriptionActionResponse:
        return await self.cancel_subscriptions(CancelSubscriptionRequest(
            subscriber_code=[subscriber_code],
            send_mail=send_mail,
        ))

    async def reactivate_subscriptions(self, request: ReactivateSubscriptionRequest) -> SubscriptionActionResponse:
        response = await self._client.post(f"{SUBSCRIPTIONS_PATH}/reactivate", json=request.to_dict())
        return SubscriptionActionResponse.from_dict(response)

    async def reactivate_subscription(self, subscriber_code: str, charge: bool = False) -> SubscriptionActionResponse:
        response = await self._client.post(
            f"{SUBSCRIPTIONS_PATH}/{subscriber_code}/reactivate",
            json={"charge": charge},
        )
        return SubscriptionActionResponse.from_dict(response)

    async def change_billing_day(self, subscriber_code: str, due_day: int) -> None:
        """
        Change the monthly charge day of a subscription.

        Raises:
            ValidationError: If due_day is outside 1-31. Nothing is sent.
        """
        if due_day < 1 or due_day > 31:
            raise ValidationError("Due day must be between 1 and 31", details={"due_day": due_day})

        await self._client.patch(
            f"{SUBSCRIPTIONS_PATH}/{subscriber_code}",
            json=ChangeBillingDayRequest(due_day=due_day).to_dict(),
        )

    async def bulk_cancel_subscriptions(
        self, subscriber_codes: List[str], send_mail: bool = True
    ) -> SubscriptionActionResponse:
        return await self.cancel_subscriptions(CancelSubscriptionRequest(
            subscriber_code=subscriber_codes,
            send_mail=send_mail,
        ))

    async def bulk_reactivate_subscriptions(
        self, subscriber_codes: List[str], charge: bool = False
    ) -> SubscriptionActionResponse:
        return await self.reactivate_subscriptions(ReactivateSubscriptionRequest(
            subscriber_code=subscriber_codes,
            charge=charge,
        ))

    # =========================================================================
    # Predicates and accessors
    # =========================================================================

    def is_active_subscription(self, subscription: Subscription) -> bool:
        return subscription.status == "ACTIVE"

    def is_inactive_subscription(self, subscription: Subscription) -> bool:
        return subscription.status == "INACTIVE"

    def is_cancelled_subscription(self, subscription: Subscription) -> bool:
        return subscription.status in CANCELLED_STATUSES

    def is_overdue_subscription(self, subscription: Subscription) -> bool:
        return subscription.status == "OVERDUE"

    def is_trial_subscription(self, subscription: Subscription) -> bool:
        return subscription.trial

    def get_accession_date(self, subscription: Subscription) -> datetime:
        return datetime.fromtimestamp(subscription.accession_date, tz=timezone.utc)

    def get_end_accession_date(self, subscription: Subscription) -> Optional[datetime]:
        return from_timestamp(subscription.end_accession_date)

    def get_next_charge_date(self, subscription: Subscription) -> Optional[datetime]:
        return from_timestamp(subscription.date_next_charge)

    # =========================================================================
    # Aggregations
    # =========================================================================

    async def verify_subscription_access(self, email: str) -> SubscriptionAccess:
        subscriptions = await self.get_subscriptions_by_email(email)
        active = [s for s in subscriptions if self.is_active_subscription(s)]
        return SubscriptionAccess(
            has_active_subscription=bool(active),
            subscriptions=subscriptions,
            active_subscriptions=active,
        )

    async def _get_all(self, options: GetSubscriptionsOptions) -> List[Subscription]:
        """Follow next_page_token until the listing is exhausted."""
        subscriptions: List[Subscription] = []
        options = replace(options, max_results=PAGE_SIZE, page_token=None)

        while True:
            response = await self.get_subscriptions(options)
            subscriptions.extend(response.items)

            if not response.page_info.next_page_token:
                return subscriptions
            options = replace(options, page_token=response.page_info.next_page_token)

    async def get_all_active_subscriptions(self, product_id: Optional[int] = None) -> List[Subscription]:
        return await self._get_all(GetSubscriptionsOptions(product_id=product_id, status=["ACTIVE"]))

    async def get_all_overdue_subscriptions(self, product_id: Optional[int] = None) -> List[Subscription]:
        return await self._get_all(GetSubscriptionsOptions(product_id=product_id, status=["OVERDUE"]))

    async def get_all_cancelled_subscriptions(self, product_id: Optional[int] = None) -> List[Subscription]:
        return await self._get_all(GetSubscriptionsOptions(
            product_id=product_id,
            status=list(CANCELLED_STATUSES),
        ))

    async def get_subscriptions_by_date_range(
        self,
        start_date: datetime,
        end_date: datetime,
        product_id: Optional[int] = None,
    ) -> List[Subscription]:
        """All subscriptions whose accession date falls between the two dates."""
        return await self._get_all(GetSubscriptionsOptions(
            product_id=product_id,
            accession_date=int(start_date.timestamp()),
            end_accession_date=int(end_date.timestamp()),
        ))
