"""
Hotmart SDK entry point.

HotmartSDK wires the services to a single authenticated transport and
answers cross-cutting access questions by combining Club and Payments
lookups.
"""

import asyncio
from typing import Any

from .client import HotmartHttpClient
from .services import PagesService, StudentsService, SubscriptionsService
from .types import (
    AccessSummary,
    AccessVerification,
    FacadeAccessType,
    HotmartConfig,
    QuickCheckResult,
    QuickCheckType,
    StudentInfo,
    SubscriptionDetail,
    SubscriptionInfo,
    from_timestamp,
)


class HotmartSDK:
    """
    Hotmart SDK - asynchronous client for the Hotmart REST API.

    Example:
        async with HotmartSDK(HotmartConfig(client_id, client_secret)) as sdk:
            if await sdk.has_active_access("my-club", "buyer@example.com"):
                ...
    """

    def __init__(self, config: HotmartConfig) -> None:
        self.http_client = HotmartHttpClient(config)

        self.students = StudentsService(self.http_client)
        self.subscriptions = SubscriptionsService(self.http_client)
        self.pages = PagesService(self.http_client)

    async def verify_access(self, subdomain: str, email: str) -> AccessVerification:
        """
        Check Club membership and active subscriptions for an email.

        Both lookups run concurrently. An active subscription wins over
        a Club access type when classifying.
        """
        student_access, subscription_access = await asyncio.gather(
            self.students.verify_student_access(subdomain, email),
            self.subscriptions.verify_subscription_access(email),
        )

        is_student = student_access.student is not None
        is_subscriber = subscription_access.has_active_subscription
        has_access = student_access.has_access or is_subscriber

        access_type: FacadeAccessType = "none"
        if is_subscriber:
            access_type = "subscription"
        elif student_access.access_type == "paid":
            access_type = "paid"
        elif student_access.access_type == "free":
            access_type = "free"

        return AccessVerification(
            is_student=is_student,
            is_subscriber=is_subscriber,
            has_access=has_access,
            access_type=access_type,
            student=student_access.student,
            subscriptions=subscription_access.subscriptions,
        )

    async def is_subscriber(self, email: str) -> bool:
        access = await self.subscriptions.verify_subscription_access(email)
        return access.has_active_subscription

    async def is_student(self, subdomain: str, email: str) -> bool:
        student = await self.students.get_student_by_email(subdomain, email)
        return student is not None and self.students.is_active_student(student)

    async def is_paid_student(self, subdomain: str, email: str) -> bool:
        student = await self.students.get_student_by_email(subdomain, email)
        return student is not None and self.students.is_paid_student(student)

    async def is_free_student(self, subdomain: str, email: str) -> bool:
        student = await self.students.get_student_by_email(subdomain, email)
        return student is not None and self.students.is_free_student(student)

    async def has_active_access(self, subdomain: str, email: str) -> bool:
        access = await self.verify_access(subdomain, email)
        return access.has_access

    async def get_access_summary(self, subdomain: str, email: str) -> AccessSummary:
        access = await self.verify_access(subdomain, email)

        student_info = None
        if access.student is not None:
            student = access.student
            student_info = StudentInfo(
                name=student.name,
                role=student.role,
                status=student.status,
                type=student.type,
                progress=student.progress,
                last_access=from_timestamp(student.last_access_date),
                first_access=from_timestamp(student.first_access_date),
            )

        subscription_info = None
        if access.subscriptions:
            subscription_info = SubscriptionInfo(
                total_subscriptions=len(access.subscriptions),
                active_subscriptions=sum(
                    1 for sub in access.subscriptions if self.subscriptions.is_active_subscription(sub)
                ),
                subscriptions=[
                    SubscriptionDetail(
                        subscriber_code=sub.subscriber_code,
                        status=sub.status,
                        plan_name=sub.plan.name,
                        product_name=sub.product.name,
                        accession_date=self.subscriptions.get_accession_date(sub),
                        next_charge_date=self.subscriptions.get_next_charge_date(sub),
                        trial=sub.trial,
                    )
                    for sub in access.subscriptions
                ],
            )

        return AccessSummary(
            email=email,
            has_access=access.has_access,
            access_type=access.access_type,
            is_active=access.has_access,
            is_student=access.is_student,
            is_subscriber=access.is_subscriber,
            student_info=student_info,
            subscription_info=subscription_info,
        )

    async def quick_check(self, subdomain: str, email: str) -> QuickCheckResult:
        access = await self.verify_access(subdomain, email)

        check_type: QuickCheckType = "none"
        if access.is_student and access.is_subscriber:
            check_type = "both"
        elif access.is_student:
            check_type = "student"
        elif access.is_subscriber:
            check_type = "subscriber"

        return QuickCheckResult(has_access=access.has_access, type=check_type)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.http_client.close()

    async def __aenter__(self) -> "HotmartSDK":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


def create_hotmart_sdk(config: HotmartConfig) -> HotmartSDK:
    """Create a new Hotmart SDK instance."""
    return HotmartSDK(config)
