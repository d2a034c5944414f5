"""
Tests for the HotmartSDK facade.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

import httpx
import pytest
import respx

from hotmart_sdk import HotmartConfig, HotmartSDK, create_hotmart_sdk
from hotmart_sdk.errors import ApiError

from conftest import PROD_API_HOST, mock_auth, page


USERS_PATH = "/club/api/v1/users"
SUBSCRIPTIONS_PATH = "/payments/api/v1/subscriptions"


def mock_lookups(students: List[Dict[str, Any]], subscriptions: List[Dict[str, Any]]) -> None:
    respx.get(host=PROD_API_HOST, path=USERS_PATH).mock(return_value=httpx.Response(200, json=page(students)))
    respx.get(host=PROD_API_HOST, path=SUBSCRIPTIONS_PATH).mock(
        return_value=httpx.Response(200, json=page(subscriptions))
    )


class TestVerifyAccess:
    """Tests for combined access verification."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_subscriber_wins_access_type(self, sdk: HotmartSDK, student_data: Dict, subscription_data: Dict):
        auth_route = mock_auth()
        mock_lookups([student_data], [subscription_data])

        access = await sdk.verify_access("club", "ana@example.com")

        assert access.is_student is True
        assert access.is_subscriber is True
        assert access.has_access is True
        assert access.access_type == "subscription"
        assert access.student.user_id == "user-1"
        assert len(access.subscriptions) == 1
        assert auth_route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_paid_student_without_subscription(self, sdk: HotmartSDK, student_data: Dict):
        mock_auth()
        mock_lookups([student_data], [])

        access = await sdk.verify_access("club", "ana@example.com")

        assert access.is_subscriber is False
        assert access.has_access is True
        assert access.access_type == "paid"

    @pytest.mark.asyncio
    @respx.mock
    async def test_free_student(self, sdk: HotmartSDK, student_data: Dict):
        mock_auth()
        mock_lookups([dict(student_data, type="FREE", role="FREE_STUDENT")], [])

        access = await sdk.verify_access("club", "ana@example.com")

        assert access.access_type == "free"
        assert access.has_access is True

    @pytest.mark.asyncio
    @respx.mock
    async def test_nobody(self, sdk: HotmartSDK, subscription_data: Dict):
        mock_auth()
        mock_lookups([], [dict(subscription_data, status="CANCELLED_BY_CUSTOMER")])

        access = await sdk.verify_access("club", "ana@example.com")

        assert access.is_student is False
        assert access.is_subscriber is False
        assert access.has_access is False
        assert access.access_type == "none"
        assert len(access.subscriptions) == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_lookup_failure_propagates(self, sdk: HotmartSDK, student_data: Dict):
        mock_auth()
        respx.get(host=PROD_API_HOST, path=USERS_PATH).mock(return_value=httpx.Response(200, json=page([student_data])))
        respx.get(host=PROD_API_HOST, path=SUBSCRIPTIONS_PATH).mock(return_value=httpx.Response(500, json={
            "error": "server_error",
            "error_description": "Payments unavailable",
        }))

        with pytest.raises(ApiError) as exc_info:
            await sdk.verify_access("club", "ana@example.com")

        assert "Payments unavailable" in exc_info.value.message


class TestConvenienceChecks:
    """Tests for boolean helpers, summary and quick check."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_boolean_helpers(self, sdk: HotmartSDK, student_data: Dict, subscription_data: Dict):
        mock_auth()
        mock_lookups([student_data], [subscription_data])

        assert await sdk.is_subscriber("ana@example.com") is True
        assert await sdk.is_student("club", "ana@example.com") is True
        assert await sdk.is_paid_student("club", "ana@example.com") is True
        assert await sdk.is_free_student("club", "ana@example.com") is False
        assert await sdk.has_active_access("club", "ana@example.com") is True
        assert await sdk.is_student("club", "ghost@example.com") is False

    @pytest.mark.asyncio
    @respx.mock
    async def test_access_summary(self, sdk: HotmartSDK, student_data: Dict, subscription_data: Dict):
        mock_auth()
        overdue = dict(subscription_data, subscriber_code="SUB2", status="OVERDUE", date_next_charge=None)
        mock_lookups([student_data], [subscription_data, overdue])

        summary = await sdk.get_access_summary("club", "ana@example.com")

        assert summary.email == "ana@example.com"
        assert summary.has_access is True
        assert summary.is_active is True
        assert summary.access_type == "subscription"
        assert summary.student_info.name == "Ana Souza"
        assert summary.student_info.last_access == datetime.fromtimestamp(1700000000, tz=timezone.utc)
        assert summary.subscription_info.total_subscriptions == 2
        assert summary.subscription_info.active_subscriptions == 1
        details = summary.subscription_info.subscriptions
        assert details[0].plan_name == "Monthly"
        assert details[0].product_name == "Course"
        assert details[0].accession_date == datetime.fromtimestamp(1690000000, tz=timezone.utc)
        assert details[1].next_charge_date is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_access_summary_without_records(self, sdk: HotmartSDK):
        mock_auth()
        mock_lookups([], [])

        summary = await sdk.get_access_summary("club", "ghost@example.com")

        assert summary.has_access is False
        assert summary.student_info is None
        assert summary.subscription_info is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("students, active_subscription, expected", [
        (True, True, "both"),
        (True, False, "student"),
        (False, True, "subscriber"),
        (False, False, "none"),
    ])
    @respx.mock
    async def test_quick_check(
        self,
        sdk: HotmartSDK,
        student_data: Dict,
        subscription_data: Dict,
        students: bool,
        active_subscription: bool,
        expected: str,
    ):
        mock_auth()
        status = "ACTIVE" if active_subscription else "INACTIVE"
        mock_lookups([student_data] if students else [], [dict(subscription_data, status=status)])

        result = await sdk.quick_check("club", "ana@example.com")

        assert result.type == expected
        assert result.has_access is (students or active_subscription)


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self):
        async with create_hotmart_sdk(HotmartConfig(client_id="id", client_secret="secret")) as sdk:
            assert sdk.http_client.base_url == "https://developers.hotmart.com"
            sdk.http_client._get_client()
        assert sdk.http_client._http_client is None
