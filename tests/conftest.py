"""
Shared fixtures for the Hotmart SDK tests.

HTTP traffic is mocked with respx; the client clock is replaced by a
controllable one so token expiry can be tested without sleeping.
"""

from typing import Any, Dict, List, Optional

import httpx
import pytest
import respx

from hotmart_sdk import HotmartConfig, HotmartHttpClient, HotmartSDK


PROD_AUTH_HOST = "api-sec-vlc.hotmart.com"
PROD_API_HOST = "developers.hotmart.com"
SANDBOX_HOST = "sandbox.hotmart.com"
AUTH_PATH = "/security/oauth/token"


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, now_ms: int = 1_700_000_000_000) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


def token_response(access_token: str = "token-1", expires_in: int = 3600) -> httpx.Response:
    return httpx.Response(200, json={
        "access_token": access_token,
        "token_type": "bearer",
        "expires_in": expires_in,
        "scope": "read write",
        "jti": "jti-123",
    })


def mock_auth(
    host: str = PROD_AUTH_HOST,
    tokens: Optional[List[str]] = None,
    expires_in: int = 3600,
) -> respx.Route:
    """Mock the OAuth token endpoint, issuing tokens in order."""
    tokens = tokens or ["token-1"]
    return respx.post(host=host, path=AUTH_PATH).mock(
        side_effect=[token_response(t, expires_in) for t in tokens]
    )


def page(items: List[Dict[str, Any]], next_page_token: Optional[str] = None) -> Dict[str, Any]:
    info: Dict[str, Any] = {"results_per_page": len(items), "total_results": len(items)}
    if next_page_token:
        info["next_page_token"] = next_page_token
    return {"items": items, "page_info": info}


@pytest.fixture
def config() -> HotmartConfig:
    return HotmartConfig(client_id="client-id", client_secret="client-secret", debug=True)


@pytest.fixture
def sandbox_config() -> HotmartConfig:
    return HotmartConfig(client_id="client-id", client_secret="client-secret", is_sandbox=True)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def client(config: HotmartConfig, clock: FakeClock, monkeypatch: pytest.MonkeyPatch) -> HotmartHttpClient:
    http_client = HotmartHttpClient(config)
    monkeypatch.setattr(http_client, "_now_ms", clock)
    return http_client


@pytest.fixture
def sdk(config: HotmartConfig, clock: FakeClock, monkeypatch: pytest.MonkeyPatch) -> HotmartSDK:
    instance = HotmartSDK(config)
    monkeypatch.setattr(instance.http_client, "_now_ms", clock)
    return instance


@pytest.fixture
def student_data() -> Dict[str, Any]:
    return {
        "user_id": "user-1",
        "engagement": "HIGH",
        "name": "Ana Souza",
        "email": "Ana@Example.com",
        "last_access_date": 1700000000,
        "role": "STUDENT",
        "first_access_date": 1690000000,
        "locale": "pt_BR",
        "plus_access": "WITHOUT_PLUS_ACCESS",
        "progress": {"completed_percentage": 50, "total": 10, "completed": 5},
        "status": "ACTIVE",
        "purchase_date": 1689000000,
        "access_count": 12,
        "is_deletable": False,
        "class_id": "class-1",
        "type": "BUYER",
    }


@pytest.fixture
def subscription_data() -> Dict[str, Any]:
    return {
        "subscriber_code": "SUB123",
        "subscription_id": 42,
        "status": "ACTIVE",
        "accession_date": 1690000000,
        "date_next_charge": 1702000000,
        "trial": False,
        "plan": {"name": "Monthly", "id": 7, "recurrency_period": 30},
        "product": {"id": 1001, "name": "Course", "ucode": "abc"},
        "price": {"value": 97.0, "currency_code": "BRL"},
        "subscriber": {"name": "Ana Souza", "email": "ana@example.com", "ucode": "u-1"},
    }
