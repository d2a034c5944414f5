"""
Hotmart Python SDK - Basic Usage Example

Reads credentials from HOTMART_CLIENT_ID / HOTMART_CLIENT_SECRET and
checks whether an email has access to a Club area.
"""

import asyncio
import logging
import sys

from hotmart_sdk import (
    HotmartConfig,
    HotmartSDK,
    AuthenticationError,
    HotmartError,
    GetSubscriptionsOptions,
)


async def main(subdomain: str, email: str) -> None:
    config = HotmartConfig.from_env(is_sandbox=True, debug=True)

    async with HotmartSDK(config) as sdk:
        try:
            check = await sdk.quick_check(subdomain, email)
            print(f"{email}: access={check.has_access} type={check.type}")

            summary = await sdk.get_access_summary(subdomain, email)
            if summary.student_info:
                print(f"Student: {summary.student_info.name} ({summary.student_info.status})")
            if summary.subscription_info:
                for sub in summary.subscription_info.subscriptions:
                    print(f"Subscription {sub.subscriber_code}: {sub.status} - {sub.plan_name}")

            # Raw listing through the service layer
            page = await sdk.subscriptions.get_subscriptions(GetSubscriptionsOptions(max_results=5))
            print(f"First page: {len(page.items)} subscriptions")
        except AuthenticationError as e:
            print(f"Check your credentials: {e.message}")
        except HotmartError as e:
            print(f"Request failed: {e.message}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    if len(sys.argv) != 3:
        print("usage: basic_usage.py <subdomain> <email>")
        sys.exit(1)
    asyncio.run(main(sys.argv[1], sys.argv[2]))
