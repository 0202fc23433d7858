"""Dashboard service - server-side summary endpoints."""

from typing import Any

from partymap_admin.client import ApiClient


async def get_stats(client: ApiClient) -> Any:
    return await client.get("/dashboard/stats")


async def get_recent_activity(client: ApiClient, limit: int = 10) -> Any:
    return await client.get("/dashboard/activity", params={"limit": limit})


async def get_analytics(client: ApiClient, period: str = "7d") -> Any:
    """Analytics for a period such as "7d"."""
    return await client.get("/dashboard/analytics", params={"period": period})
