"""Customer service - customer account endpoints."""

import logging
from typing import Any

from partymap_admin.client import ApiClient
from partymap_admin.schemas.common import ListResponse, parse_record, unwrap_data
from partymap_admin.schemas.customer import Customer
from partymap_admin.services.query_builder import QueryFilter, to_request_params

logger = logging.getLogger(__name__)


async def list_customers(client: ApiClient, query: QueryFilter) -> ListResponse[Customer]:
    data = await client.get("/customers", params=to_request_params(query))
    return parse_record(ListResponse[Customer], data)


async def get_customer(client: ApiClient, customer_id: str) -> Customer:
    data = await client.get(f"/customers/{customer_id}")
    return parse_record(Customer, unwrap_data(data))


async def create_customer(client: ApiClient, customer: Customer) -> Any:
    return await client.post("/customers", json=customer.to_api())


async def update_customer(client: ApiClient, customer_id: str, customer: Customer) -> Any:
    return await client.put(f"/customers/{customer_id}", json=customer.to_api())


async def delete_customer(client: ApiClient, customer_id: str) -> Any:
    return await client.delete(f"/customers/{customer_id}")


async def suspend_customer(client: ApiClient, customer_id: str) -> Any:
    result = await client.patch(f"/customers/{customer_id}/suspend")
    logger.info(f"Suspended customer {customer_id}")
    return result


async def activate_customer(client: ApiClient, customer_id: str) -> Any:
    result = await client.patch(f"/customers/{customer_id}/activate")
    logger.info(f"Activated customer {customer_id}")
    return result
