"""Customer schemas - companies subscribed to the map product."""

from enum import Enum
from typing import Optional

from pydantic import EmailStr, Field

from partymap_admin.schemas.common import ApiModel


class SubscriptionPlan(str, Enum):
    BASIC = "Basic"
    PROFESSIONAL = "Professional"
    ENTERPRISE = "Enterprise"


class CustomerStatus(str, Enum):
    ACTIVE = "Active"
    TRIAL = "Trial"
    EXPIRED = "Expired"
    SUSPENDED = "Suspended"


class Customer(ApiModel):
    """Customer account."""
    id: Optional[str] = Field(None, alias="_id")
    name: str = Field(..., min_length=2, max_length=200)
    email: EmailStr
    plan: SubscriptionPlan
    status: CustomerStatus = CustomerStatus.ACTIVE
