# API record schemas
from partymap_admin.schemas.auth import AdminLogin, AdminUser, LoginResponse
from partymap_admin.schemas.common import ListResponse, PageMeta, parse_record
from partymap_admin.schemas.customer import Customer, CustomerStatus, SubscriptionPlan
from partymap_admin.schemas.marker import Marker, MarkerType, PartyTime, TicketSlot
from partymap_admin.schemas.polygon import (
    Extrusion,
    Polygon,
    PolygonGeometry,
    PolygonStyle,
    PolygonType,
    PolygonWrite,
)

__all__ = [
    "AdminLogin",
    "AdminUser",
    "LoginResponse",
    "ListResponse",
    "PageMeta",
    "parse_record",
    "Customer",
    "CustomerStatus",
    "SubscriptionPlan",
    "Marker",
    "MarkerType",
    "PartyTime",
    "TicketSlot",
    "Extrusion",
    "Polygon",
    "PolygonGeometry",
    "PolygonStyle",
    "PolygonType",
    "PolygonWrite",
]
