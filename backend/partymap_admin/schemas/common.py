"""
Shared schema plumbing: list responses and boundary parsing.
"""

from typing import Any, Generic, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from partymap_admin.exceptions import MalformedRecord

RecordT = TypeVar("RecordT", bound=BaseModel)


class ApiModel(BaseModel):
    """Base for records exchanged with the backend (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_api(self) -> dict:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class PageMeta(BaseModel):
    """Pagination metadata of a list response."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    current_page: int = Field(1, alias="currentPage")
    total_records: int = Field(0, alias="totalRecords")


class ListResponse(BaseModel, Generic[RecordT]):
    """
    `{"data": [...], "metaData": {...}}` list response.

    The polygons endpoint names the metadata `meta`; both are accepted.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    data: list[RecordT] = []
    meta: PageMeta = Field(
        default_factory=PageMeta,
        validation_alias=AliasChoices("metaData", "meta"),
    )


def parse_record(model: type[RecordT], data: Any) -> RecordT:
    """
    Validate API JSON into a record type.

    Raises:
        MalformedRecord: data does not match the record shape
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedRecord(model.__name__, e.errors(include_url=False)) from e


def unwrap_data(data: Any) -> Any:
    """Single-record endpoints answer either the record or `{"data": record}`."""
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        return data["data"]
    return data
