"""Schema responses returned by the ``meta`` and ``getInfo`` endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ontraport_api.core.errors import OntraportError


class ResponseMetadataField(BaseModel):
    """Description of one field in an object type's schema."""

    model_config = ConfigDict(extra="allow")

    alias: str = ""
    type: str = ""
    required: bool = False
    unique: bool = False
    editable: bool = True
    deletable: bool = True
    options: Optional[Dict[str, str]] = None


class ResponseMetadata(BaseModel):
    """Schema of an object type: its display name and fields keyed by field key."""

    object_type_id: int
    name: str
    fields: Dict[str, ResponseMetadataField] = Field(default_factory=dict)

    @classmethod
    def from_response(cls, data: Any) -> "ResponseMetadata":
        """Parse ``{"<object type id>": {"name": ..., "fields": {...}}}``.

        Raises:
            OntraportError: If the payload has no object type entry
        """
        if not isinstance(data, dict) or not data:
            raise OntraportError(f"Unexpected metadata payload: {data!r}")
        type_id, body = next(iter(data.items()))
        return cls(object_type_id=int(type_id), **body)


class ResponseCollectionInfo(BaseModel):
    """Column layout and record count of a collection."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    list_fields: List[str] = Field(default_factory=list, alias="listFields")
    list_field_settings: Any = Field(default=None, alias="listFieldSettings")
    count: int = 0
