"""Query options for selecting and deleting collections of objects."""

import json
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Ontraport returns at most 50 records per collection request
MAX_RANGE = 50


class ApiSearchOptions(BaseModel):
    """Filters shared by collection endpoints.

    Example:
        ```python
        options = ApiSearchOptions(condition='[{"field":{"field":"email"},"op":"=","value":{"value":"a@b.c"}}]')
        options = ApiSearchOptions.from_ids(1, 2, 3)
        ```
    """

    model_config = ConfigDict(extra="forbid")

    ids: List[int] = Field(default_factory=list)
    start: Optional[int] = Field(default=None, ge=0)
    range: Optional[int] = Field(default=None, ge=1, le=MAX_RANGE)
    condition: Optional[Union[str, List[Dict[str, Any]]]] = None
    search: Optional[str] = None
    search_notes: bool = False
    group_ids: List[int] = Field(default_factory=list)
    perform_all: bool = False

    @classmethod
    def from_ids(cls, *ids: int) -> "ApiSearchOptions":
        return cls(ids=list(ids))

    @property
    def selects_anything(self) -> bool:
        """Whether the options narrow a bulk operation to some records."""
        return bool(self.ids or self.group_ids or self.condition or self.search or self.perform_all)

    def to_params(self) -> Dict[str, Any]:
        """Render as Ontraport query parameters, omitting unset options."""
        params: Dict[str, Any] = {}
        if self.ids:
            params["ids"] = ",".join(str(i) for i in self.ids)
        if self.start is not None:
            params["start"] = self.start
        if self.range is not None:
            params["range"] = self.range
        if self.condition:
            params["condition"] = (
                self.condition if isinstance(self.condition, str) else json.dumps(self.condition)
            )
        if self.search:
            params["search"] = self.search
            if self.search_notes:
                params["searchNotes"] = "true"
        if self.group_ids:
            params["group_ids"] = ",".join(str(i) for i in self.group_ids)
        if self.perform_all:
            params["performAll"] = 1
        return params


class ApiSortOptions(BaseModel):
    """Sort order for collection requests."""

    model_config = ConfigDict(extra="forbid")

    sort: str
    direction: Literal["asc", "desc"] = "asc"

    def to_params(self) -> Dict[str, Any]:
        return {"sort": self.sort, "sortDir": self.direction}
