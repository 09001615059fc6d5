"""Delete and write operations layered on OntraportBaseRead."""

from typing import Any, Dict, Mapping, TypeVar, Union

from ontraport_api.models.api_object import ApiObject
from ontraport_api.models.search import ApiSearchOptions
from ontraport_api.services.base_read import OntraportBaseRead

T = TypeVar("T", bound=ApiObject)

Values = Union[ApiObject, Mapping[str, Any]]


class OntraportBaseDelete(OntraportBaseRead[T]):
    """Object types whose records can be deleted."""

    async def delete(self, object_id: int) -> None:
        """Delete a single record by id."""
        await self.api_request.delete(f"/{self.endpoint_single}", params=self._params({"id": object_id}))
        self.logger.info(f"Deleted {self.endpoint_single} {object_id}")

    async def delete_multiple(self, search: ApiSearchOptions) -> None:
        """Delete every record matching the search options.

        Raises:
            ValueError: If the options select nothing; pass ``perform_all=True``
                to delete the whole collection deliberately
        """
        if not search.selects_anything:
            raise ValueError("delete_multiple needs ids, group_ids, a condition, a search or perform_all")
        await self.api_request.delete(f"/{self.endpoint_plural}", params=self._params(search.to_params()))
        self.logger.info(f"Deleted {self.endpoint_plural} matching {search.to_params()}")


class OntraportBaseWrite(OntraportBaseDelete[T]):
    """Object types whose records can be created and updated.

    Values are raw field values keyed by field key. An ApiObject passed to
    create or create_or_merge is sent whole; update sends only its changed
    fields. The object is marked clean once the request succeeds.
    """

    @staticmethod
    def _payload(values: Values, changes_only: bool = False) -> Dict[str, Any]:
        if isinstance(values, ApiObject):
            return values.get_changes() if changes_only else values.to_dict()
        return dict(values)

    @staticmethod
    def _attrs(data: Any) -> Any:
        # updates and merges answer with {"attrs": {...changed fields}}
        if isinstance(data, dict) and isinstance(data.get("attrs"), dict):
            return data["attrs"]
        return data

    def _body(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return {**self._params(), **payload}

    async def create(self, values: Values) -> T:
        """Create a record and return it as stored by Ontraport."""
        data = await self.api_request.post(f"/{self.endpoint_plural}", self._body(self._payload(values)))
        if isinstance(values, ApiObject):
            values.mark_clean()
        return self.create_object(data)

    async def update(self, object_id: int, values: Values) -> T:
        """Update fields of an existing record and return the changed fields."""
        payload = self._payload(values, changes_only=True)
        payload["id"] = object_id
        data = await self.api_request.put(f"/{self.endpoint_plural}", self._body(payload))
        if isinstance(values, ApiObject):
            values.mark_clean()
        return self.create_object(self._attrs(data))

    async def create_or_merge(self, values: Values) -> T:
        """Create a record, or merge into the existing record with the same unique field."""
        data = await self.api_request.post(
            f"/{self.endpoint_plural}/saveorupdate", self._body(self._payload(values))
        )
        if isinstance(values, ApiObject):
            values.mark_clean()
        return self.create_object(self._attrs(data))
