"""Read operations shared by every Ontraport object type."""

from typing import Any, ClassVar, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from ontraport_api.core.errors import OntraportError, OntraportNotFoundError
from ontraport_api.core.logging import LoggerAdapter, get_logger
from ontraport_api.models.api_object import ApiObject
from ontraport_api.models.responses import ResponseCollectionInfo, ResponseMetadata
from ontraport_api.models.search import MAX_RANGE, ApiSearchOptions, ApiSortOptions
from ontraport_api.services.request_helper import OntraportRequestHelper

logger = get_logger(__name__)

T = TypeVar("T", bound=ApiObject)


class OntraportBaseRead(Generic[T]):
    """Select records and schema information for one object type.

    Subclasses set the endpoint names, the object type id and the ApiObject
    subclass that wraps returned records.
    """

    endpoint_single: ClassVar[str] = ""
    endpoint_plural: ClassVar[str] = ""
    object_type_id: int = -1
    object_class: Type[ApiObject] = ApiObject

    def __init__(self, api_request: OntraportRequestHelper):
        self.api_request = api_request
        self.logger = LoggerAdapter(logger, {"object_type_id": int(self.object_type_id)})

    def _params(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Query parameters every request for this object type carries."""
        return dict(extra or {})

    def create_object(self, data: Any) -> T:
        if not isinstance(data, dict):
            raise OntraportError(f"Expected a record object, got {type(data).__name__}")
        return self.object_class(data)  # type: ignore[return-value]

    async def select(self, object_id: int) -> T:
        """Fetch a single record by id.

        Raises:
            OntraportNotFoundError: If no record has this id
        """
        data = await self.api_request.get(f"/{self.endpoint_single}", params=self._params({"id": object_id}))
        if not data:
            raise OntraportNotFoundError(f"{self.endpoint_single} {object_id} not found")
        return self.create_object(data)

    def _collection_params(
        self,
        search: Optional[ApiSearchOptions],
        sort: Optional[ApiSortOptions],
        external_fields: Optional[Iterable[str]],
        list_fields: Optional[Iterable[str]],
    ) -> Dict[str, Any]:
        params = self._params(search.to_params() if search else None)
        if sort is not None:
            params.update(sort.to_params())
        if external_fields:
            params["externs"] = ",".join(external_fields)
        if list_fields:
            params["listFields"] = ",".join(list_fields)
        return params

    async def select_multiple(
        self,
        search: Optional[ApiSearchOptions] = None,
        sort: Optional[ApiSortOptions] = None,
        external_fields: Optional[Iterable[str]] = None,
        list_fields: Optional[Iterable[str]] = None,
    ) -> List[T]:
        """Fetch one page of records matching the search options.

        Args:
            search: Filters plus ``start``/``range`` paging
            sort: Sort field and direction
            external_fields: Related-object fields to include, e.g. ``contact//firstname``
            list_fields: Restrict the returned fields to these keys
        """
        params = self._collection_params(search, sort, external_fields, list_fields)
        data = await self.api_request.get(f"/{self.endpoint_plural}", params=params)
        if data is None:
            return []
        if not isinstance(data, list):
            raise OntraportError(f"Expected a list of records, got {type(data).__name__}")
        return [self.create_object(record) for record in data]

    async def select_all(
        self,
        search: Optional[ApiSearchOptions] = None,
        sort: Optional[ApiSortOptions] = None,
        external_fields: Optional[Iterable[str]] = None,
        list_fields: Optional[Iterable[str]] = None,
        page_size: int = MAX_RANGE,
    ) -> List[T]:
        """Fetch every matching record, following ``start``/``range`` pages.

        Raises:
            ValueError: If page_size is outside 1..50, Ontraport's page cap
        """
        if not 1 <= page_size <= MAX_RANGE:
            raise ValueError(f"page_size must be between 1 and {MAX_RANGE}")
        search = search or ApiSearchOptions()
        start = search.start or 0
        all_records: List[T] = []

        while True:
            page_options = search.model_copy(update={"start": start, "range": page_size})
            page = await self.select_multiple(page_options, sort, external_fields, list_fields)
            all_records.extend(page)
            self.logger.debug(f"Fetched {len(page)} {self.endpoint_plural} from offset {start}")

            if len(page) < page_size:
                break
            start += page_size

        return all_records

    async def get_metadata(self) -> ResponseMetadata:
        """Fetch the field schema of this object type (cached when Redis is configured)."""
        data = await self.api_request.get(
            f"/{self.endpoint_plural}/meta",
            params=self._params(),
            use_cache=True,
        )
        return ResponseMetadata.from_response(data)

    async def get_collection_info(self, search: Optional[ApiSearchOptions] = None) -> ResponseCollectionInfo:
        """Fetch list columns and the number of records matching the search."""
        params = self._params(search.to_params() if search else None)
        data = await self.api_request.get(f"/{self.endpoint_plural}/getInfo", params=params)
        return ResponseCollectionInfo.model_validate(data or {})
