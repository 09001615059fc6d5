"""Generic endpoint reaching any object type by its id."""

from typing import Any, Dict, Optional

from ontraport_api.models.api_object import ApiObject
from ontraport_api.services.base_write import OntraportBaseWrite
from ontraport_api.services.request_helper import OntraportRequestHelper


class OntraportObjects(OntraportBaseWrite[ApiObject]):
    """CRUD over any object type, including custom objects, as untyped ApiObjects.

    Example:
        ```python
        tags = OntraportObjects(helper, ObjectType.TAG)
        all_tags = await tags.select_all()
        ```
    """

    endpoint_single = "object"
    endpoint_plural = "objects"
    object_class = ApiObject

    def __init__(self, api_request: OntraportRequestHelper, object_type_id: int):
        self.object_type_id = int(object_type_id)
        super().__init__(api_request)

    def _params(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params = {"objectID": self.object_type_id}
        params.update(extra or {})
        return params
