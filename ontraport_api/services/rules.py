"""Rules endpoint."""

from ontraport_api.models.object_type import ObjectType
from ontraport_api.models.rule import ApiRule
from ontraport_api.services.base_write import OntraportBaseDelete


class OntraportRules(OntraportBaseDelete[ApiRule]):
    """Select and delete automation rules."""

    endpoint_single = "Rule"
    endpoint_plural = "Rules"
    object_type_id = ObjectType.RULE
    object_class = ApiRule
