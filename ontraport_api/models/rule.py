"""Ontraport automation rule."""

from datetime import datetime

from ontraport_api.models.api_object import ApiObject
from ontraport_api.models.api_property import ApiField


class ApiRule(ApiObject):
    """A "when events, if conditions, then actions" automation rule.

    ``events``, ``conditions`` and ``actions`` hold Ontraport's rule
    expressions verbatim, e.g. ``"Contact_added_to_campaign(3)"``.
    """

    name = ApiField("name")
    events = ApiField("events")
    conditions = ApiField("conditions")
    actions = ApiField("actions")
    drip_id = ApiField("drip_id", int, doc="Sequence the rule belongs to, 0 for none.")
    object_type_id = ApiField("object_type_id", int)
    pause = ApiField("pause", bool)
    last_action = ApiField("last_action", datetime)
