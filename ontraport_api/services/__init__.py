"""Resource services backed by the Ontraport REST API."""

from ontraport_api.services.base_read import OntraportBaseRead
from ontraport_api.services.base_write import OntraportBaseDelete, OntraportBaseWrite
from ontraport_api.services.contacts import OntraportContacts
from ontraport_api.services.objects import OntraportObjects
from ontraport_api.services.request_helper import OntraportRequestHelper
from ontraport_api.services.rules import OntraportRules

__all__ = [
    "OntraportRequestHelper",
    "OntraportBaseRead",
    "OntraportBaseDelete",
    "OntraportBaseWrite",
    "OntraportRules",
    "OntraportContacts",
    "OntraportObjects",
]
