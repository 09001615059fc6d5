"""Typed async client for the Ontraport REST API.

Importing this package does not open any connection; build an
OntraportRequestHelper (directly or with ``from_settings``) and hand it to the
resource services.
"""

from ontraport_api.core.config import Settings, settings
from ontraport_api.core.errors import ConversionError, OntraportError
from ontraport_api.models import (
    ApiContact,
    ApiField,
    ApiObject,
    ApiProperty,
    ApiPropertyBase,
    ApiRule,
    ApiSearchOptions,
    ApiSortOptions,
    ObjectType,
)
from ontraport_api.services import (
    OntraportContacts,
    OntraportObjects,
    OntraportRequestHelper,
    OntraportRules,
)

__all__ = [
    "Settings",
    "settings",
    "OntraportError",
    "ConversionError",
    "ApiObject",
    "ApiField",
    "ApiProperty",
    "ApiPropertyBase",
    "ApiRule",
    "ApiContact",
    "ApiSearchOptions",
    "ApiSortOptions",
    "ObjectType",
    "OntraportRequestHelper",
    "OntraportRules",
    "OntraportContacts",
    "OntraportObjects",
]
