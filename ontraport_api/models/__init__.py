"""Typed models over Ontraport's raw field data."""

from ontraport_api.models.api_object import CUSTOM_FIELD_PATTERN, ApiObject
from ontraport_api.models.api_property import ApiField, ApiProperty, ApiPropertyBase
from ontraport_api.models.contact import ApiContact, BulkMailStatus, BulkSmsStatus
from ontraport_api.models.converters import (
    BoolConverter,
    Converter,
    DateConverter,
    DateTimeConverter,
    DecimalConverter,
    EnumConverter,
    FloatConverter,
    IntConverter,
    ListConverter,
    StringConverter,
    converter_for,
)
from ontraport_api.models.object_type import ObjectType
from ontraport_api.models.responses import (
    ResponseCollectionInfo,
    ResponseMetadata,
    ResponseMetadataField,
)
from ontraport_api.models.rule import ApiRule
from ontraport_api.models.search import MAX_RANGE, ApiSearchOptions, ApiSortOptions

__all__ = [
    "ApiObject",
    "CUSTOM_FIELD_PATTERN",
    "ApiField",
    "ApiProperty",
    "ApiPropertyBase",
    "ApiContact",
    "BulkMailStatus",
    "BulkSmsStatus",
    "ApiRule",
    "ObjectType",
    "Converter",
    "StringConverter",
    "IntConverter",
    "FloatConverter",
    "DecimalConverter",
    "BoolConverter",
    "DateTimeConverter",
    "DateConverter",
    "EnumConverter",
    "ListConverter",
    "converter_for",
    "ApiSearchOptions",
    "ApiSortOptions",
    "MAX_RANGE",
    "ResponseMetadata",
    "ResponseMetadataField",
    "ResponseCollectionInfo",
]
