"""Untyped data bag holding one Ontraport record's raw field values."""

import re
from datetime import datetime
from typing import Any, Dict, Iterator, List, Mapping, Optional, Pattern

from ontraport_api.models.api_property import ApiField

# Account-specific custom fields are named f1234 and have no declared accessor
CUSTOM_FIELD_PATTERN = re.compile(r"^f[0-9]{4}$")


class ApiObject:
    """Raw key/value fields of one remote record.

    Values stay in their wire representation. Subclasses declare ApiField
    attributes to expose typed accessors over specific keys.
    """

    id = ApiField("id", int)
    date = ApiField("date", datetime, doc="Creation time.")
    dlm = ApiField("dlm", datetime, doc="Date last modified.")

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self.data: Dict[str, Any] = dict(data) if data else {}
        self._snapshot: Dict[str, Any] = dict(self.data)

    # ------------------------------------------------------------------ #
    # bag operations
    # ------------------------------------------------------------------ #
    def get(self, key: str) -> Optional[Any]:
        """Return the raw value for ``key``, or None if absent."""
        return self.data.get(key)

    def set(self, key: str, raw: Any) -> None:
        """Insert or overwrite the raw value for ``key``."""
        self.data[key] = raw

    def contains_key(self, key: str) -> bool:
        return key in self.data

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def keys(self) -> List[str]:
        return list(self.data)

    def to_dict(self) -> Dict[str, Any]:
        """Copy of the raw fields, ready for JSON serialization."""
        return dict(self.data)

    # ------------------------------------------------------------------ #
    # change tracking
    # ------------------------------------------------------------------ #
    def get_changes(self) -> Dict[str, Any]:
        """Raw fields added or modified since load or the last mark_clean()."""
        return {
            key: value
            for key, value in self.data.items()
            if key not in self._snapshot or self._snapshot[key] != value
        }

    def mark_clean(self) -> None:
        self._snapshot = dict(self.data)

    # ------------------------------------------------------------------ #
    # declared fields
    # ------------------------------------------------------------------ #
    @classmethod
    def fields(cls) -> Dict[str, ApiField]:
        """Declared fields by attribute name, base classes first."""
        result: Dict[str, ApiField] = {}
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, ApiField):
                    result[name] = attr
        return result

    def missing_keys(self) -> List[str]:
        """Keys of declared fields that are absent from the bag."""
        return [field.key for field in self.fields().values() if field.key not in self.data]

    def unmapped_keys(self, custom_field_pattern: Optional[Pattern[str]] = CUSTOM_FIELD_PATTERN) -> List[str]:
        """Keys in the bag with no declared field, custom fields excluded."""
        declared = {field.key for field in self.fields().values()}
        return [
            key
            for key in self.data
            if key not in declared
            and not (custom_field_pattern is not None and custom_field_pattern.match(key))
        ]

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.data.get('id')!r}, fields={len(self.data)})>"
