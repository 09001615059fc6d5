"""String converters for Ontraport field values.

Ontraport transmits every field as a string: numbers as decimal text, booleans
as ``"0"``/``"1"``, dates as unix timestamps in seconds, and multi-valued
fields as delimited lists. A converter maps one of these raw forms to a typed
Python value and back.

Converters never substitute a default for bad input. Anything that does not
parse raises ConversionError so that a later write-back cannot corrupt the
remote record.
"""

import math
import re
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Generic, List, Optional, Type, TypeVar

from ontraport_api.core.errors import ConversionError

T = TypeVar("T")
E = TypeVar("E", bound=Enum)

_TRUE_STRINGS = {"1", "true", "yes"}
_FALSE_STRINGS = {"0", "false", "no"}

# ASCII digits with an optional minus sign
_INT_PATTERN = re.compile(r"^-?[0-9]+$")


class Converter(Generic[T]):
    """Bidirectional mapping between a raw wire string and a typed value.

    Subclasses implement ``parse`` and ``render``. ``default`` is what a
    property returns when its key is absent or its raw value is empty.
    """

    target_name = "value"

    @property
    def default(self) -> Optional[T]:
        return None

    def parse(self, raw: str) -> T:
        raise NotImplementedError

    def render(self, value: T) -> str:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class StringConverter(Converter[str]):
    target_name = "str"

    @property
    def default(self) -> str:
        return ""

    def parse(self, raw: str) -> str:
        return str(raw)

    def render(self, value: str) -> str:
        return str(value)


class IntConverter(Converter[int]):
    """Decimal integers with optional bounds."""

    target_name = "int"

    def __init__(self, min_value: Optional[int] = None, max_value: Optional[int] = None):
        self.min_value = min_value
        self.max_value = max_value

    @property
    def default(self) -> int:
        return 0

    def _check_range(self, value: int, original: Any) -> int:
        if self.min_value is not None and value < self.min_value:
            raise ConversionError(original, self.target_name, f"below minimum {self.min_value}")
        if self.max_value is not None and value > self.max_value:
            raise ConversionError(original, self.target_name, f"above maximum {self.max_value}")
        return value

    def parse(self, raw: str) -> int:
        text = str(raw).strip()
        if not _INT_PATTERN.match(text):
            raise ConversionError(raw, self.target_name)
        value = int(text)
        return self._check_range(value, raw)

    def render(self, value: int) -> str:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConversionError(value, "raw int", "expected an int")
        return str(self._check_range(value, value))


class FloatConverter(Converter[float]):
    target_name = "float"

    @property
    def default(self) -> float:
        return 0.0

    def parse(self, raw: str) -> float:
        try:
            value = float(str(raw).strip())
        except ValueError as e:
            raise ConversionError(raw, self.target_name) from e
        if not math.isfinite(value):
            raise ConversionError(raw, self.target_name, "not a finite number")
        return value

    def render(self, value: float) -> str:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConversionError(value, "raw float", "expected a number")
        if not math.isfinite(value):
            raise ConversionError(value, "raw float", "not a finite number")
        return repr(float(value))


class DecimalConverter(Converter[Decimal]):
    """Exact decimal amounts, used for money fields such as ``spent``."""

    target_name = "Decimal"

    @property
    def default(self) -> Decimal:
        return Decimal(0)

    def parse(self, raw: str) -> Decimal:
        try:
            value = Decimal(str(raw).strip())
        except InvalidOperation as e:
            raise ConversionError(raw, self.target_name) from e
        if not value.is_finite():
            raise ConversionError(raw, self.target_name, "not a finite number")
        return value

    def render(self, value: Decimal) -> str:
        if isinstance(value, bool) or not isinstance(value, (Decimal, int)):
            raise ConversionError(value, "raw Decimal", "expected a Decimal")
        value = Decimal(value)
        if not value.is_finite():
            raise ConversionError(value, "raw Decimal", "not a finite number")
        return str(value)


class BoolConverter(Converter[bool]):
    """Ontraport flags: ``"1"`` is true and ``"0"`` is false."""

    target_name = "bool"

    @property
    def default(self) -> bool:
        return False

    def parse(self, raw: str) -> bool:
        text = str(raw).strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        raise ConversionError(raw, self.target_name)

    def render(self, value: bool) -> str:
        if not isinstance(value, bool):
            raise ConversionError(value, "raw bool", "expected a bool")
        return "1" if value else "0"


class DateTimeConverter(Converter[datetime]):
    """Unix timestamps in whole seconds, read back as aware UTC datetimes.

    Sub-second precision is dropped on render, so a written value reads back
    rounded down to the second, before 1970 as well.
    """

    target_name = "datetime"

    def parse(self, raw: str) -> datetime:
        text = str(raw).strip()
        if not _INT_PATTERN.match(text):
            raise ConversionError(raw, self.target_name)
        try:
            seconds = int(text)
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (ValueError, OverflowError, OSError) as e:
            raise ConversionError(raw, self.target_name) from e

    def render(self, value: datetime) -> str:
        if not isinstance(value, datetime):
            raise ConversionError(value, "raw datetime", "expected a datetime")
        if value.tzinfo is None:
            # naive datetimes are taken as UTC
            value = value.replace(tzinfo=timezone.utc)
        return str(math.floor(value.timestamp()))


class DateConverter(Converter[date]):
    """Calendar dates stored as the unix timestamp of UTC midnight (e.g. ``birthday``)."""

    target_name = "date"

    def parse(self, raw: str) -> date:
        return DateTimeConverter().parse(raw).date()

    def render(self, value: date) -> str:
        if isinstance(value, datetime) or not isinstance(value, date):
            raise ConversionError(value, "raw date", "expected a date")
        midnight = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
        return str(int(midnight.timestamp()))


class EnumConverter(Converter[E]):
    """Enumeration members stored by their value."""

    def __init__(self, enum_type: Type[E]):
        self.enum_type = enum_type
        self.target_name = enum_type.__name__
        self._by_raw = {str(member.value): member for member in enum_type}

    def parse(self, raw: str) -> E:
        try:
            return self._by_raw[str(raw).strip()]
        except KeyError as e:
            raise ConversionError(raw, self.target_name) from e

    def render(self, value: E) -> str:
        if not isinstance(value, self.enum_type):
            raise ConversionError(value, f"raw {self.target_name}", f"expected a {self.target_name}")
        return str(value.value)

    def __repr__(self) -> str:
        return f"EnumConverter({self.target_name})"


class ListConverter(Converter[List[T]]):
    """Delimited lists of items, each converted by ``item_converter``.

    Items may not contain the separator and empty items are dropped on parse,
    so ``render`` refuses values that would not read back unchanged.
    """

    def __init__(self, item_converter: Converter[T], separator: str = ","):
        if not separator:
            raise ValueError("separator must not be empty")
        self.item_converter = item_converter
        self.separator = separator
        self.target_name = f"list[{item_converter.target_name}]"

    @property
    def default(self) -> List[T]:
        return []

    def parse(self, raw: str) -> List[T]:
        parts = (part.strip() for part in str(raw).split(self.separator))
        return [self.item_converter.parse(part) for part in parts if part]

    def render(self, value: List[T]) -> str:
        if isinstance(value, (str, bytes)):
            raise ConversionError(value, f"raw {self.target_name}", "expected a list")
        rendered = []
        for item in value:
            text = self.item_converter.render(item)
            if self.separator in text or not text.strip() or text != text.strip():
                raise ConversionError(item, f"raw {self.target_name}", "item does not survive delimiting")
            rendered.append(text)
        return self.separator.join(rendered)

    def __repr__(self) -> str:
        return f"ListConverter({self.item_converter!r}, separator={self.separator!r})"


_DEFAULT_CONVERTERS: dict[type, Converter[Any]] = {
    str: StringConverter(),
    int: IntConverter(),
    float: FloatConverter(),
    Decimal: DecimalConverter(),
    bool: BoolConverter(),
    datetime: DateTimeConverter(),
    date: DateConverter(),
}


def converter_for(kind: Any) -> Converter[Any]:
    """Resolve a converter from a Python type or pass a Converter through.

    Args:
        kind: A Converter instance, an Enum subclass, or one of
            str, int, float, Decimal, bool, datetime, date

    Raises:
        TypeError: If no converter is registered for the type
    """
    if isinstance(kind, Converter):
        return kind
    if isinstance(kind, type) and issubclass(kind, Enum):
        return EnumConverter(kind)
    try:
        return _DEFAULT_CONVERTERS[kind]
    except (KeyError, TypeError):
        raise TypeError(f"No converter registered for {kind!r}") from None
