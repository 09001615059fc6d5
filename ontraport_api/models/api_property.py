"""Typed property accessors over an ApiObject data bag.

An accessor is a view bound to one (bag, key) pair. It never caches: every
read goes to the bag and every write lands in the bag as the converter's raw
string, so the typed value and the raw value cannot drift apart.

Example:
    ```python
    rule = ApiObject({"drip_id": "0"})
    prop = ApiProperty(rule, "drip_id", int)
    prop.has_value, prop.value  # (True, 0)
    prop.value = 5
    rule.data["drip_id"]  # "5"
    ```
"""

from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from ontraport_api.models.converters import Converter, converter_for

if TYPE_CHECKING:
    from ontraport_api.models.api_object import ApiObject

T = TypeVar("T")

VALUE_SUFFIX = "_value"


class ApiPropertyBase(Generic[T]):
    """Accessor for one key of a data bag, converting with an explicit converter."""

    __slots__ = ("host", "key", "converter")

    def __init__(self, host: "ApiObject", key: str, converter: Converter[T]):
        if host is None:
            raise TypeError("host must not be None")
        if not isinstance(key, str):
            raise TypeError(f"key must be a str, not {type(key).__name__}")
        self.host = host
        self.key = key
        self.converter = converter

    @property
    def has_key(self) -> bool:
        """Whether the key exists in the bag, whatever its value."""
        return self.host.contains_key(self.key)

    @property
    def has_value(self) -> bool:
        """Whether the key exists with a non-empty raw value.

        Presence is about the raw string: ``"0"`` has a value even though it
        parses to a falsy ``0``.
        """
        raw = self.host.get(self.key)
        return raw is not None and str(raw) != ""

    @property
    def raw_value(self) -> str:
        """The stored raw string, or ``""`` when the key is absent or null."""
        raw = self.host.get(self.key)
        return "" if raw is None else str(raw)

    @property
    def value(self) -> Optional[T]:
        """The raw value converted to T, or the converter default when there is none.

        Raises:
            ConversionError: If the stored raw value does not parse
        """
        if not self.has_value:
            return self.converter.default
        return self.converter.parse(self.raw_value)

    @value.setter
    def value(self, value: Optional[T]) -> None:
        # None clears the field but keeps the key, unlike a never-set key
        raw = "" if value is None else self.converter.render(value)
        self.host.set(self.key, raw)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key={self.key!r}, raw_value={self.raw_value!r})"


class ApiProperty(ApiPropertyBase[T]):
    """Accessor whose converter is resolved from a Python type.

    Args:
        host: The data bag to read and write
        key: Field key in the bag
        kind: A type (str, int, float, Decimal, bool, datetime, date, an Enum
            subclass) or a Converter instance. Defaults to str.
    """

    __slots__ = ()

    def __init__(self, host: "ApiObject", key: str, kind: Any = str):
        super().__init__(host, key, converter_for(kind))


class ApiField(Generic[T]):
    """Declares a typed field on an ApiObject subclass.

    Declaring ``name = ApiField("name")`` gives every instance two attributes:
    ``obj.name``, an ApiProperty bound to the instance's bag, and
    ``obj.name_value``, the typed value itself for reading and assignment.
    The key defaults to the attribute name.
    """

    def __init__(self, key: Optional[str] = None, kind: Any = str, doc: Optional[str] = None):
        self.key = key
        self.converter = converter_for(kind)
        self.name: Optional[str] = None
        self.__doc__ = doc

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        if self.key is None:
            self.key = name

        value_name = name + VALUE_SUFFIX
        if value_name in owner.__dict__:
            return

        def fget(obj: "ApiObject") -> Optional[T]:
            return self.bind(obj).value

        def fset(obj: "ApiObject", value: Optional[T]) -> None:
            self.bind(obj).value = value

        setattr(owner, value_name, property(fget, fset, doc=f"Typed value of {self.key!r}."))

    def bind(self, obj: "ApiObject") -> ApiPropertyBase[T]:
        return ApiPropertyBase(obj, self.key, self.converter)

    def __get__(self, obj: Optional["ApiObject"], owner: Optional[type] = None) -> Any:
        if obj is None:
            return self
        return self.bind(obj)

    def __set__(self, obj: "ApiObject", value: Any) -> None:
        raise AttributeError(
            f"Cannot assign to field {self.name!r}; set {self.name}{VALUE_SUFFIX} instead"
        )

    def __repr__(self) -> str:
        return f"ApiField(key={self.key!r}, converter={self.converter!r})"
