"""Safe accessor over loosely typed JSON-RPC payloads.

Responses from the node are arbitrary nested JSON. Rather than assuming a
fixed schema, fetchers wrap each response in a :class:`Payload` and ask for
"field X as type T, or absent". A missing or wrongly typed field yields the
caller's default instead of raising.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any


class PayloadKind(str, Enum):
    """JSON value kinds a payload can hold."""

    MAPPING = "mapping"
    LIST = "list"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"
    OTHER = "other"


def _kind_of(value: Any) -> PayloadKind:
    if value is None:
        return PayloadKind.NULL
    # bool before number: bool is an int subclass
    if isinstance(value, bool):
        return PayloadKind.BOOL
    if isinstance(value, (int, float)):
        return PayloadKind.NUMBER
    if isinstance(value, str):
        return PayloadKind.STRING
    if isinstance(value, Mapping):
        return PayloadKind.MAPPING
    if isinstance(value, (list, tuple)):
        return PayloadKind.LIST
    return PayloadKind.OTHER


def parse_int(value: Any, default: int = 0) -> int:
    """Leniently parse an integer from a JSON number or decimal string.

    Sui encodes u64 values as decimal strings; older responses use plain
    numbers. Anything else returns ``default``.
    """
    kind = _kind_of(value)
    if kind is PayloadKind.NUMBER:
        if isinstance(value, float) and not value.is_integer():
            return default
        return int(value)
    if kind is PayloadKind.STRING:
        try:
            return int(value.strip(), 10)
        except ValueError:
            return default
    return default


class Payload:
    """Tagged view over a JSON value with capability-checked extraction."""

    __slots__ = ("_value", "_kind")

    def __init__(self, value: Any = None) -> None:
        self._value = value
        self._kind = _kind_of(value)

    def __repr__(self) -> str:
        return f"Payload(kind={self._kind.value})"

    @property
    def kind(self) -> PayloadKind:
        return self._kind

    @property
    def raw(self) -> Any:
        """The wrapped value, unchanged."""
        return self._value

    @property
    def is_present(self) -> bool:
        return self._kind is not PayloadKind.NULL

    @property
    def is_mapping(self) -> bool:
        return self._kind is PayloadKind.MAPPING

    @property
    def is_list(self) -> bool:
        return self._kind is PayloadKind.LIST

    def has(self, key: str) -> bool:
        """Whether the payload is a mapping containing a non-null ``key``."""
        return self.is_mapping and self._value.get(key) is not None

    def child(self, key: str) -> Payload:
        """Nested payload under ``key`` (a null payload when absent)."""
        if not self.is_mapping:
            return Payload(None)
        return Payload(self._value.get(key))

    def _field(self, key: str) -> Any:
        if not self.is_mapping:
            return None
        return self._value.get(key)

    def get_str(self, key: str, default: str = "") -> str:
        value = self._field(key)
        return value if isinstance(value, str) else default

    def get_int(self, key: str, default: int = 0) -> int:
        return parse_int(self._field(key), default)

    def get_bool(self, key: str, default: bool | None = None) -> bool | None:
        value = self._field(key)
        return value if isinstance(value, bool) else default

    def get_mapping(self, key: str) -> dict[str, Any] | None:
        value = self._field(key)
        return dict(value) if isinstance(value, Mapping) else None

    def get_list(self, key: str) -> list[Any]:
        value = self._field(key)
        return list(value) if isinstance(value, (list, tuple)) else []

    def get_str_list(self, key: str) -> list[str]:
        """String items of a list field; non-string items are dropped."""
        return [item for item in self.get_list(key) if isinstance(item, str)]

    def get_version(self, key: str) -> str:
        """Object version as a decimal string, whether sent as number or string."""
        value = self._field(key)
        if _kind_of(value) is PayloadKind.NUMBER:
            parsed = parse_int(value, -1)
            return str(parsed) if parsed >= 0 else ""
        if isinstance(value, str):
            return value.strip()
        return ""

    def items(self) -> list[Payload]:
        """List elements wrapped as payloads (empty for non-lists)."""
        if not self.is_list:
            return []
        return [Payload(item) for item in self._value]
