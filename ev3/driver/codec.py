"""Value codecs for sysfs attribute text.

A codec turns the trimmed text of an attribute into a Python value and back.
Parsing failures are reported as ``ValueError``; the attribute layer turns
them into ``InternalError``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Union


class Codec(ABC):
    """Parse/stringify pair for one kind of scalar."""

    @abstractmethod
    def decode(self, text: str) -> Any:
        """Parse trimmed attribute text.

        Raises:
            ValueError: If the text is not a valid value of this kind
        """
        pass

    @abstractmethod
    def encode(self, value: Any) -> str:
        """Render a value into its wire representation."""
        pass


class IntCodec(Codec):
    def decode(self, text: str) -> int:
        return int(text)

    def encode(self, value: Any) -> str:
        if isinstance(value, bool):
            raise TypeError(f"Cannot write bool {value!r} as an integer")
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"Cannot write {value!r} as an integer without losing precision")
        return str(int(value))


class FloatCodec(Codec):
    def decode(self, text: str) -> float:
        return float(text)

    def encode(self, value: Any) -> str:
        if isinstance(value, bool):
            raise TypeError(f"Cannot write bool {value!r} as a float")
        return str(float(value))


class StrCodec(Codec):
    def decode(self, text: str) -> str:
        return text

    def encode(self, value: Any) -> str:
        return str(value)


class ListCodec(Codec):
    """Whitespace separated token sequence (e.g. ``state``, ``commands``)."""

    def decode(self, text: str) -> List[str]:
        return text.split()

    def encode(self, value: Any) -> str:
        if isinstance(value, str):
            return value
        return " ".join(str(token) for token in value)


INT = IntCodec()
FLOAT = FloatCodec()
STRING = StrCodec()
TOKENS = ListCodec()

_CODECS_BY_TYPE = {
    int: INT,
    float: FLOAT,
    str: STRING,
    list: TOKENS,
}

Kind = Union[Codec, type]


def codec_for(kind: Kind) -> Codec:
    """Resolve a codec instance or a Python type to a codec.

    Args:
        kind: Codec instance, or one of int, float, str, list

    Returns:
        The matching codec

    Raises:
        TypeError: If no codec handles ``kind``
    """
    if isinstance(kind, Codec):
        return kind
    try:
        return _CODECS_BY_TYPE[kind]
    except (KeyError, TypeError):
        raise TypeError(f"No attribute codec for {kind!r}") from None


def codec_for_value(value: Any) -> Codec:
    """Pick a codec from the runtime type of ``value``.

    Raises:
        TypeError: If ``value`` is a bool
    """
    # bool is an int subclass but sysfs has no boolean spelling
    if isinstance(value, bool):
        raise TypeError(f"No attribute codec for bool value {value!r}")
    if isinstance(value, int):
        return INT
    if isinstance(value, float):
        return FLOAT
    if isinstance(value, (list, tuple)):
        return TOKENS
    return STRING
