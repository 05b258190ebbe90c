"""
String <-> value conversions for form inputs.

A ``FormInput`` knows nothing about the type it edits. It delegates to a
``ParseAndFormat`` object that turns raw text into ``Ok(value)`` / ``Err(ParseError)``
and turns a model value back into the text shown in the input.

Policy shared by every stock conversion:

- Raw text is whitespace-trimmed before it is interpreted
  (``RawTextConversion`` is the one exception, for passwords).
- Empty text is ``Required`` for a required value, ``None`` for an
  ``OptionalConversion`` and the type's default for a ``WithDefaultConversion``.
- Numbers are read in two phases. The text is first parsed into a wide
  ``IntegerType``; any failure there is reported as ``OutOfRange`` with the
  target type's name and bounds, even when the text was not a number at all.
  The wide value is then narrowed into the target type; a failure there is
  ``ConversionFailed`` carrying the narrowing step's message.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import re
from typing import Any, Callable, Generic, List, Optional, TypeVar

from formstate.config import get_form_settings
from formstate.errors import ConversionFailed, InvalidFormat, OutOfRange, Required
from formstate.result import Err, Ok, Result, collect_results


T = TypeVar('T')

_INTEGER_PATTERN = re.compile(r'^[+-]?[0-9]+$')


class ParseAndFormat(ABC, Generic[T]):
    """Conversion contract between an input's text and a model value."""

    @abstractmethod
    def parse(self, value: str) -> Result:
        """Parse raw input text. Never raises for bad input."""

    @abstractmethod
    def format(self, value: T) -> str:
        """Render a model value as input text."""


class TextConversion(ParseAndFormat[T]):
    """Trim, then construct ``target`` from the text.

    Args:
        target: Callable building the value from trimmed text (``str``,
                ``float``, ``ipaddress.ip_address``, a ``Decimal``...).
        type_name: Human name of the type ("an IP address"). When given,
                   failures become ``InvalidFormat(type_name)``; otherwise
                   ``ConversionFailed`` with the exception's message.
    """

    def __init__(self, target: Callable[[str], T] = str, type_name: Optional[str] = None):
        self.target = target
        self.type_name = type_name

    def parse(self, value: str) -> Result:
        trimmed = value.strip()
        if not trimmed:
            return Err(Required())
        return self._convert(trimmed)

    def _convert(self, trimmed: str) -> Result:
        try:
            return Ok(self.target(trimmed))
        # ArithmeticError covers decimal.InvalidOperation
        except (ValueError, TypeError, ArithmeticError) as e:
            if self.type_name is not None:
                return Err(InvalidFormat(self.type_name))
            return Err(ConversionFailed(str(e)))

    def format(self, value: T) -> str:
        return str(value)

    def __repr__(self) -> str:
        return f"TextConversion({getattr(self.target, '__name__', self.target)!s})"


class RawTextConversion(ParseAndFormat[str]):
    """Keep the text exactly as typed. Only the empty string is rejected."""

    def parse(self, value: str) -> Result:
        if not value:
            return Err(Required())
        return Ok(value)

    def format(self, value: str) -> str:
        return value


class OptionalConversion(ParseAndFormat[Optional[T]]):
    """Empty text means ``None``; anything else goes through ``inner``."""

    def __init__(self, inner: ParseAndFormat[T]):
        self.inner = inner

    def parse(self, value: str) -> Result:
        if not value.strip():
            return Ok(None)
        return self.inner.parse(value)

    def format(self, value: Optional[T]) -> str:
        if value is None:
            return ""
        return self.inner.format(value)

    def __repr__(self) -> str:
        return f"OptionalConversion({self.inner!r})"


class WithDefaultConversion(ParseAndFormat[T]):
    """Empty text means ``default_factory()`` rather than a missing value."""

    def __init__(self, inner: ParseAndFormat[T], default_factory: Callable[[], T]):
        self.inner = inner
        self.default_factory = default_factory

    def parse(self, value: str) -> Result:
        if not value.strip():
            return Ok(self.default_factory())
        return self.inner.parse(value)

    def format(self, value: T) -> str:
        return self.inner.format(value)


@dataclass(frozen=True)
class IntegerType:
    """A bounded machine-style integer used as the wide parse target."""
    name: str
    min: int
    max: int

    def parse(self, text: str) -> int:
        """Parse decimal text. Raises ``ValueError`` on bad digits or range."""
        if not _INTEGER_PATTERN.match(text):
            raise ValueError(f"invalid digit found in string for {self.name}")
        if self.min >= 0 and text.startswith('-'):
            raise ValueError(f"invalid digit found in string for {self.name}")
        number = int(text)
        if number < self.min or number > self.max:
            raise ValueError(f"number too large or too small to fit in {self.name}")
        return number


I8 = IntegerType('i8', -2 ** 7, 2 ** 7 - 1)
I16 = IntegerType('i16', -2 ** 15, 2 ** 15 - 1)
I32 = IntegerType('i32', -2 ** 31, 2 ** 31 - 1)
I64 = IntegerType('i64', -2 ** 63, 2 ** 63 - 1)
U8 = IntegerType('u8', 0, 2 ** 8 - 1)
U16 = IntegerType('u16', 0, 2 ** 16 - 1)
U32 = IntegerType('u32', 0, 2 ** 32 - 1)
U64 = IntegerType('u64', 0, 2 ** 64 - 1)


def _identity(value: int) -> int:
    return value


class NumericConversion(ParseAndFormat[T]):
    """Two-phase numeric conversion.

    Args:
        type_name: Human name used in ``OutOfRange`` ("a port").
        wide: Integer type the text is parsed into first.
        narrow: Converts the wide integer into the target type. Raises
                ``ValueError``/``TypeError``/``OverflowError`` to reject it;
                the message becomes ``ConversionFailed.message``.
        min: Lower bound shown to the user. Defaults to ``wide.min``.
        max: Upper bound shown to the user. Defaults to ``wide.max``.
    """

    def __init__(
        self,
        type_name: str,
        wide: IntegerType,
        narrow: Optional[Callable[[int], T]] = None,
        min: Any = None,
        max: Any = None,
    ):
        self.type_name = type_name
        self.wide = wide
        self.narrow = narrow or _identity
        self.min = wide.min if min is None else min
        self.max = wide.max if max is None else max

    def parse(self, value: str) -> Result:
        trimmed = value.strip()
        if not trimmed:
            return Err(Required())
        try:
            wide_value = self.wide.parse(trimmed)
        except ValueError:
            return Err(OutOfRange(self.type_name, str(self.min), str(self.max)))
        try:
            return Ok(self.narrow(wide_value))
        except (ValueError, TypeError, OverflowError) as e:
            return Err(ConversionFailed(str(e)))

    def format(self, value: T) -> str:
        return str(value)

    def __repr__(self) -> str:
        return f"NumericConversion({self.type_name!r}, {self.wide.name})"


def integer_conversion(type_name: str, wide: IntegerType) -> NumericConversion:
    """Plain integer conversion bounded by ``wide`` (e.g. ``U16`` for a u16)."""
    return NumericConversion(type_name, wide)


class ListConversion(ParseAndFormat[List[T]]):
    """Delimited list of scalars.

    Empty segments are dropped, so empty text is an empty list. Every
    remaining segment must convert; one failure fails the whole list.
    """

    def __init__(
        self,
        element: ParseAndFormat[T],
        delimiter: Optional[str] = None,
        separator: Optional[str] = None,
    ):
        self.element = element
        self.delimiter = delimiter
        self.separator = separator

    def parse(self, value: str) -> Result:
        delimiter = self.delimiter or get_form_settings().list_delimiter
        segments = (segment.strip() for segment in value.strip().split(delimiter))
        return collect_results(self.element.parse(segment) for segment in segments if segment)

    def format(self, value: List[T]) -> str:
        separator = self.separator if self.separator is not None else get_form_settings().list_separator
        return separator.join(self.element.format(item) for item in value)

    def __repr__(self) -> str:
        return f"ListConversion({self.element!r})"
