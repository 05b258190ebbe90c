"""
Error types.

Two families live here and they are deliberately not mixed:

- ``ParseError`` variants are *data*. They describe why a user's input could
  not become a model value and are returned inside ``Err`` from parse and
  submit operations. Their ``str()`` is the message shown next to the field.
- ``FormDefinitionError`` and ``AddressError`` are ordinary exceptions for
  programming mistakes: a malformed form class, or an address that does not
  fit the form it was sent to.
"""

from dataclasses import dataclass


class ParseError:
    """Base of the closed set of parse failures."""

    __slots__ = ()


@dataclass(frozen=True)
class Required(ParseError):
    """Empty input where a value is mandatory."""

    def __str__(self) -> str:
        return "This field is required."


@dataclass(frozen=True)
class InvalidFormat(ParseError):
    """Input could not be read as ``required_type`` (e.g. "an IP address")."""
    required_type: str

    def __str__(self) -> str:
        return f"Expected {self.required_type}."


@dataclass(frozen=True)
class ConversionFailed(ParseError):
    """The underlying conversion rejected the input with ``message``."""
    message: str

    def __str__(self) -> str:
        return f"{self.message}."


@dataclass(frozen=True)
class OutOfRange(ParseError):
    """Numeric input outside ``[min, max]``, or not a number at all."""
    required_type: str
    min: str
    max: str

    def __str__(self) -> str:
        return f"Expected {self.required_type} between {self.min} and {self.max}."


class FormDefinitionError(TypeError):
    """A form class is declared in a way the framework cannot bind."""


class AddressError(LookupError):
    """An address names a field that is missing or has another kind."""
