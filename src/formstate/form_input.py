"""
FormInput: one scalar field's raw text, parsed value and edit state.

Lifecycle:
- Created from a model value (``from_model``) or empty (``FormInput(conversion)``)
- Mutated only through ``set_input`` on every user edit
- Read through ``submit`` when the enclosing form is submitted

``initial_input`` records the text the input started with and is never
rewritten, so ``reset()`` and ``is_changed()`` can compare against it.
"""

import copy
from typing import Generic, Optional, TypeVar

from formstate.conversion import ParseAndFormat
from formstate.errors import ParseError
from formstate.result import Ok, Result

T = TypeVar('T')


class FormInput(Generic[T]):
    """Scalar input cell.

    Attributes:
        conversion: Parse/format strategy for the edited type
        initial_input: Text at construction time
        input: Current raw text, exactly as typed
        value: ``conversion.parse(input)``, kept in sync by ``set_input``
        is_edited: True once the user typed here or the form was submitted.
                   Validation messages stay hidden until then.
    """

    def __init__(self, conversion: ParseAndFormat[T]):
        self.conversion = conversion
        self.initial_input = ""
        self.input = ""
        self.value: Result = conversion.parse("")
        self.is_edited = False

    @classmethod
    def from_model(cls, conversion: ParseAndFormat[T], value: T) -> 'FormInput[T]':
        """Create an input showing an existing model value."""
        cell = cls.__new__(cls)
        cell.conversion = conversion
        cell.initial_input = conversion.format(value)
        cell.input = cell.initial_input
        cell.value = Ok(copy.deepcopy(value))
        cell.is_edited = False
        return cell

    def set_input(self, value: str) -> None:
        """Store raw text and its parse result. Never raises for bad input."""
        self.value = self.conversion.parse(value)
        self.input = value
        self.is_edited = True

    def submit(self) -> Result:
        """Return a copy of the current parse result and mark the input as edited.

        Edits to the returned value never reach the form.
        """
        self.is_edited = True
        return copy.deepcopy(self.value)

    def is_empty(self) -> bool:
        return self.input == ""

    def is_changed(self) -> bool:
        """True if the text differs from what the input started with."""
        return self.input != self.initial_input

    def show_validation_msg(self) -> bool:
        return self.is_edited and self.value.is_err()

    def validation_error(self) -> Optional[ParseError]:
        """The parse error, but only once the user has touched the input."""
        if self.show_validation_msg():
            return self.value.err()
        return None

    def clear(self) -> None:
        """Empty the input without flagging it as edited."""
        self.set_input("")
        self.is_edited = False

    def reset(self) -> None:
        """Go back to the initial text, discarding edits."""
        self.set_input(self.initial_input)
        self.is_edited = False

    def __deepcopy__(self, memo: dict) -> 'FormInput[T]':
        # Conversions are stateless and shared between copies
        cell = type(self).__new__(type(self))
        memo[id(self)] = cell
        cell.conversion = self.conversion
        cell.initial_input = self.initial_input
        cell.input = self.input
        cell.value = copy.deepcopy(self.value, memo)
        cell.is_edited = self.is_edited
        return cell

    def __repr__(self) -> str:
        return (
            f"FormInput(input={self.input!r}, value={self.value!r}, "
            f"is_edited={self.is_edited})"
        )
