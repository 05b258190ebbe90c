"""
Addresses: which input or structural operation a ``set_input`` call targets.

An address is a path from a form to exactly one leaf input or one
structural change (toggle, add, remove). Nested addresses wrap the address
understood by the nested form.

Every form class gets a ``Field`` namespace that builds addresses with
conventional names, derived from the snake_case field names::

    UserDetailsForm.Field.Username                 # Leaf('username')
    UserDetailsForm.Field.ToggleSecondaryAddress   # ToggleOptional('secondary_address')
    UserDetailsForm.Field.SecondaryAddress(inner)  # OptionalAddress('secondary_address', inner)
    UserDetailsForm.Field.AddAddresses             # Add('addresses')
    UserDetailsForm.Field.Addresses(0, inner)      # ListItem('addresses', 0, inner)
    UserDetailsForm.Field.RemoveAddresses(0)       # Remove('addresses', 0)
    UserDetailsForm.Field.PrimaryAddress(inner)    # SubformAddress('primary_address', inner)
"""

from dataclasses import dataclass
from functools import partial
from typing import Any, Dict, Iterable, Union

from formstate.errors import FormDefinitionError
from formstate.fields import FieldKind, FormField


@dataclass(frozen=True)
class Leaf:
    """A scalar input."""
    field: str

    def __str__(self) -> str:
        return self.field


@dataclass(frozen=True)
class ToggleOptional:
    """Switch an optional subform on (fresh, empty) or off (discarded)."""
    field: str

    def __str__(self) -> str:
        return f"toggle {self.field}"


@dataclass(frozen=True)
class OptionalAddress:
    """An address inside an optional subform."""
    field: str
    inner: 'Address'

    def __str__(self) -> str:
        return f"{self.field}?.{self.inner}"


@dataclass(frozen=True)
class Add:
    """Append an empty subform to a list."""
    field: str

    def __str__(self) -> str:
        return f"add {self.field}"


@dataclass(frozen=True)
class ListItem:
    """An address inside the list element at ``index``."""
    field: str
    index: int
    inner: 'Address'

    def __str__(self) -> str:
        return f"{self.field}[{self.index}].{self.inner}"


@dataclass(frozen=True)
class Remove:
    """Delete the list element at ``index``; later elements shift down."""
    field: str
    index: int

    def __str__(self) -> str:
        return f"remove {self.field}[{self.index}]"


@dataclass(frozen=True)
class SubformAddress:
    """An address inside a required subform."""
    field: str
    inner: 'Address'

    def __str__(self) -> str:
        return f"{self.field}.{self.inner}"


Address = Union[Leaf, ToggleOptional, OptionalAddress, Add, ListItem, Remove, SubformAddress]

# Field kind each address variant must target
ADDRESS_KINDS: Dict[type, FieldKind] = {
    Leaf: FieldKind.INPUT,
    ToggleOptional: FieldKind.OPTIONAL_SUBFORM,
    OptionalAddress: FieldKind.OPTIONAL_SUBFORM,
    Add: FieldKind.LIST_SUBFORM,
    ListItem: FieldKind.LIST_SUBFORM,
    Remove: FieldKind.LIST_SUBFORM,
    SubformAddress: FieldKind.SUBFORM,
}


def snake_to_pascal_case(name: str) -> str:
    return ''.join(part[:1].upper() + part[1:] for part in name.split('_') if part)


def build_field_namespace(form_name: str, form_fields: Iterable[FormField]) -> type:
    """Create the ``<FormName>Field`` address namespace for a form class."""
    namespace: Dict[str, Any] = {}

    def define(address_name: str, value: Any) -> None:
        if address_name in namespace:
            raise FormDefinitionError(
                f"{form_name}: fields produce the address name {address_name!r} twice"
            )
        namespace[address_name] = value

    for form_field in form_fields:
        name = form_field.name
        pascal = snake_to_pascal_case(name)
        if form_field.kind is FieldKind.INPUT:
            define(pascal, Leaf(name))
        elif form_field.kind is FieldKind.OPTIONAL_SUBFORM:
            define(f"Toggle{pascal}", ToggleOptional(name))
            define(pascal, partial(OptionalAddress, name))
        elif form_field.kind is FieldKind.LIST_SUBFORM:
            define(f"Add{pascal}", Add(name))
            define(pascal, partial(ListItem, name))
            define(f"Remove{pascal}", partial(Remove, name))
        elif form_field.kind is FieldKind.SUBFORM:
            define(pascal, partial(SubformAddress, name))

    namespace['__doc__'] = f"Addresses accepted by {form_name}.set_input()."
    return type(f"{form_name}Field", (), namespace)
