"""
Declarative form schema.

A form class lists its fields as class attributes::

    class UserDetailsForm(StructForm, model=UserDetails):
        username = Input(TextConversion(str))
        primary_address = Subform(AddressForm)
        secondary_address = OptionalSubform(AddressForm)
        addresses = ListSubform(AddressForm)
        submitted = SubmitAttempted()

The field kind decides what the form instance holds under that name:

    INPUT             -> FormInput
    SUBFORM           -> nested form, always present
    OPTIONAL_SUBFORM  -> nested form or None
    LIST_SUBFORM      -> list of nested forms
    SUBMIT_ATTEMPTED  -> bool, set when the form is submitted

Subform references may be form classes or class names. Names are resolved
lazily through the form type registry so a form can contain itself.
"""

from enum import Enum
import logging
from typing import Any, Dict, Optional, Type, Union

from formstate.conversion import ParseAndFormat
from formstate.errors import FormDefinitionError
from formstate.form_input import FormInput

logger = logging.getLogger(__name__)


# Form classes keyed by "module.QualifiedName", for string subform references
_form_type_registry: Dict[str, Type] = {}


def form_type_key(form_type: Type) -> str:
    return f"{form_type.__module__}.{form_type.__qualname__}"


def register_form_type(form_type: Type) -> None:
    """Make a form class resolvable by name."""
    key = form_type_key(form_type)
    existing = _form_type_registry.get(key)
    if existing is not None and existing is not form_type:
        logger.warning(f"Overwriting registered form type: {key}")
    _form_type_registry[key] = form_type


def resolve_form_type(reference: Union[str, Type], module: Optional[str] = None) -> Type:
    """Resolve a subform reference to a form class.

    A string is looked up, in order, as a full ``module.QualifiedName`` key,
    as a name in ``module`` (the module declaring the reference), and finally
    as a bare class name that must match exactly one registered form.

    Raises:
        FormDefinitionError: The name is unknown, or a bare name matches
                             forms from several modules.
    """
    if not isinstance(reference, str):
        return reference

    form_type = _form_type_registry.get(reference)
    if form_type is None and module is not None:
        form_type = _form_type_registry.get(f"{module}.{reference}")
    if form_type is not None:
        return form_type

    matches = [
        candidate for candidate in _form_type_registry.values()
        if candidate.__qualname__ == reference or candidate.__name__ == reference
    ]
    if len(matches) == 1:
        return matches[0]
    if matches:
        candidates = sorted(form_type_key(candidate) for candidate in matches)
        raise FormDefinitionError(
            f"Form type name {reference!r} is ambiguous, use one of {candidates}"
        )
    raise FormDefinitionError(f"Unknown form type referenced by name: {reference!r}")


class FieldKind(Enum):
    INPUT = "input"
    SUBFORM = "subform"
    OPTIONAL_SUBFORM = "optional_subform"
    LIST_SUBFORM = "list_subform"
    SUBMIT_ATTEMPTED = "submit_attempted"


class FormField:
    """One declared field of a form class. ``name`` is bound by ``__set_name__``."""

    kind: FieldKind

    def __init__(self):
        self.name: Optional[str] = None

    def __set_name__(self, owner: Type, name: str) -> None:
        self.name = name

    def default_child(self) -> Any:
        """Child held by a freshly constructed form."""
        raise NotImplementedError

    def child_from_model(self, value: Any) -> Any:
        """Child showing ``value``, the matching slice of the model."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class Input(FormField):
    """Scalar input edited as text."""

    kind = FieldKind.INPUT

    def __init__(self, conversion: ParseAndFormat):
        super().__init__()
        self.conversion = conversion

    def default_child(self) -> FormInput:
        return FormInput(self.conversion)

    def child_from_model(self, value: Any) -> FormInput:
        return FormInput.from_model(self.conversion, value)


class _NestedFormField(FormField):
    """Base for the three kinds that hold nested forms."""

    def __init__(self, form: Union[str, Type]):
        super().__init__()
        self._form_reference = form
        self._owner_module: Optional[str] = None

    def __set_name__(self, owner: Type, name: str) -> None:
        super().__set_name__(owner, name)
        self._owner_module = owner.__module__

    @property
    def form_type(self) -> Type:
        return resolve_form_type(self._form_reference, self._owner_module)

    def new_form(self) -> Any:
        return self.form_type()

    def form_from_model(self, value: Any) -> Any:
        return self.form_type.from_model(value)

    def __repr__(self) -> str:
        reference = self._form_reference
        form_name = reference if isinstance(reference, str) else reference.__name__
        return f"{type(self).__name__}({form_name}, name={self.name!r})"


class Subform(_NestedFormField):
    """Required nested form, always present."""

    kind = FieldKind.SUBFORM

    def default_child(self) -> Any:
        return self.new_form()

    def child_from_model(self, value: Any) -> Any:
        return self.form_from_model(value)


class OptionalSubform(_NestedFormField):
    """Nested form that is switched on and off with a toggle address."""

    kind = FieldKind.OPTIONAL_SUBFORM

    def default_child(self) -> None:
        return None

    def child_from_model(self, value: Any) -> Any:
        if value is None:
            return None
        return self.form_from_model(value)


class ListSubform(_NestedFormField):
    """Ordered list of nested forms, addressed by position."""

    kind = FieldKind.LIST_SUBFORM

    def default_child(self) -> list:
        return []

    def child_from_model(self, value: Any) -> list:
        return [self.form_from_model(item) for item in (value or [])]


class SubmitAttempted(FormField):
    """Flag recording that the form has been submitted at least once."""

    kind = FieldKind.SUBMIT_ATTEMPTED

    def default_child(self) -> bool:
        return False

    def child_from_model(self, value: Any) -> bool:
        return False
