"""
StructForm: a form bound to a strongly typed model.

A form class declares its fields (see ``formstate.fields``) and the model it
produces. An instance holds one child per declared field and is driven by
``set_input(address, text)`` calls, one per user edit. At any point it can be
submitted into a new model or reconciled into an existing one.

Example:
    >>> @dataclass
    ... class LoginData:
    ...     username: str = ""
    ...     password: str = ""
    >>>
    >>> class LoginForm(StructForm, model=LoginData):
    ...     username = Input(TextConversion(str))
    ...     password = Input(RawTextConversion())
    >>>
    >>> form = LoginForm()
    >>> form.set_input(LoginForm.Field.Username, "  hello")
    >>> form.set_input(LoginForm.Field.Password, "adm1n")
    >>> form.submit()
    Ok(value=LoginData(username='hello', password='adm1n'))

Class keywords:
    model: Model type built by ``submit()``. Inherited by subclasses.
    submit_with: Custom submit function, ``fn(form) -> Result``, used by
                 ``submit()`` instead of reconciling into ``model()``.
    flatten: The form is a view over one whole model value rather than one
             field per model attribute. It must declare exactly one Input,
             which receives the entire model.

Thread safety: none. Forms are mutated in place; callers serialize access.
"""

import copy
import logging
from typing import Any, ClassVar, Dict, Optional, Tuple, Type

from formstate.addressing import (
    ADDRESS_KINDS,
    Add,
    Address,
    Leaf,
    ListItem,
    OptionalAddress,
    Remove,
    SubformAddress,
    ToggleOptional,
    build_field_namespace,
)
from formstate.errors import AddressError, FormDefinitionError, ParseError
from formstate.fields import FieldKind, FormField, register_form_type
from formstate.form_input import FormInput
from formstate.result import Result
from formstate import submission

logger = logging.getLogger(__name__)


class StructForm:
    """Base class for forms. Subclass it and declare fields as class attributes."""

    __form_model__: ClassVar[Optional[Type]] = None
    __form_fields__: ClassVar[Tuple[FormField, ...]] = ()
    __form_field_map__: ClassVar[Dict[str, FormField]] = {}
    __form_flatten__: ClassVar[bool] = False
    Field: ClassVar[type]

    def __init_subclass__(
        cls,
        model: Optional[Type] = None,
        submit_with: Optional[Any] = None,
        flatten: Optional[bool] = None,
        **kwargs,
    ):
        super().__init_subclass__(**kwargs)

        # Parent fields first; a redeclared field keeps its parent's position
        form_fields: Dict[str, FormField] = {f.name: f for f in cls.__form_fields__}
        for value in cls.__dict__.values():
            if isinstance(value, FormField):
                form_fields[value.name] = value

        cls.__form_fields__ = tuple(form_fields.values())
        cls.__form_field_map__ = form_fields
        if model is not None:
            cls.__form_model__ = model
        if flatten is not None:
            cls.__form_flatten__ = flatten

        _validate_form_class(cls)
        cls.Field = build_field_namespace(cls.__name__, cls.__form_fields__)
        register_form_type(cls)
        if submit_with is not None:
            submission.register_submit_function(cls, submit_with)

        logger.debug(
            f"Defined form {cls.__name__}: model={getattr(cls.__form_model__, '__name__', None)}, "
            f"fields={[(f.name, f.kind.value) for f in cls.__form_fields__]}"
        )

    # ========== CONSTRUCTION ==========

    def __init__(self):
        """Create an empty form: empty inputs, no optional subforms, empty lists."""
        for form_field in type(self).__form_fields__:
            setattr(self, form_field.name, form_field.default_child())

    @classmethod
    def default(cls) -> 'StructForm':
        return cls()

    @classmethod
    def from_model(cls, model: Any) -> 'StructForm':
        """Create a form showing an existing model. No input starts edited."""
        form = cls.__new__(cls)
        for form_field in cls.__form_fields__:
            if form_field.kind is FieldKind.SUBMIT_ATTEMPTED:
                child = False
            elif cls.__form_flatten__:
                child = form_field.child_from_model(model)
            else:
                child = form_field.child_from_model(getattr(model, form_field.name))
            setattr(form, form_field.name, child)
        return form

    def clone(self) -> 'StructForm':
        """Deep copy of the whole form tree."""
        return copy.deepcopy(self)

    # ========== INPUT DISPATCH ==========

    def set_input(self, address: Address, value: str = "") -> None:
        """Apply one user edit or structural operation.

        Never fails for bad text: parse failures are stored in the affected
        input. Addresses into an absent optional subform or past the end of a
        list are ignored. ``value`` is ignored by toggle, add and remove.

        Raises:
            AddressError: ``address`` does not name a field of this form with
                          the kind the address variant needs.
        """
        form_field = self._field_for_address(address)
        name = form_field.name

        if isinstance(address, Leaf):
            getattr(self, name).set_input(value)

        elif isinstance(address, ToggleOptional):
            if getattr(self, name) is not None:
                setattr(self, name, None)
                logger.debug(f"{type(self).__name__}: toggled {name} off")
            else:
                setattr(self, name, form_field.new_form())
                logger.debug(f"{type(self).__name__}: toggled {name} on")

        elif isinstance(address, OptionalAddress):
            subform = getattr(self, name)
            if subform is None:
                logger.debug(f"{type(self).__name__}: ignoring {address}, {name} is toggled off")
            else:
                subform.set_input(address.inner, value)

        elif isinstance(address, Add):
            getattr(self, name).append(form_field.new_form())

        elif isinstance(address, ListItem):
            items = getattr(self, name)
            if 0 <= address.index < len(items):
                items[address.index].set_input(address.inner, value)
            else:
                logger.debug(f"{type(self).__name__}: ignoring {address}, list has {len(items)} items")

        elif isinstance(address, Remove):
            items = getattr(self, name)
            if 0 <= address.index < len(items):
                del items[address.index]
            else:
                logger.debug(f"{type(self).__name__}: ignoring {address}, list has {len(items)} items")

        elif isinstance(address, SubformAddress):
            getattr(self, name).set_input(address.inner, value)

    def _field_for_address(self, address: Address) -> FormField:
        expected_kind = ADDRESS_KINDS.get(type(address))
        if expected_kind is None:
            raise AddressError(f"{type(self).__name__}.set_input() got a non-address: {address!r}")
        form_field = type(self).__form_field_map__.get(address.field)
        if form_field is None:
            raise AddressError(f"{type(self).__name__} has no field {address.field!r}")
        if form_field.kind is not expected_kind:
            raise AddressError(
                f"{type(address).__name__} needs a {expected_kind.value} field, "
                f"but {type(self).__name__}.{address.field} is {form_field.kind.value}"
            )
        return form_field

    # ========== SUBMISSION ==========

    def submit(self) -> Result:
        """Build a new model from the form. Marks every input as edited."""
        return submission.submit_form(self)

    def submit_update(self, model: Any) -> Result:
        """Reconcile the form into a copy of ``model``. ``model`` itself is not changed."""
        return submission.submit_form_update(self, model)

    def submit_attempted(self) -> bool:
        """True if a SubmitAttempted flag on this form (not its subforms) is set."""
        return any(
            getattr(self, form_field.name)
            for form_field in type(self).__form_fields__
            if form_field.kind is FieldKind.SUBMIT_ATTEMPTED
        )

    def has_unsaved_changes(self, pristine: Any) -> bool:
        return submission.has_unsaved_changes(self, pristine)

    def validation_error(self) -> Optional[ParseError]:
        """Form-level error to display, only after a submit was attempted."""
        return submission.form_validation_error(self)

    # ========== QUERIES ==========

    def is_empty(self) -> bool:
        """True if nothing has been entered anywhere in the form tree."""
        if type(self).__form_flatten__:
            return self.flattened_input().is_empty()
        for form_field in type(self).__form_fields__:
            child = getattr(self, form_field.name)
            kind = form_field.kind
            if kind in (FieldKind.INPUT, FieldKind.SUBFORM):
                if not child.is_empty():
                    return False
            elif kind is FieldKind.OPTIONAL_SUBFORM:
                if child is not None and not child.is_empty():
                    return False
            elif kind is FieldKind.LIST_SUBFORM:
                if not all(item.is_empty() for item in child):
                    return False
        return True

    def flattened_input(self) -> FormInput:
        """The single Input of a flattened form."""
        for form_field in type(self).__form_fields__:
            if form_field.kind is FieldKind.INPUT:
                return getattr(self, form_field.name)
        raise FormDefinitionError(f"{type(self).__name__} has no Input field")

    def __repr__(self) -> str:
        children = ", ".join(
            f"{form_field.name}={getattr(self, form_field.name, None)!r}"
            for form_field in type(self).__form_fields__
        )
        return f"{type(self).__name__}({children})"


# Names a field may not take because instances need them
_RESERVED_NAMES = frozenset(name for name in dir(StructForm) if not name.startswith('__')) | {'Field'}


def _validate_form_class(cls: Type[StructForm]) -> None:
    for form_field in cls.__form_fields__:
        if form_field.name in _RESERVED_NAMES:
            raise FormDefinitionError(
                f"{cls.__name__}.{form_field.name} clashes with a StructForm attribute; rename the field"
            )

    if cls.__form_flatten__:
        kinds = [form_field.kind for form_field in cls.__form_fields__]
        inputs = kinds.count(FieldKind.INPUT)
        others = [kind for kind in kinds if kind not in (FieldKind.INPUT, FieldKind.SUBMIT_ATTEMPTED)]
        if inputs != 1 or others:
            raise FormDefinitionError(
                f"Flattened form {cls.__name__} must declare exactly one Input and no subforms"
            )
