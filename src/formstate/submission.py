"""
Submission: turning a populated form into ``Ok(model)`` or ``Err(ParseError)``.

Two entry points, both wired onto ``StructForm``:

- ``submit_form``: build a new model. Uses the form type's registered submit
  function when there is one (for models without a usable default),
  otherwise reconciles against ``model()``.
- ``submit_form_update``: reconcile the form into a copy of an existing model.
  Fields the form does not declare keep the existing model's values, and
  nested subforms reconcile against the matching nested model so untouched
  nested data survives.

Every field is submitted before any error is reported. Submitting marks
inputs as edited, and that side effect must reach every input so all
validation messages appear at once. Only the first error in field
declaration order is returned; errors are not aggregated.
"""

import copy
import dataclasses
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from formstate.errors import FormDefinitionError, ParseError
from formstate.fields import FieldKind, FormField
from formstate.result import Ok, Result, collect_results

logger = logging.getLogger(__name__)


# Custom submit functions keyed by form type
_submit_function_registry: Dict[Type, Callable[[Any], Result]] = {}


def register_submit_function(form_type: Type, submit_function: Callable[[Any], Result]) -> None:
    """Use ``submit_function(form)`` instead of default reconciliation for ``form_type.submit()``."""
    if form_type in _submit_function_registry:
        logger.warning(f"Overwriting submit function for {form_type.__name__}")
    _submit_function_registry[form_type] = submit_function
    logger.debug(f"Registered submit function {getattr(submit_function, '__name__', submit_function)} "
                 f"for {form_type.__name__}")


def get_submit_function(form_type: Type) -> Optional[Callable[[Any], Result]]:
    return _submit_function_registry.get(form_type)


def submit_with(form_type: Type) -> Callable:
    """Decorator form of ``register_submit_function``.

    Example:
        @submit_with(ConnectionDetailsForm)
        def submit_connection_details(form):
            ip = form.ip.submit()
            port = form.port.submit()
            ...
    """
    def decorator(submit_function: Callable[[Any], Result]) -> Callable[[Any], Result]:
        register_submit_function(form_type, submit_function)
        return submit_function
    return decorator


def mark_submit_attempted(form: Any) -> None:
    """Set every SubmitAttempted flag declared on ``form``."""
    for form_field in type(form).__form_fields__:
        if form_field.kind is FieldKind.SUBMIT_ATTEMPTED:
            setattr(form, form_field.name, True)


def default_model(form_type: Type) -> Any:
    """Construct the zero value the form reconciles into on a plain submit."""
    model_type = form_type.__form_model__
    if model_type is None:
        raise FormDefinitionError(f"{form_type.__name__} declares no model")
    try:
        return model_type()
    except TypeError as e:
        raise FormDefinitionError(
            f"{model_type.__name__} cannot be built without arguments; "
            f"register a submit function for {form_type.__name__}"
        ) from e


def rebuild_model(model: Any, updates: Dict[str, Any]) -> Any:
    """Copy ``model`` with ``updates`` applied, leaving ``model`` untouched.

    Dataclasses (frozen or not) are rebuilt with ``dataclasses.replace``;
    other objects are shallow-copied and updated with ``setattr``.
    """
    if dataclasses.is_dataclass(model) and not isinstance(model, type):
        return dataclasses.replace(model, **updates)
    model_copy = copy.copy(model)
    for field_name, value in updates.items():
        setattr(model_copy, field_name, value)
    return model_copy


def submit_form(form: Any) -> Result:
    """``StructForm.submit``."""
    form_type = type(form)
    mark_submit_attempted(form)

    submit_function = get_submit_function(form_type)
    if submit_function is not None:
        logger.debug(f"Submitting {form_type.__name__} with custom submit function")
        return submit_function(form)

    if form_type.__form_flatten__:
        return form.flattened_input().submit()

    return submit_form_update(form, default_model(form_type))


def submit_form_update(form: Any, model: Any) -> Result:
    """``StructForm.submit_update``."""
    form_type = type(form)
    mark_submit_attempted(form)

    if form_type.__form_flatten__:
        return form.flattened_input().submit()

    # Evaluate every field first so each one gets its is_edited side effect
    contributions: List[Tuple[str, Result]] = [
        (form_field.name, _submit_field(form, form_field, model))
        for form_field in form_type.__form_fields__
        if form_field.kind is not FieldKind.SUBMIT_ATTEMPTED
    ]

    for field_name, result in contributions:
        if result.is_err():
            logger.debug(f"{form_type.__name__}.{field_name} rejected submission: {result.error!r}")
            return result

    return Ok(rebuild_model(model, {field_name: result.value for field_name, result in contributions}))


def _submit_field(form: Any, form_field: FormField, model: Any) -> Result:
    child = getattr(form, form_field.name)
    kind = form_field.kind

    if kind is FieldKind.INPUT:
        return child.submit()

    existing = getattr(model, form_field.name)

    if kind is FieldKind.SUBFORM:
        return child.submit_update(existing)

    if kind is FieldKind.OPTIONAL_SUBFORM:
        # A toggled-off subform always submits as absent
        if child is None:
            return Ok(None)
        if existing is None:
            return child.submit()
        return child.submit_update(existing)

    if kind is FieldKind.LIST_SUBFORM:
        existing = existing or []
        # Length follows the form, not the existing model
        return collect_results([
            item.submit_update(existing[index]) if index < len(existing) else item.submit()
            for index, item in enumerate(child)
        ])

    raise FormDefinitionError(f"Unsupported field kind {kind!r} on {type(form).__name__}.{form_field.name}")


def has_unsaved_changes(form: Any, pristine: Any) -> bool:
    """True if submitting ``form`` over ``pristine`` would change it.

    Works on a deep copy of the whole form, so this is fine per user event
    but not for hot loops. A form that fails to submit counts as changed.
    """
    result = form.clone().submit_update(copy.deepcopy(pristine))
    if result.is_err():
        return True
    return result.value != pristine


def form_validation_error(form: Any) -> Optional[ParseError]:
    """First submission error, once a submit has been attempted on ``form``."""
    if not form.submit_attempted():
        return None
    return form.clone().submit().err()
