"""
Typed form state for interactive editors.

formstate binds free-text user input to a strongly typed model and back. A
form mirrors the model's shape: scalar inputs hold raw text plus its parsed
value, and nested models become required, optional or list subforms.

Key Features:
- Per-input edit tracking, so validation messages stay hidden until the user
  has touched an input or tried to submit
- Submission into a new model, or reconciliation into an existing one that
  keeps every value the form did not touch
- Add/remove/toggle operations on nested subforms, addressed by path
- Pluggable string <-> value conversions with a shared trimming, emptiness
  and numeric-range policy

Quick Start:
    >>> from dataclasses import dataclass
    >>> from formstate import StructForm, Input, TextConversion, Ok
    >>>
    >>> @dataclass
    ... class Address:
    ...     city: str = ""
    >>>
    >>> class AddressForm(StructForm, model=Address):
    ...     city = Input(TextConversion(str))
    >>>
    >>> form = AddressForm()
    >>> form.set_input(AddressForm.Field.City, " Pretoria ")
    >>> form.submit() == Ok(Address(city="Pretoria"))
    True

Modules:
    - result: Ok/Err values returned by parse and submit
    - errors: ParseError variants and programmer-error exceptions
    - config: Framework settings (list delimiter/separator)
    - conversion: Conversion contract and stock conversions
    - form_input: FormInput, the per-field input cell
    - fields: Declarative field kinds
    - addressing: Addresses and per-form address namespaces
    - submission: Submission and reconciliation
    - form: StructForm base class
"""

from formstate.result import Ok, Err, Result, UnwrapError, collect_results

from formstate.errors import (
    ParseError,
    Required,
    InvalidFormat,
    ConversionFailed,
    OutOfRange,
    FormDefinitionError,
    AddressError,
)

from formstate.config import (
    FormSettings,
    get_form_settings,
    set_form_settings,
    reset_form_settings,
)

from formstate.conversion import (
    ParseAndFormat,
    TextConversion,
    RawTextConversion,
    OptionalConversion,
    WithDefaultConversion,
    NumericConversion,
    ListConversion,
    IntegerType,
    integer_conversion,
    I8, I16, I32, I64,
    U8, U16, U32, U64,
)

from formstate.form_input import FormInput

from formstate.fields import (
    FieldKind,
    FormField,
    Input,
    Subform,
    OptionalSubform,
    ListSubform,
    SubmitAttempted,
    register_form_type,
    resolve_form_type,
)

from formstate.addressing import (
    Address,
    Leaf,
    ToggleOptional,
    OptionalAddress,
    Add,
    ListItem,
    Remove,
    SubformAddress,
)

from formstate.submission import (
    register_submit_function,
    get_submit_function,
    submit_with,
)

from formstate.form import StructForm

__all__ = [
    # Results
    'Ok',
    'Err',
    'Result',
    'UnwrapError',
    'collect_results',
    # Errors
    'ParseError',
    'Required',
    'InvalidFormat',
    'ConversionFailed',
    'OutOfRange',
    'FormDefinitionError',
    'AddressError',
    # Configuration
    'FormSettings',
    'get_form_settings',
    'set_form_settings',
    'reset_form_settings',
    # Conversions
    'ParseAndFormat',
    'TextConversion',
    'RawTextConversion',
    'OptionalConversion',
    'WithDefaultConversion',
    'NumericConversion',
    'ListConversion',
    'IntegerType',
    'integer_conversion',
    'I8', 'I16', 'I32', 'I64',
    'U8', 'U16', 'U32', 'U64',
    # Inputs
    'FormInput',
    # Schema
    'FieldKind',
    'FormField',
    'Input',
    'Subform',
    'OptionalSubform',
    'ListSubform',
    'SubmitAttempted',
    'register_form_type',
    'resolve_form_type',
    # Addresses
    'Address',
    'Leaf',
    'ToggleOptional',
    'OptionalAddress',
    'Add',
    'ListItem',
    'Remove',
    'SubformAddress',
    # Submission
    'register_submit_function',
    'get_submit_function',
    'submit_with',
    # Forms
    'StructForm',
]
