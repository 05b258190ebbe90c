"""Tests for required and optional subforms."""
from dataclasses import dataclass, field
from typing import List, Optional

from formstate import (
    Err,
    Input,
    ListSubform,
    Ok,
    OptionalSubform,
    Required,
    StructForm,
    Subform,
    SubmitAttempted,
    TextConversion,
)


@dataclass
class Address:
    street_address: str = ""
    city: str = ""
    country: str = ""


@dataclass
class UserDetails:
    username: str = ""
    primary_address: Address = field(default_factory=Address)
    secondary_address: Optional[Address] = None


class AddressForm(StructForm, model=Address):
    street_address = Input(TextConversion(str))
    city = Input(TextConversion(str))
    country = Input(TextConversion(str))


class UserDetailsForm(StructForm, model=UserDetails):
    username = Input(TextConversion(str))
    primary_address = Subform(AddressForm)
    secondary_address = OptionalSubform(AddressForm)


Field = UserDetailsForm.Field
AddressField = AddressForm.Field

JOHANNESBURG = Address("123 StructForm Drive", "Johannesburg", "South Africa")
PRETORIA = Address("321 StructForm Laan", "Pretoria", "South Africa")


def fill_address(form, wrap, address):
    form.set_input(wrap(AddressField.StreetAddress), address.street_address)
    form.set_input(wrap(AddressField.City), address.city)
    form.set_input(wrap(AddressField.Country), address.country)


def test_set_input_delegates_to_subform():
    form = UserDetailsForm()
    assert form.primary_address.city.value == Err(Required())

    form.set_input(Field.PrimaryAddress(AddressField.City), "Johannesburg")
    assert form.primary_address.city.value == Ok("Johannesburg")


def test_optional_subform_ignores_input_while_toggled_off():
    form = UserDetailsForm()
    assert form.secondary_address is None

    form.set_input(Field.SecondaryAddress(AddressField.City), "X")
    assert form.secondary_address is None


def test_optional_subform_toggles_on_and_off():
    form = UserDetailsForm()
    form.set_input(Field.ToggleSecondaryAddress)
    assert form.secondary_address is not None
    assert form.secondary_address.city.value == Err(Required())

    form.set_input(Field.SecondaryAddress(AddressField.City), "X")
    assert form.secondary_address.city.value == Ok("X")

    form.set_input(Field.ToggleSecondaryAddress)
    assert form.secondary_address is None


def test_toggling_twice_loses_previous_edits():
    form = UserDetailsForm()
    form.set_input(Field.ToggleSecondaryAddress)
    form.set_input(Field.SecondaryAddress(AddressField.City), "Pretoria")
    form.set_input(Field.ToggleSecondaryAddress)
    form.set_input(Field.ToggleSecondaryAddress)

    assert form.secondary_address.city.input == ""
    assert form.secondary_address.city.is_edited is False


def test_toggle_ignores_value():
    form = UserDetailsForm()
    form.set_input(Field.ToggleSecondaryAddress, "anything")
    assert form.secondary_address.is_empty()


def test_subforms_populated_from_existing_model():
    model = UserDetails(username="justin", primary_address=JOHANNESBURG, secondary_address=PRETORIA)
    form = UserDetailsForm.from_model(model)

    assert form.username.input == "justin"
    assert form.primary_address.street_address.input == "123 StructForm Drive"
    assert form.secondary_address is not None
    assert form.secondary_address.street_address.input == "321 StructForm Laan"


def test_absent_optional_model_leaves_subform_off():
    form = UserDetailsForm.from_model(UserDetails(username="justin", primary_address=JOHANNESBURG))
    assert form.secondary_address is None


def test_whole_form_can_be_completed():
    form = UserDetailsForm()
    form.set_input(Field.Username, "justin")
    assert form.submit() == Err(Required())

    fill_address(form, Field.PrimaryAddress, JOHANNESBURG)
    assert form.submit() == Ok(UserDetails("justin", JOHANNESBURG, None))

    form.set_input(Field.ToggleSecondaryAddress)
    assert form.submit() == Err(Required())

    fill_address(form, Field.SecondaryAddress, PRETORIA)
    assert form.submit() == Ok(UserDetails("justin", JOHANNESBURG, PRETORIA))


def test_toggled_off_subform_submits_as_absent():
    model = UserDetails(username="justin", primary_address=JOHANNESBURG, secondary_address=PRETORIA)
    form = UserDetailsForm.from_model(model)
    form.set_input(Field.ToggleSecondaryAddress)

    assert form.submit_update(model) == Ok(UserDetails("justin", JOHANNESBURG, None))


def test_is_empty_looks_into_subforms():
    form = UserDetailsForm()
    assert form.is_empty()

    form.set_input(Field.ToggleSecondaryAddress)
    assert form.is_empty()

    form.set_input(Field.SecondaryAddress(AddressField.Country), "ZA")
    assert not form.is_empty()

    form.set_input(Field.ToggleSecondaryAddress)
    form.set_input(Field.PrimaryAddress(AddressField.City), "X")
    assert not form.is_empty()


@dataclass
class Delivery:
    recipient: str = ""
    address: Address = field(default_factory=Address)
    extra_stops: List[Address] = field(default_factory=list)


class TrackedAddressForm(StructForm, model=Address):
    street_address = Input(TextConversion(str))
    city = Input(TextConversion(str))
    country = Input(TextConversion(str))
    submitted = SubmitAttempted()


class DeliveryForm(StructForm, model=Delivery):
    recipient = Input(TextConversion(str))
    address = Subform(TrackedAddressForm)
    extra_stops = ListSubform(TrackedAddressForm)
    submitted = SubmitAttempted()


def test_submitting_parent_sets_nested_flags():
    form = DeliveryForm()
    form.set_input(DeliveryForm.Field.AddExtraStops)
    form.submit()

    assert form.submitted is True
    assert form.address.submitted is True
    assert form.extra_stops[0].submitted is True


def test_submit_attempted_only_reports_own_flags():
    form = DeliveryForm()
    form.address.submit()

    assert form.address.submit_attempted() is True
    assert form.submitted is False
    assert form.submit_attempted() is False
