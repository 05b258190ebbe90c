"""Tests for validation messages on a form with typed inputs."""
import ipaddress
from dataclasses import dataclass, field
from typing import Any, List

from formstate import (
    ConversionFailed,
    Err,
    Input,
    InvalidFormat,
    ListConversion,
    NumericConversion,
    Ok,
    OutOfRange,
    StructForm,
    SubmitAttempted,
    TextConversion,
    U16,
    integer_conversion,
)


class Port(int):
    """Port number in 1..65535."""

    MIN = 1
    MAX = 65535

    @classmethod
    def try_from(cls, number: int) -> 'Port':
        if not cls.MIN <= number <= cls.MAX:
            raise ValueError(f"Port {number} is not between {cls.MIN} and {cls.MAX}")
        return cls(number)


@dataclass
class ServerSettings:
    ip: Any = ipaddress.ip_address("127.0.0.1")
    port: Port = Port(80)
    backup_ports: List[int] = field(default_factory=list)


class ServerSettingsForm(StructForm, model=ServerSettings):
    ip = Input(TextConversion(ipaddress.ip_address, "an IP address"))
    port = Input(NumericConversion("a port", U16, narrow=Port.try_from, min=Port.MIN, max=Port.MAX))
    backup_ports = Input(ListConversion(integer_conversion("a number", U16)))
    submitted = SubmitAttempted()


Field = ServerSettingsForm.Field


def filled_form(ip="10.0.0.1", port="8080", backup_ports=""):
    form = ServerSettingsForm()
    form.set_input(Field.Ip, ip)
    form.set_input(Field.Port, port)
    form.set_input(Field.BackupPorts, backup_ports)
    return form


def test_port_scenario():
    form = ServerSettingsForm()

    form.set_input(Field.Port, "Eighty")
    assert form.port.value == Err(OutOfRange("a port", "1", "65535"))

    form.set_input(Field.Port, "0")
    assert form.port.value == Err(ConversionFailed("Port 0 is not between 1 and 65535"))

    form.set_input(Field.Port, "80")
    assert form.port.value == Ok(80)
    assert isinstance(form.port.value.value, Port)


def test_valid_form_submits():
    form = filled_form(backup_ports="81, 82")
    assert form.submit() == Ok(ServerSettings(ipaddress.ip_address("10.0.0.1"), Port(8080), [81, 82]))


def test_first_error_in_declaration_order_is_reported():
    form = filled_form(ip="localhost", port="Eighty")
    assert form.submit() == Err(InvalidFormat("an IP address"))

    form.set_input(Field.Ip, "::1")
    assert form.submit() == Err(OutOfRange("a port", "1", "65535"))


def test_failed_submit_marks_all_inputs_edited():
    form = ServerSettingsForm()
    form.set_input(Field.Ip, "localhost")
    form.submit()

    assert form.ip.is_edited
    assert form.port.is_edited
    assert form.backup_ports.is_edited
    assert form.port.validation_error() is not None


def test_input_messages():
    form = filled_form(ip="localhost", port="0", backup_ports="1, x")
    assert str(form.ip.validation_error()) == "Expected an IP address."
    assert str(form.port.validation_error()) == "Port 0 is not between 1 and 65535."
    assert str(form.backup_ports.validation_error()) == "Expected a number between 0 and 65535."


def test_form_message_appears_after_submit_attempt():
    form = filled_form(ip="localhost")
    assert form.validation_error() is None

    form.submit()
    assert str(form.validation_error()) == "Expected an IP address."

    form.set_input(Field.Ip, "127.0.0.1")
    assert form.validation_error() is None


def test_empty_list_input_is_valid():
    form = filled_form()
    assert form.submit().unwrap().backup_ports == []


def test_has_unsaved_changes_tracks_edits():
    pristine = ServerSettings(ipaddress.ip_address("10.0.0.1"), Port(8080), [])
    form = ServerSettingsForm.from_model(pristine)
    assert not form.has_unsaved_changes(pristine)

    form.set_input(Field.Port, "8081")
    assert form.has_unsaved_changes(pristine)

    form.set_input(Field.Port, " 8080 ")
    assert not form.has_unsaved_changes(pristine)


def test_invalid_form_counts_as_changed():
    pristine = ServerSettings(ipaddress.ip_address("10.0.0.1"), Port(8080), [])
    form = ServerSettingsForm.from_model(pristine)
    form.set_input(Field.Port, "")
    assert form.has_unsaved_changes(pristine)


def test_has_unsaved_changes_leaves_form_untouched():
    pristine = ServerSettings(ipaddress.ip_address("10.0.0.1"), Port(8080), [])
    form = ServerSettingsForm.from_model(pristine)
    form.has_unsaved_changes(pristine)

    assert form.submitted is False
    assert form.port.is_edited is False


def test_editing_submitted_model_leaves_form_untouched():
    form = filled_form(backup_ports="81, 82")
    submitted = form.submit().unwrap()
    submitted.backup_ports.append(99)

    assert form.submit().unwrap().backup_ports == [81, 82]
