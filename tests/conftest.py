"""Pytest configuration and shared fixtures."""
import pytest

import formstate.config as config_module
import formstate.fields as fields_module
import formstate.submission as submission_module
from formstate import FormSettings


@pytest.fixture(autouse=True)
def restore_framework_state():
    """Restore settings and the form and submit function registries after each test."""
    # Store original values
    original_settings = config_module._form_settings
    original_form_types = dict(fields_module._form_type_registry)
    original_submit_functions = dict(submission_module._submit_function_registry)

    yield

    # Restore original values after test
    config_module._form_settings = original_settings
    fields_module._form_type_registry.clear()
    fields_module._form_type_registry.update(original_form_types)
    submission_module._submit_function_registry.clear()
    submission_module._submit_function_registry.update(original_submit_functions)


@pytest.fixture
def semicolon_settings():
    """Provide settings that split lists on semicolons."""
    return FormSettings(list_delimiter=";", list_separator="; ")
