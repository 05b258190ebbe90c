"""
Framework configuration.

Process-wide settings read by the stock conversions. Integrators set them once
at startup; tests restore them between cases (see tests/conftest.py).
"""

from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormSettings:
    """Settings shared by all forms.

    Attributes:
        list_delimiter: Separator recognised when parsing list inputs.
        list_separator: Text placed between elements when formatting a list.
    """
    list_delimiter: str = ","
    list_separator: str = ", "


_form_settings: FormSettings = FormSettings()


def set_form_settings(settings: FormSettings) -> None:
    """Replace the active settings."""
    global _form_settings
    if not settings.list_delimiter:
        raise ValueError("list_delimiter must not be empty")
    _form_settings = settings
    logger.debug(f"Form settings set to {settings!r}")


def get_form_settings() -> FormSettings:
    """Get the active settings."""
    return _form_settings


def reset_form_settings() -> None:
    """Restore the default settings."""
    set_form_settings(FormSettings())
