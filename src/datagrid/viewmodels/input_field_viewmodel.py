"""ViewModel for the decorated text input.

Holds single-field state (value, masking, focus, loading) and derives which
decorations the view shows: clear button, password reveal toggle, loading
marker, helper/error message, and the style properties used by stylesheets.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from datagrid.config import settings

__all__ = [
    "InputVariant",
    "InputSize",
    "InputType",
    "InputStyleState",
    "InputFieldViewModel",
]

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class InputVariant(str, Enum):
    FILLED = "filled"
    OUTLINED = "outlined"
    GHOST = "ghost"


class InputSize(str, Enum):
    SM = "sm"
    MD = "md"
    LG = "lg"


class InputType(str, Enum):
    TEXT = "text"
    PASSWORD = "password"
    EMAIL = "email"


@dataclass(frozen=True)
class InputStyleState:
    variant: InputVariant
    size: InputSize
    has_error: bool
    disabled: bool
    focused: bool


@dataclass
class InputFieldViewModel:
    value: str = ""
    label: Optional[str] = None
    placeholder: Optional[str] = None
    helper_text: Optional[str] = None
    error_message: Optional[str] = None
    disabled: bool = False
    invalid: bool = False
    loading: bool = False
    variant: InputVariant = InputVariant.OUTLINED
    size: InputSize = InputSize.MD
    input_type: InputType = InputType.TEXT
    clearable: bool = False
    on_change: Optional[Callable[[str], None]] = None
    on_clear: Optional[Callable[[], None]] = None
    password_visible: bool = field(default=False, init=False)
    focused: bool = field(default=False, init=False)

    def __post_init__(self):
        # Accept plain strings for the enum-typed options
        self.variant = InputVariant(self.variant)
        self.size = InputSize(self.size)
        self.input_type = InputType(self.input_type)

    # Derived ------------------------------------------------------------
    @property
    def has_error(self) -> bool:
        return self.invalid or bool(self.error_message)

    @property
    def is_editable(self) -> bool:
        return not (self.disabled or self.loading)

    @property
    def is_password(self) -> bool:
        return self.input_type is InputType.PASSWORD

    @property
    def masked(self) -> bool:
        return self.is_password and not self.password_visible

    @property
    def show_clear_button(self) -> bool:
        return self.clearable and bool(self.value) and not self.loading

    @property
    def show_reveal_button(self) -> bool:
        return self.is_password and not self.loading

    @property
    def reveal_button_label(self) -> str:
        return "Hide password" if self.password_visible else "Show password"

    @property
    def message_text(self) -> Optional[str]:
        return self.error_message or self.helper_text

    @property
    def message_role(self) -> Optional[str]:
        return "alert" if self.has_error else None

    @property
    def style_state(self) -> InputStyleState:
        return InputStyleState(
            variant=self.variant,
            size=self.size,
            has_error=self.has_error,
            disabled=self.disabled,
            focused=self.focused,
        )

    # Mutations ----------------------------------------------------------
    def set_value(self, value: str) -> bool:
        """Update the value from user input; return True if it changed."""
        if not self.is_editable or value == self.value:
            return False
        self.value = value
        if self.on_change is not None:
            self.on_change(value)
        return True

    def clear(self) -> bool:
        """Empty the value via the clear button; return False if it is not shown."""
        if not self.show_clear_button:
            return False
        self.value = ""
        if self.on_change is not None:
            self.on_change("")
        if self.on_clear is not None:
            self.on_clear()
        return True

    def toggle_password_visibility(self) -> bool:
        if self.is_password:
            self.password_visible = not self.password_visible
        return self.password_visible

    def set_focused(self, focused: bool) -> None:
        self.focused = focused

    def validate(self) -> bool:
        """Check email shape for email inputs; other types are always valid.

        An invalid email sets ``error_message``; a valid one clears a message
        previously set by this check.
        """
        if self.input_type is not InputType.EMAIL:
            return not self.has_error
        if not self.value or _EMAIL_RE.match(self.value):
            if self.error_message == settings.EMAIL_ERROR_MESSAGE:
                self.error_message = None
            return not self.has_error
        logger.debug("email validation failed for input %r", self.label)
        self.error_message = settings.EMAIL_ERROR_MESSAGE
        return False
