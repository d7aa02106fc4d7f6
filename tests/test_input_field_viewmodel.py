from datagrid.viewmodels.input_field_viewmodel import (
    InputFieldViewModel,
    InputSize,
    InputType,
    InputVariant,
)


def test_defaults():
    vm = InputFieldViewModel()
    assert vm.variant is InputVariant.OUTLINED
    assert vm.size is InputSize.MD
    assert vm.input_type is InputType.TEXT
    assert not vm.has_error
    assert vm.is_editable
    assert vm.message_text is None


def test_string_options_are_coerced():
    vm = InputFieldViewModel(variant="ghost", size="lg", input_type="password")
    assert vm.variant is InputVariant.GHOST
    assert vm.size is InputSize.LG
    assert vm.is_password


def test_password_masking_and_reveal():
    vm = InputFieldViewModel(input_type=InputType.PASSWORD, value="secret")
    assert vm.masked
    assert vm.show_reveal_button
    assert vm.reveal_button_label == "Show password"
    vm.toggle_password_visibility()
    assert not vm.masked
    assert vm.reveal_button_label == "Hide password"
    vm.loading = True
    assert not vm.show_reveal_button


def test_reveal_toggle_ignored_for_text_inputs():
    vm = InputFieldViewModel()
    assert vm.toggle_password_visibility() is False
    assert not vm.masked


def test_clear_button_visibility_and_clear():
    cleared = []
    changes = []
    vm = InputFieldViewModel(
        clearable=True, on_clear=lambda: cleared.append(True), on_change=changes.append
    )
    assert not vm.show_clear_button
    vm.set_value("abc")
    assert vm.show_clear_button
    assert vm.clear() is True
    assert vm.value == ""
    assert cleared == [True]
    assert changes == ["abc", ""]
    assert vm.clear() is False
    assert cleared == [True]


def test_loading_hides_clear_and_blocks_edits():
    vm = InputFieldViewModel(clearable=True, value="x", loading=True)
    assert not vm.show_clear_button
    assert not vm.is_editable
    assert vm.set_value("y") is False
    assert vm.clear() is False
    assert vm.value == "x"


def test_disabled_blocks_edits():
    vm = InputFieldViewModel(disabled=True)
    assert vm.set_value("a") is False


def test_error_state_and_message_priority():
    vm = InputFieldViewModel(helper_text="We never share it")
    assert vm.message_text == "We never share it"
    assert vm.message_role is None
    vm.error_message = "Required"
    assert vm.has_error
    assert vm.message_text == "Required"
    assert vm.message_role == "alert"
    vm.error_message = None
    vm.invalid = True
    assert vm.has_error
    assert vm.style_state.has_error


def test_email_validation():
    vm = InputFieldViewModel(input_type=InputType.EMAIL, value="not-an-email")
    assert vm.validate() is False
    assert vm.error_message == "Enter a valid email address"
    vm.set_value("ann@example.com")
    assert vm.validate() is True
    assert vm.error_message is None


def test_validation_keeps_caller_error():
    vm = InputFieldViewModel(input_type=InputType.EMAIL, value="a@b.co", error_message="Taken")
    assert vm.validate() is False
    assert vm.error_message == "Taken"


def test_focus_reflected_in_style_state():
    vm = InputFieldViewModel()
    vm.set_focused(True)
    assert vm.style_state.focused
