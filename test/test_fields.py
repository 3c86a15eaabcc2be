"""
Registration Field Tests

Covers property merging, rendering in both output modes, and the
render-form / validate-submission lifecycle of the built-in field types.
"""

from __future__ import annotations

import pytest

from cms_admin.exceptions import ConfigurationError, UnknownPropertyError
from cms_admin.plugins.hooks import HOOK_REGISTER_FORM, HOOK_REGISTRATION_ERRORS
from cms_admin.registration import (
    CheckboxField,
    ErrorCollection,
    SelectField,
    TextField,
    field_factory,
)
from cms_admin.templating.output import capture_output

BUILTIN_TYPES = ["checkbox", "select", "text"]


# ══════════════════════════════════════════════════════════════════════════════
# 1. Property merging
# ══════════════════════════════════════════════════════════════════════════════


class TestPropertyMerging:
    @pytest.mark.parametrize("field_type", BUILTIN_TYPES)
    def test_empty_config_yields_defaults(self, field_type):
        field = field_factory.create(field_type)
        assert field.properties == field.defaults()

    @pytest.mark.parametrize("field_type", BUILTIN_TYPES)
    def test_override_replaces_only_that_key(self, field_type):
        field = field_factory.create(field_type, {"label": "Overridden"})
        expected = {**field.defaults(), "label": "Overridden"}
        assert field.properties == expected

    @pytest.mark.parametrize("field_type", BUILTIN_TYPES)
    def test_unknown_key_is_kept(self, field_type):
        field = field_factory.create(field_type, {"css_class": "wide"})
        assert field.properties["css_class"] == "wide"
        assert set(field.defaults()) < set(field.properties)

    def test_defaults_are_pure(self):
        field = TextField()
        first = field.defaults()
        first["label"] = "changed"
        assert field.defaults()["label"] == ""

    def test_invalid_value_type_is_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            TextField({"min_length": "not a number"})
        assert exc_info.value.details["field_type"] == "text"
        assert exc_info.value.details["errors"]

    def test_invalid_pattern_is_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            TextField({"name": "code", "pattern": "[unclosed"})
        assert exc_info.value.details["field_type"] == "text"

    def test_update_with_invalid_pattern_is_rejected(self):
        field = TextField({"name": "code", "pattern": r"\d+"})
        with pytest.raises(ConfigurationError):
            field.update(pattern="(")
        assert field.properties["pattern"] == r"\d+"

    def test_update_with_wrong_type_changes_nothing(self):
        field = TextField({"name": "nickname", "min_length": 2})
        with pytest.raises(ConfigurationError):
            field.update(value="bob", min_length="several")
        assert field.properties["value"] == ""
        assert field.properties["min_length"] == 2

    def test_update_changes_existing_key(self):
        field = TextField({"name": "nickname"})
        field.update(value="bob")
        assert field.properties["value"] == "bob"

    def test_update_changes_extension_key(self):
        field = TextField({"name": "nickname", "hint": "old"})
        field.update(hint="new")
        assert field.properties["hint"] == "new"

    def test_update_rejects_new_key(self):
        field = TextField({"name": "nickname"})
        with pytest.raises(UnknownPropertyError):
            field.update(colour="red")
        assert "colour" not in field.properties

    def test_update_rejects_before_changing_anything(self):
        field = TextField({"name": "nickname"})
        with pytest.raises(UnknownPropertyError):
            field.update(value="bob", colour="red")
        assert field.properties["value"] == ""

    def test_template_handle_not_in_properties(self):
        field = TextField()
        assert "template" not in field.properties


# ══════════════════════════════════════════════════════════════════════════════
# 2. Rendering
# ══════════════════════════════════════════════════════════════════════════════


class TestRendering:
    @pytest.mark.parametrize("field_type", BUILTIN_TYPES)
    def test_render_and_echo_produce_same_markup(self, field_type):
        field = field_factory.create(field_type, {"name": "f", "label": "F"})
        markup = field.render()

        with capture_output() as buffer:
            result = field.render(echo=True)

        assert result is None
        assert buffer.getvalue() == markup

    def test_text_field_markup(self):
        field = TextField({"name": "nickname", "label": "Nickname", "value": "bob", "required": True})
        markup = field.render()
        assert 'name="nickname"' in markup
        assert 'value="bob"' in markup
        assert "Nickname" in markup
        assert "required" in markup

    def test_text_field_input_type(self):
        markup = TextField({"name": "site", "input_type": "url"}).render()
        assert 'type="url"' in markup

    def test_values_are_escaped(self):
        markup = TextField({"name": "nickname", "value": '"><script>alert(1)</script>'}).render()
        assert "<script>" not in markup
        assert "&lt;script&gt;" in markup

    def test_render_reflects_updated_values(self):
        field = TextField({"name": "nickname"})
        field.update(value="changed")
        assert 'value="changed"' in field.render()

    def test_checkbox_checked_state(self):
        field = CheckboxField({"name": "accept_terms", "label": "I accept"})
        assert " checked" not in field.render()
        field.update(checked=True)
        assert " checked" in field.render()

    def test_select_marks_selected_option(self):
        field = SelectField({"name": "plan", "options": {"free": "Free", "pro": "Pro"}, "value": "pro"})
        markup = field.render()
        assert '<option value="pro" selected>Pro</option>' in markup
        assert '<option value="free">Free</option>' in markup

    def test_extension_property_reaches_template(self, override_templates):
        env = override_templates("registration/text_field.html", "{{ name }}|{{ css_class }}")
        field = TextField({"name": "nickname", "css_class": "wide"}, environment=env)
        assert field.render() == "nickname|wide"

    def test_on_render_form_event_writes_output(self):
        field = TextField({"name": "nickname"})
        with capture_output() as buffer:
            field.on_render_form_event()
        assert buffer.getvalue() == field.render()


# ══════════════════════════════════════════════════════════════════════════════
# 3. Validation lifecycle
# ══════════════════════════════════════════════════════════════════════════════


class TestValidationLifecycle:
    def test_valid_field_appends_nothing(self, errors):
        field = TextField({"name": "nickname", "value": "bob", "required": True})
        errors.add("existing", "Existing error")

        result = field.on_validate_submission_event(errors, "bob", "bob@example.com")

        assert result is errors
        assert errors.get_error_codes() == ["existing"]

    def test_invalid_field_appends_after_existing(self, errors):
        field = TextField({"name": "nickname", "label": "Nickname", "required": True})
        errors.add("existing", "Existing error")

        result = field.on_validate_submission_event(errors, "bob", "bob@example.com")

        assert result is errors
        assert errors.get_error_codes() == ["existing", "empty_nickname"]
        assert errors.get_error_messages("existing") == ["Existing error"]
        assert errors.get_error_message("empty_nickname") == "Please enter Nickname."

    def test_validate_does_not_mutate_properties(self):
        field = TextField({"name": "nickname", "value": "  ", "required": True})
        before = field.properties
        assert field.validate() is False
        assert field.properties == before

    def test_custom_error_message(self, errors):
        field = TextField({"name": "nickname", "required": True, "error_message": "Nickname please"})
        field.on_validate_submission_event(errors, None, None)
        assert errors.get_error_message() == "Nickname please"

    def test_optional_blank_text_is_valid(self):
        assert TextField({"name": "nickname", "min_length": 3}).validate() is True

    def test_text_length_limits(self, errors):
        field = TextField({"name": "nickname", "label": "Nickname", "min_length": 3, "max_length": 5})
        field.update(value="ab")
        assert field.validate() is False
        field.on_error(errors)
        assert errors.get_error_message("invalid_nickname") == "Nickname must be at least 3 characters."

        field.update(value="abcdef")
        assert field.validate() is False
        field.update(value="abcd")
        assert field.validate() is True

    def test_text_pattern(self):
        field = TextField({"name": "code", "pattern": r"[A-Z]{3}-\d{2}", "value": "ABC-12"})
        assert field.validate() is True
        field.update(value="ABC-123")
        assert field.validate() is False

    def test_required_checkbox(self, errors):
        field = CheckboxField({"name": "accept_terms", "label": "the terms", "required": True})
        assert field.validate() is False
        field.on_validate_submission_event(errors, "bob", "bob@example.com")
        assert errors.get_error_message("empty_accept_terms") == "You must check the terms."

    def test_select_rejects_unknown_option(self, errors):
        field = SelectField({"name": "plan", "label": "Plan", "options": {"free": "Free"}, "value": "gold"})
        field.on_validate_submission_event(errors, None, None)
        assert errors.get_error_codes() == ["invalid_plan"]

    def test_select_required_without_value(self, errors):
        field = SelectField({"name": "plan", "label": "Plan", "options": {"free": "Free"}, "required": True})
        field.on_validate_submission_event(errors, None, None)
        assert errors.get_error_message("empty_plan") == "Please select Plan."


# ══════════════════════════════════════════════════════════════════════════════
# 4. Submitted values
# ══════════════════════════════════════════════════════════════════════════════


class TestPopulate:
    def test_text_populate(self):
        field = TextField({"name": "nickname"})
        field.populate({"nickname": "bob", "other": "x"})
        assert field.properties["value"] == "bob"

    def test_text_populate_missing_key_blanks_value(self):
        field = TextField({"name": "nickname", "value": "preset"})
        field.populate({})
        assert field.properties["value"] == ""

    def test_checkbox_populate(self):
        field = CheckboxField({"name": "accept_terms"})
        field.populate({"accept_terms": "1"})
        assert field.properties["checked"] is True
        field.populate({})
        assert field.properties["checked"] is False

    def test_multi_value_submission_keeps_last_value(self):
        field = TextField({"name": "tags"})
        field.populate({"tags": ["a", "b"]})
        assert field.properties["value"] == "b"

    def test_non_string_submission_is_stringified(self):
        field = SelectField({"name": "plan", "options": {"1": "One"}})
        field.populate({"plan": 1})
        assert field.properties["value"] == "1"
        assert field.validate() is True

    def test_checkbox_multi_value_submission(self):
        field = CheckboxField({"name": "accept_terms"})
        field.populate({"accept_terms": ["0", "1"]})
        assert field.properties["checked"] is True

    def test_nameless_field_ignores_submission(self):
        field = TextField({"value": "kept"})
        field.populate({"": "ignored"})
        assert field.properties["value"] == "kept"


# ══════════════════════════════════════════════════════════════════════════════
# 5. Hook wiring
# ══════════════════════════════════════════════════════════════════════════════


class TestHookWiring:
    def _fields(self):
        return [
            TextField({"name": "nickname", "label": "Nickname", "required": True}),
            CheckboxField({"name": "accept_terms", "label": "the terms", "required": True}),
            SelectField({"name": "plan", "options": {"free": "Free"}}),
        ]

    def test_register_binds_both_hooks(self, hooks):
        field = TextField({"name": "nickname"})
        field.register(hooks)
        assert hooks.has_hook(HOOK_REGISTER_FORM, field.on_render_form_event)
        assert hooks.has_hook(HOOK_REGISTRATION_ERRORS, field.on_validate_submission_event)

    def test_render_form_event_renders_every_field_in_order(self, hooks):
        fields = self._fields()
        for field in fields:
            field.register(hooks)

        with capture_output() as buffer:
            hooks.do_action(HOOK_REGISTER_FORM)

        assert buffer.getvalue() == "".join(field.render() for field in fields)

    def test_registration_errors_filter_chains_fields(self, hooks):
        fields = self._fields()
        for field in fields:
            field.register(hooks)
        for field in fields:
            field.populate({"nickname": "", "plan": "free"})

        errors = ErrorCollection()
        errors.add("username_exists", "That username is taken.")
        result = hooks.apply_filters(HOOK_REGISTRATION_ERRORS, errors, "bob", "bob@example.com")

        assert result is errors
        assert errors.get_error_codes() == ["username_exists", "empty_nickname", "empty_accept_terms"]

    def test_multi_value_submission_is_validated_not_raised(self, hooks):
        field = TextField({"name": "tags", "label": "Tags", "pattern": "[a-z]+"})
        field.register(hooks)
        field.populate({"tags": ["ok", "NOT OK"]})

        errors = hooks.apply_filters(HOOK_REGISTRATION_ERRORS, ErrorCollection(), "bob", "bob@example.com")

        assert errors.get_error_codes() == ["invalid_tags"]

    def test_accepted_submission_leaves_errors_empty(self, hooks):
        fields = self._fields()
        for field in fields:
            field.register(hooks)
            field.populate({"nickname": "bob", "accept_terms": "1", "plan": "free"})

        result = hooks.apply_filters(HOOK_REGISTRATION_ERRORS, ErrorCollection(), "bob", "bob@example.com")
        assert len(result) == 0
