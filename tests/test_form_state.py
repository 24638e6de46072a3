"""Tests for FormState: touched tracking, error visibility and cross-field revalidation."""

from __future__ import annotations

from leadportal.auth.controllers import new_login_state, new_signup_state
from leadportal.forms.state import SubmissionStatus


class TestFieldEvents:

    def test_change_on_untouched_field_shows_nothing(self) -> None:
        state = new_login_state()
        state.on_change("email", "bad")
        assert state.values["email"] == "bad"
        assert state.visible_errors() == {}

    def test_blur_marks_touched_and_validates(self) -> None:
        state = new_login_state()
        state.on_blur("email", "bad")
        assert state.touched == {"email": True}
        assert state.visible_errors() == {"email": "Please enter a valid email"}

    def test_change_after_blur_revalidates(self) -> None:
        state = new_login_state()
        state.on_blur("email", "bad")
        state.on_change("email", "good@example.com")
        assert state.visible_errors() == {}

    def test_blur_is_idempotent(self) -> None:
        state = new_login_state()
        state.on_blur("password", "abc")
        once = (dict(state.errors), dict(state.touched))
        state.on_blur("password", "abc")
        assert (state.errors, state.touched) == once

    def test_touched_stays_true(self) -> None:
        state = new_login_state()
        state.on_blur("email", "a@b.c")
        state.on_change("email", "")
        assert state.touched["email"] is True
        assert state.visible_errors() == {"email": "Email is required"}

    def test_errors_hidden_until_touched(self) -> None:
        state = new_login_state()
        state.errors["email"] = "Email is required"
        assert state.visible_errors() == {}


class TestConfirmPasswordFollowsPassword:

    def test_password_change_revalidates_touched_confirm(self) -> None:
        state = new_signup_state()
        state.on_change("password", "Good1Pass")
        state.on_blur("confirm_password", "Good1Pass")
        assert state.visible_errors() == {}

        state.on_change("password", "Good1Pass2")
        assert state.visible_errors() == {"confirm_password": "Passwords do not match"}

        state.on_change("password", "Good1Pass")
        assert state.visible_errors() == {}

    def test_untouched_confirm_is_left_alone(self) -> None:
        state = new_signup_state()
        state.on_change("confirm_password", "Good1Pass")
        state.on_change("password", "Other1Pass")
        assert "confirm_password" not in state.errors

    def test_empty_confirm_is_cleared_not_flagged(self) -> None:
        state = new_signup_state()
        state.on_blur("confirm_password", "")
        assert state.visible_errors() == {"confirm_password": "Please confirm your password"}

        state.on_change("password", "Good1Pass")
        assert state.visible_errors() == {}


class TestValidateAll:

    def test_login_scenario(self) -> None:
        state = new_login_state()
        state.on_change("email", "bad")
        state.on_change("password", "x")

        errors = state.validate_all()

        assert errors == {
            "email": "Please enter a valid email",
            "password": "Password must be at least 6 characters",
        }
        assert state.touched == {"email": True, "password": True}
        assert state.visible_errors() == errors

    def test_valid_form_returns_empty_map(self) -> None:
        state = new_login_state()
        state.load({"email": "a@b.co", "password": "secret1"})
        assert state.validate_all() == {}
        assert not state.has_errors

    def test_signup_marks_every_field_touched(self) -> None:
        state = new_signup_state()
        errors = state.validate_all()
        assert set(state.touched) == set(state.fields)
        assert errors["agree_terms"] == "You must agree to the terms and conditions"
        assert errors["full_name"] == "Full name is required"


class TestLifecycle:

    def test_submitting_disables_form(self) -> None:
        state = new_login_state()
        state.fail("Invalid login credentials")
        state.begin_submit()
        assert state.disabled
        assert state.submit_error == ""

    def test_settle_leaves_submitting(self) -> None:
        state = new_login_state()
        state.begin_submit()
        state.settle()
        assert state.status is SubmissionStatus.SUCCEEDED
        assert not state.disabled

    def test_settle_keeps_failure(self) -> None:
        state = new_login_state()
        state.begin_submit()
        state.fail("nope")
        state.settle()
        assert state.status is SubmissionStatus.FAILED
        assert state.submit_error == "nope"

    def test_reset_restores_initial_values(self) -> None:
        state = new_signup_state()
        state.on_blur("full_name", "Ada")
        state.on_blur("agree_terms", True)
        state.reset()
        assert state.values["full_name"] == ""
        assert state.values["agree_terms"] is False
        assert state.touched == {}

    def test_load_coerces_request_values(self) -> None:
        state = new_signup_state()
        state.load({"full_name": None, "agree_terms": "y", "unknown": "x"}, touched=["email", "unknown"])
        assert state.values["full_name"] == ""
        assert state.values["agree_terms"] is True
        assert "unknown" not in state.values
        assert state.touched == {"email": True}

    def test_snapshot_hides_passwords(self) -> None:
        state = new_signup_state()
        state.on_blur("password", "Good1Pass")
        snapshot = state.snapshot()
        assert snapshot["values"]["password"] == ""
        assert snapshot["touched"] == ["password"]
        assert snapshot["status"] == "idle"


def test_whitespace_confirm_reports_mismatch_on_password_change() -> None:
    state = new_signup_state()
    state.on_blur("confirm_password", "   ")
    assert state.visible_errors() == {"confirm_password": "Please confirm your password"}

    state.on_change("password", "Secret123")

    assert state.visible_errors() == {"confirm_password": "Passwords do not match"}
