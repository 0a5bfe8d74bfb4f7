"""
Tests pour la validation du formulaire d'inscription.
"""

import pytest

from movieviewer.services.registration import (
    PASSWORD_RULES,
    check_password,
    validate_registration,
)


class TestCheckPassword:
    """Chaque exigence du mot de passe est evaluee individuellement."""

    def test_valid_password_meets_all_rules(self):
        assert all(check_password("Passw0rd!").values()) is False  # "!" n'est pas accepte
        assert all(check_password("Passw0rd@").values()) is True

    @pytest.mark.parametrize(
        "password,unmet",
        [
            ("Pa0@", "At least 8 characters long"),
            ("Password@", "At least one digit"),
            ("PASSW0RD@", "At least one lowercase letter"),
            ("passw0rd@", "At least one uppercase letter"),
            ("Passw0rdx", "At least one special character (@#$%^&+=)"),
            ("Pass w0rd@", "No spaces allowed"),
        ],
    )
    def test_single_unmet_rule(self, password: str, unmet: str):
        result = check_password(password)

        assert [label for label, met in result.items() if not met] == [unmet]

    def test_rules_order_is_stable(self):
        assert list(check_password("")) == [label for label, _, _ in PASSWORD_RULES]


class TestValidateRegistration:
    """Tests pour validate_registration()."""

    def test_valid_form(self):
        check = validate_registration("bob", "Passw0rd@", "Passw0rd@", "Bob")

        assert check.is_valid is True
        assert check.field_errors == {}
        assert check.unmet_password_requirements == []

    def test_short_user_id_and_name(self):
        check = validate_registration("bo", "Passw0rd@", "Passw0rd@", "B")

        assert check.is_valid is False
        assert check.field_errors == {
            "user_id": "User ID must be at least 3 characters long",
            "preferred_name": "Preferred name must be at least 3 characters long",
        }

    def test_password_mismatch(self):
        check = validate_registration("bob", "Passw0rd@", "Passw0rd#", "Bob")

        assert check.field_errors == {"confirm_password": "Passwords do not match"}

    def test_weak_password_lists_requirements(self):
        check = validate_registration("bob", "abc", "abc", "Bob")

        assert check.is_valid is False
        assert check.unmet_password_requirements == [
            "At least 8 characters long",
            "At least one digit",
            "At least one uppercase letter",
            "At least one special character (@#$%^&+=)",
        ]
