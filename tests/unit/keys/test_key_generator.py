"""
Tests for translation key generation, parameter detection and confidence scoring.
"""

import pytest

from i18n_retrofit.keys.key_generator import (
    KeyGenerator,
    apply_parameters,
    calculate_confidence,
    derive_section,
    detect_message_type,
    detect_parameters,
    element_type_bucket,
    generate_description,
    generate_key,
    kebab,
    sanitize_key,
)
from i18n_retrofit.scanning.types import FileType
from tests.utils.test_helpers import make_candidate


class TestSections:
    """Test cases for deriving the key section from a file path."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("resources/views/auth/login.blade.php", "auth.login"),
            ("resources/views/welcome.blade.php", "welcome"),
            ("resources/views/livewire/settings/profile.blade.php", "settings.profile"),
            ("app/Livewire/Settings/UserProfile.php", "settings.user-profile"),
            ("app/Http/Controllers/ProfileController.php", "profile"),
            ("app/Http/Controllers/Admin/UserSettingsController.php", "admin.user-settings"),
            ("app/Models/User.php", "models.user"),
            ("/srv/site/resources/views/pages/admin/users/index.blade.php", "users.index"),
            ("lib/helpers/format.php", "format"),
            ("templates/email.blade.php", "email"),
        ],
    )
    def test_derive_section(self, path: str, expected: str) -> None:
        assert derive_section(path) == expected

    def test_kebab(self) -> None:
        assert kebab("UserProfile") == "user-profile"
        assert kebab("user_profile") == "user-profile"
        assert kebab("User Profile") == "user-profile"


class TestBuckets:
    """Test cases for element type buckets."""

    @pytest.mark.parametrize(
        ("element_type", "text", "expected"),
        [
            ("heading_h2", "Team", "headings"),
            ("button", "Save", "buttons"),
            ("placeholder_attr", "Enter your email", "placeholders"),
            ("method_withError", "Unable to save", "messages.error"),
            ("method_with", "Profile updated successfully", "messages.success"),
            ("method_flash", "Are you sure?", "messages"),
            ("something_new", "Text", "misc"),
        ],
    )
    def test_element_type_bucket(self, element_type: str, text: str, expected: str) -> None:
        assert element_type_bucket(element_type, text) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Profile updated successfully", "success"),
            ("Unable to save the profile", "error"),
            ("Caution: this is permanent", "warning"),
            ("Tip: press enter", "info"),
            ("Are you sure?", "confirm"),
            ("Welcome Home", None),
        ],
    )
    def test_detect_message_type(self, text: str, expected: str | None) -> None:
        assert detect_message_type(text) == expected


class TestDescriptions:
    """Test cases for the description part of a key."""

    def test_action_verb(self) -> None:
        assert generate_description("Save", "button") == "save"
        assert generate_description("Delete account", "paragraph") == "delete"

    def test_form_label(self) -> None:
        assert generate_description("Email", "label") == "email"
        assert generate_description("First name", "label") == "first_name"

    def test_message_prefix(self) -> None:
        assert (
            generate_description("Profile updated successfully", "method_with")
            == "success-profile-updated-successfully"
        )

    def test_long_text_is_cut_on_a_word_boundary(self) -> None:
        text = "This is a very long paragraph of text that keeps going well beyond the limit"
        description = generate_description(text, "paragraph")

        assert description == "this-is-a-very-long-paragraph-of-text-that-keeps"
        assert len(description) <= 50

    def test_text_without_ascii_letters(self) -> None:
        """Test that text with nothing left after ASCII folding gets a stable hash."""
        description = generate_description("こんにちは", "paragraph")

        assert description.startswith("text-")
        assert description == generate_description("こんにちは", "paragraph")

    def test_sanitize_key(self) -> None:
        assert sanitize_key("a..b--c.-d-.") == "a.b-c.d"


class TestGenerateKey:
    """Test cases for whole keys."""

    def test_heading(self) -> None:
        candidate = make_candidate(text="Welcome Home", element_type="heading_h1")
        assert generate_key(candidate) == "welcome.headings.welcome-home"

    def test_flash_message_in_controller(self) -> None:
        candidate = make_candidate(
            text="Profile updated successfully",
            element_type="method_with",
            file="app/Http/Controllers/ProfileController.php",
            file_type=FileType.PHP,
        )
        assert (
            generate_key(candidate)
            == "profile.messages.success.success-profile-updated-successfully"
        )

    def test_error_message_in_component(self) -> None:
        candidate = make_candidate(
            text="Unable to save the profile",
            element_type="method_withError",
            file="app/Livewire/Settings/Profile.php",
            file_type=FileType.PHP,
        )
        assert (
            generate_key(candidate)
            == "settings.profile.messages.error.error-unable-to-save-the-profile"
        )

    def test_placeholder(self) -> None:
        candidate = make_candidate(
            text="Enter your email",
            element_type="placeholder_attr",
            file="resources/views/auth/register.blade.php",
            in_attribute=True,
        )
        assert generate_key(candidate) == "auth.register.placeholders.enter-your-email"

    def test_button(self) -> None:
        candidate = make_candidate(
            text="Save", element_type="button", file="resources/views/auth/login.blade.php"
        )
        assert generate_key(candidate) == "auth.login.buttons.save"

    def test_keys_are_deterministic(self) -> None:
        candidate = make_candidate(text="Edit Profile", element_type="heading_h2")
        assert generate_key(candidate) == generate_key(candidate)


class TestParameters:
    """Test cases for placeholder detection and substitution."""

    @pytest.mark.parametrize(
        ("text", "params", "value"),
        [
            ("Hello John", [":name"], "Hello :name"),
            ("You have 5 new messages", [":count"], "You have :count new messages"),
            ("Welcome back, :name", [":name"], "Welcome back, :name"),
            ("Contact support@example.com", [":email"], "Contact :email"),
            ("Invoice due 12/05/2024", [":date"], "Invoice due :date"),
            ("Total: $25", [":amount"], "Total: :amount"),
            ("Pay 100 USD today", [":amount"], "Pay :amount today"),
            ("Write to user42@example.com", [":email"], "Write to :email"),
            ("2 invoices due 12/05/2024", [":count", ":date"], ":count invoices due :date"),
            ("Hi :name, hello John", [":name"], "Hi :name, hello :name"),
            ("Save changes", [], "Save changes"),
        ],
    )
    def test_detect_and_apply(self, text: str, params: list[str], value: str) -> None:
        assert detect_parameters(text) == params
        assert apply_parameters(text, params) == value

    def test_greeting_needs_a_capitalized_name(self) -> None:
        assert detect_parameters("hello there") == []


class TestConfidence:
    """Test cases for confidence scoring."""

    def test_heading_in_template_is_capped(self) -> None:
        assert calculate_confidence(make_candidate(text="Welcome Home")) == 100

    def test_attribute_value(self) -> None:
        candidate = make_candidate(
            text="Enter your email", element_type="placeholder_attr", in_attribute=True
        )
        assert calculate_confidence(candidate) == 95

    def test_plain_script_string(self) -> None:
        candidate = make_candidate(
            text="Profile updated", element_type="user_facing_string", file_type=FileType.PHP
        )
        assert calculate_confidence(candidate) == 75

    def test_button_action_bonus_applies_once(self) -> None:
        """Test that a short action button gets the bonus once despite matching twice."""
        candidate = make_candidate(text="Save", element_type="button", file_type=FileType.PHP)
        assert calculate_confidence(candidate) == 80

    def test_code_punctuation_penalty(self) -> None:
        candidate = make_candidate(
            text="a = b;", element_type="string_literal", file_type=FileType.PHP
        )
        assert calculate_confidence(candidate) == 55

    def test_very_long_text_penalty(self) -> None:
        candidate = make_candidate(
            text="x" * 201, element_type="string_literal", file_type=FileType.PHP
        )
        assert calculate_confidence(candidate) == 40

    def test_length_bonus_never_drops_below_short_text(self) -> None:
        """Test that every length from 5 to 40 scores above a 4-character text."""
        def score(length: int) -> int:
            candidate = make_candidate(
                text="a" * length, element_type="string_literal", file_type=FileType.PHP
            )
            return calculate_confidence(candidate)

        short = score(4)
        assert all(score(length) > short for length in range(5, 41))

    def test_score_is_clamped(self) -> None:
        candidate = make_candidate(
            text="{x}", element_type="string_literal", file_type=FileType.PHP, in_attribute=True
        )
        assert 0 <= calculate_confidence(candidate) <= 100


class TestKeyGeneratorFacade:
    """Test cases for the KeyGenerator wrapper."""

    def test_delegates_to_functions(self) -> None:
        generator = KeyGenerator()
        candidate = make_candidate()

        assert generator.generate(candidate) == generate_key(candidate)
        assert generator.calculate_confidence(candidate) == calculate_confidence(candidate)
        assert generator.detect_parameters("Hello John") == [":name"]
        assert generator.apply_parameters("Hello John", [":name"]) == "Hello :name"
