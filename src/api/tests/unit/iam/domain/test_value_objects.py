"""Unit tests for IAM value objects."""

import pytest

from iam.domain.value_objects import ButtonSize, ButtonStyle, Theme, UserId


class TestUserId:
    """Tests for UserId."""

    def test_str_is_wire_form(self):
        """Ids travel as decimal strings."""
        assert str(UserId(value=17)) == "17"

    def test_from_string(self):
        assert UserId.from_string("17") == UserId(value=17)

    @pytest.mark.parametrize("value", ["", "0", "-3", "abc", "1.5"])
    def test_from_string_rejects_non_positive_or_non_numeric(self, value):
        with pytest.raises(ValueError):
            UserId.from_string(value)


class TestTheme:
    """Tests for the Theme value object."""

    def test_defaults(self):
        """A new theme should carry the documented defaults."""
        theme = Theme()

        assert theme.background_color == "#000000"
        assert theme.background_image is None
        assert theme.button_color == "#ffffff"
        assert theme.button_text_color == "#000000"
        assert theme.button_radius == "8px"
        assert theme.font_family == "Inter, sans-serif"
        assert theme.button_style is ButtonStyle.FILLED
        assert theme.button_size is ButtonSize.MEDIUM
        assert theme.text_color == "#ffffff"

    def test_document_uses_camel_case_and_omits_missing_image(self):
        document = Theme(button_style=ButtonStyle.SOFT).to_document()

        assert document["buttonStyle"] == "soft"
        assert document["backgroundColor"] == "#000000"
        assert "backgroundImage" not in document

    def test_document_round_trip(self):
        theme = Theme(
            background_color="#123456",
            background_image="https://img.example/bg.png",
            button_size=ButtonSize.LARGE,
        )

        assert Theme.from_document(theme.to_document()) == theme

    def test_from_empty_document_gives_defaults(self):
        assert Theme.from_document(None) == Theme()
        assert Theme.from_document({}) == Theme()

    def test_from_document_ignores_unknown_and_invalid_values(self):
        """Rows with stray or invalid values should still load."""
        theme = Theme.from_document(
            {
                "buttonStyle": "sparkly",
                "buttonSize": 3,
                "textColor": "#eeeeee",
                "unknownKey": "x",
            }
        )

        assert theme.button_style is ButtonStyle.FILLED
        assert theme.button_size is ButtonSize.MEDIUM
        assert theme.text_color == "#eeeeee"
