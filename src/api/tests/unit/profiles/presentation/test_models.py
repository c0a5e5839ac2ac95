"""Unit tests for profile request parsing."""

import pytest
from pydantic import ValidationError

from iam.domain.value_objects import ButtonStyle, Theme
from profiles.domain import Platform
from profiles.ports.exceptions import InvalidProfileSubmissionError
from profiles.presentation.models import ProfileUpdateRequest


def _parse(payload: dict):
    return ProfileUpdateRequest.model_validate(payload).to_submission()


class TestProfileUpdateRequest:
    """Tests for ProfileUpdateRequest.to_submission."""

    def test_absent_fields_are_not_attributes(self):
        submission = _parse({"bio": "Hi"})

        assert dict(submission.attributes) == {"bio": "Hi"}
        assert submission.links is None
        assert submission.social_links is None

    def test_camel_case_keys(self):
        submission = _parse(
            {
                "displayName": "Al",
                "showProfilePicture": False,
                "profilePictureUrl": "https://img.example/a.png",
            }
        )

        assert dict(submission.attributes) == {
            "display_name": "Al",
            "show_profile_picture": False,
            "profile_picture_url": "https://img.example/a.png",
        }

    def test_null_bio_and_picture_are_passed_through(self):
        submission = _parse({"bio": None, "profilePictureUrl": None})

        assert dict(submission.attributes) == {
            "bio": None,
            "profile_picture_url": None,
        }

    @pytest.mark.parametrize("key", ["displayName", "showProfilePicture"])
    def test_null_required_attribute_is_rejected(self, key):
        with pytest.raises(InvalidProfileSubmissionError, match=f"{key} cannot be null"):
            _parse({key: None})

    def test_partial_theme_fills_defaults(self):
        submission = _parse({"theme": {"buttonStyle": "outline"}})

        theme = submission.attributes["theme"]
        assert theme == Theme(button_style=ButtonStyle.OUTLINE)

    def test_null_theme_is_ignored(self):
        assert "theme" not in _parse({"theme": None, "bio": "x"}).attributes

    def test_invalid_theme_enum_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            ProfileUpdateRequest.model_validate({"theme": {"buttonSize": "huge"}})

    def test_link_ids_are_parsed_leniently(self):
        submission = _parse(
            {
                "links": [
                    {"id": "3", "title": "A"},
                    {"id": 1712345678901, "title": "B", "url": "b"},
                    {"id": "tmp-1", "title": "C", "url": "c"},
                    {"title": "D", "url": "d", "visible": False},
                ]
            }
        )

        assert [link.id for link in submission.links] == [3, 1712345678901, None, None]
        assert submission.links[0].url is None
        assert submission.links[3].visible is False

    def test_empty_links_list_is_kept(self):
        assert _parse({"links": []}).links == ()

    def test_social_links(self):
        submission = _parse(
            {"socialLinks": [{"id": "2", "platform": "github", "url": "gh"}]}
        )

        social = submission.social_links[0]
        assert social.id == 2
        assert social.platform is Platform.GITHUB

    def test_unknown_platform_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            ProfileUpdateRequest.model_validate(
                {"socialLinks": [{"platform": "myspace", "url": "x"}]}
            )

    def test_overlong_title_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            ProfileUpdateRequest.model_validate({"links": [{"title": "x" * 201}]})
