"""Pydantic models for profile API requests and responses."""

from __future__ import annotations

from typing import Any

from pydantic import Field, StrictBool, StrictStr

from iam.domain.value_objects import ButtonSize, ButtonStyle, Theme
from profiles.application.value_objects import (
    FullProfile,
    LinkSubmission,
    ProfileSubmission,
    PublicProfile,
    SocialLinkSubmission,
)
from profiles.domain.entities import LINK_TITLE_MAX_LENGTH
from profiles.domain.value_objects import Platform, parse_wire_id
from profiles.ports.exceptions import InvalidProfileSubmissionError
from shared_kernel.api_models import CamelModel


class ThemeModel(CamelModel):
    """Theme as exchanged with the client.

    On input every field is optional and missing ones take their
    defaults; on output every field is filled in.
    """

    background_color: StrictStr | None = None
    background_image: StrictStr | None = None
    button_color: StrictStr | None = None
    button_text_color: StrictStr | None = None
    button_radius: StrictStr | None = None
    font_family: StrictStr | None = None
    button_style: ButtonStyle | None = None
    button_size: ButtonSize | None = None
    text_color: StrictStr | None = None

    def to_domain(self) -> Theme:
        """Build a complete Theme, defaulting the fields that were not sent."""
        return Theme(**self.model_dump(exclude_none=True))

    @classmethod
    def from_domain(cls, theme: Theme) -> ThemeModel:
        return cls(
            background_color=theme.background_color,
            background_image=theme.background_image,
            button_color=theme.button_color,
            button_text_color=theme.button_text_color,
            button_radius=theme.button_radius,
            font_family=theme.font_family,
            button_style=theme.button_style,
            button_size=theme.button_size,
            text_color=theme.text_color,
        )


class LinkInput(CamelModel):
    """A submitted link.

    ``id`` is whatever the client holds: a server id (usually as a
    string) or a temporary one. It is parsed, never rejected.
    """

    id: Any = None
    title: StrictStr | None = Field(default=None, max_length=LINK_TITLE_MAX_LENGTH)
    url: StrictStr | None = None
    visible: StrictBool | None = None

    def to_submission(self) -> LinkSubmission:
        return LinkSubmission(
            id=parse_wire_id(self.id),
            title=self.title,
            url=self.url,
            visible=self.visible,
        )


class SocialLinkInput(CamelModel):
    """A submitted social link."""

    id: Any = None
    platform: Platform | None = None
    url: StrictStr | None = None
    visible: StrictBool | None = None

    def to_submission(self) -> SocialLinkSubmission:
        return SocialLinkSubmission(
            id=parse_wire_id(self.id),
            platform=self.platform,
            url=self.url,
            visible=self.visible,
        )


class ProfileUpdateRequest(CamelModel):
    """Full or partial profile document.

    A field that is absent leaves the stored value alone. ``bio: null``
    clears the bio and ``profilePictureUrl: null`` removes the picture URL.
    ``theme: null`` is treated like an absent theme and changes nothing.
    """

    display_name: StrictStr | None = Field(default=None, max_length=100)
    bio: StrictStr | None = None
    theme: ThemeModel | None = None
    show_profile_picture: StrictBool | None = None
    profile_picture_url: StrictStr | None = None
    links: list[LinkInput] | None = None
    social_links: list[SocialLinkInput] | None = None

    def to_submission(self) -> ProfileSubmission:
        """Convert to the application-layer submission.

        Raises:
            InvalidProfileSubmissionError: If a non-nullable field is null
        """
        present = self.model_fields_set
        attributes: dict[str, Any] = {}

        for name in ("display_name", "show_profile_picture"):
            if name not in present:
                continue
            value = getattr(self, name)
            if value is None:
                alias = type(self).model_fields[name].alias or name
                raise InvalidProfileSubmissionError(f"{alias} cannot be null")
            attributes[name] = value

        for name in ("bio", "profile_picture_url"):
            if name in present:
                attributes[name] = getattr(self, name)

        if self.theme is not None:
            attributes["theme"] = self.theme.to_domain()

        return ProfileSubmission(
            attributes=attributes,
            links=(
                tuple(link.to_submission() for link in self.links)
                if self.links is not None
                else None
            ),
            social_links=(
                tuple(social.to_submission() for social in self.social_links)
                if self.social_links is not None
                else None
            ),
        )


class LinkResponse(CamelModel):
    id: str
    title: str
    url: str
    visible: bool


class SocialLinkResponse(CamelModel):
    id: str
    platform: Platform
    url: str
    visible: bool


class ProfileResponse(CamelModel):
    """The owner's full profile."""

    id: str
    username: str
    display_name: str
    bio: str
    theme: ThemeModel
    show_profile_picture: bool
    profile_picture_url: str | None
    links: list[LinkResponse]
    social_links: list[SocialLinkResponse]

    @classmethod
    def from_domain(cls, profile: FullProfile) -> ProfileResponse:
        """Convert a FullProfile read model to the API response.

        Args:
            profile: The owner's profile

        Returns:
            ProfileResponse with ids rendered as strings
        """
        user = profile.user
        return cls(
            id=str(user.id),
            username=user.username,
            display_name=user.display_name,
            bio=user.bio,
            theme=ThemeModel.from_domain(user.theme),
            show_profile_picture=user.show_profile_picture,
            profile_picture_url=user.profile_picture_url,
            links=[
                LinkResponse(
                    id=str(link.id),
                    title=link.title,
                    url=link.url,
                    visible=link.visible,
                )
                for link in profile.links
            ],
            social_links=[
                SocialLinkResponse(
                    id=str(social.id),
                    platform=social.platform,
                    url=social.url,
                    visible=social.visible,
                )
                for social in profile.social_links
            ],
        )


class PublicLinkResponse(CamelModel):
    id: str
    title: str
    url: str
    href: str = Field(..., description="url with a scheme, ready to navigate to")


class PublicSocialLinkResponse(CamelModel):
    id: str
    platform: Platform
    url: str
    href: str = Field(..., description="url with a scheme, ready to navigate to")


class PublicProfileResponse(CamelModel):
    """The public view of a profile."""

    username: str
    display_name: str
    bio: str
    theme: ThemeModel
    show_profile_picture: bool
    profile_picture_url: str | None
    links: list[PublicLinkResponse]
    social_links: list[PublicSocialLinkResponse]

    @classmethod
    def from_domain(cls, profile: PublicProfile) -> PublicProfileResponse:
        return cls(
            username=profile.username,
            display_name=profile.display_name,
            bio=profile.bio,
            theme=ThemeModel.from_domain(profile.theme),
            show_profile_picture=profile.show_profile_picture,
            profile_picture_url=profile.profile_picture_url,
            links=[
                PublicLinkResponse(
                    id=str(link.id), title=link.title, url=link.url, href=link.href
                )
                for link in profile.links
            ],
            social_links=[
                PublicSocialLinkResponse(
                    id=str(social.id),
                    platform=social.platform,
                    url=social.url,
                    href=social.href,
                )
                for social in profile.social_links
            ],
        )
