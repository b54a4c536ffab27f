"""Data types for subreddits, their moderation and users."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from .timestamp import Timestamp


def _timestamp(data: dict[str, Any], key: str) -> Timestamp | None:
    value = data.get(key)
    return None if value is None else Timestamp.from_json(value)


def _str(data: dict[str, Any], key: str) -> str:
    return data.get(key) or ""


def _int(data: dict[str, Any], key: str) -> int:
    return data.get(key) or 0


def _bool(data: dict[str, Any], key: str) -> bool:
    return bool(data.get(key))


def _strings(data: dict[str, Any], key: str) -> list[str]:
    return list(data.get(key) or [])


def _relationship_fields(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": _str(data, "rel_id"),
        "user": _str(data, "name"),
        "user_id": _str(data, "id"),
        "created": _timestamp(data, "date"),
    }


@dataclass
class Relationship:
    """A relationship with a user (friend, muted, contributor, ...)."""

    id: str = ""
    user: str = ""
    user_id: str = ""
    created: Timestamp | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Relationship":
        return cls(**_relationship_fields(data))


@dataclass
class Moderator(Relationship):
    """A user who moderates a subreddit."""

    permissions: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Moderator":
        return cls(**_relationship_fields(data), permissions=_strings(data, "mod_permissions"))


@dataclass
class Ban(Relationship):
    """A banned relationship; ``days_left`` is None when the ban is permanent."""

    days_left: int | None = None
    note: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Ban":
        return cls(
            **_relationship_fields(data),
            days_left=data.get("days_left"),
            note=_str(data, "note"),
        )


@dataclass
class SubredditRule:
    """A rule of a subreddit."""

    kind: str = ""
    name: str = ""
    violation_reason: str = ""
    description: str = ""
    priority: int = 0
    created: Timestamp | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "SubredditRule":
        return cls(
            kind=_str(data, "kind"),
            name=_str(data, "short_name"),
            violation_reason=_str(data, "violation_reason"),
            description=_str(data, "description"),
            priority=_int(data, "priority"),
            created=_timestamp(data, "created_utc"),
        )


_RULE_KINDS = ("comment", "link", "all")


def _byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


@dataclass
class SubredditRuleCreateRequest:
    """A request to add a rule to a subreddit."""

    kind: str = ""
    name: str = ""
    violation_reason: str = ""
    description: str = ""

    def validate(self) -> None:
        """Raise ValueError if the request breaks one of the API's limits."""
        if self.kind not in _RULE_KINDS:
            raise ValueError("SubredditRuleCreateRequest.kind: must be one of: comment, link, all")
        if not self.name or _byte_length(self.name) > 100:
            raise ValueError("SubredditRuleCreateRequest.name: must be between 1-100 characters")
        if _byte_length(self.violation_reason) > 100:
            raise ValueError(
                "SubredditRuleCreateRequest.violation_reason: cannot be longer than 100 characters"
            )
        if _byte_length(self.description) > 500:
            raise ValueError(
                "SubredditRuleCreateRequest.description: cannot be longer than 500 characters"
            )

    def to_form(self) -> dict[str, str]:
        """Form fields for the request; empty optional fields are left out."""
        form = {"kind": self.kind, "short_name": self.name}
        if self.violation_reason:
            form["violation_reason"] = self.violation_reason
        if self.description:
            form["description"] = self.description
        return form


@dataclass
class SubredditTrafficStats:
    """Traffic for one day, hour or month; subscribers is only set for days."""

    start: Timestamp | None = None
    unique_views: int = 0
    total_views: int = 0
    subscribers: int = 0

    @classmethod
    def from_json(cls, data: list[Any]) -> "SubredditTrafficStats":
        """Build from the API's ``[start, unique, total, subscribers]`` array."""
        if not isinstance(data, list):
            raise ValueError(f"traffic entry must be an array, got {data!r}")
        values = (data[:4] + [0, 0, 0, 0])[:4]
        for value in values:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"traffic values must be integers, got {value!r}")
        start, unique_views, total_views, subscribers = values
        return cls(Timestamp.from_json(start), unique_views, total_views, subscribers)


@dataclass
class SubredditImage:
    """An image of a subreddit's image set."""

    name: str = ""
    link: str = ""
    url: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "SubredditImage":
        return cls(name=_str(data, "name"), link=_str(data, "link"), url=_str(data, "url"))


@dataclass
class SubredditStyleSheet:
    """A subreddit's style sheet and the images it uses."""

    subreddit_id: str = ""
    images: list[SubredditImage] = field(default_factory=list)
    style_sheet: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "SubredditStyleSheet":
        return cls(
            subreddit_id=_str(data, "subreddit_id"),
            images=[SubredditImage.from_json(image) for image in data.get("images") or []],
            style_sheet=_str(data, "stylesheet"),
        )


def _setting(form_key: str, json_key: str | None = None) -> Any:
    return field(default=None, metadata={"form": form_key, "json": json_key or form_key})


@dataclass
class SubredditSettings:
    """A subreddit's settings; None means the setting is not given."""

    id: str = field(default="", metadata={"form": None, "json": "subreddit_id"})
    type: str | None = _setting("type", "subreddit_type")
    language: str | None = _setting("lang", "language")
    title: str | None = _setting("title")
    description: str | None = _setting("public_description")
    sidebar: str | None = _setting("description")
    submission_text: str | None = _setting("submit_text")
    welcome_message: str | None = _setting("welcome_message_text")
    welcome_message_enabled: bool | None = _setting("welcome_message_enabled")
    allow_crossposts: bool | None = _setting("allow_post_crossposts")
    allow_chat_posts: bool | None = _setting("allow_chat_post_creation")
    allow_poll_posts: bool | None = _setting("allow_polls")
    allow_free_form_reports: bool | None = _setting("free_form_reports")
    allow_original_content: bool | None = _setting("original_content_tag_enabled")
    allow_images: bool | None = _setting("allow_images")
    allow_multiple_images_per_post: bool | None = _setting("allow_galleries")
    exclude_sitewide_banned_users_content: bool | None = _setting("exclude_banned_modqueue")
    crowd_control_chat_level: int | None = _setting("crowd_control_chat_level")
    all_original_content: bool | None = _setting("all_original_content")
    suggested_comment_sort: str | None = _setting("suggested_comment_sort")
    submit_link_post_label: str | None = _setting("submit_link_label")
    submit_text_post_label: str | None = _setting("submit_text_label")
    post_type: str | None = _setting("link_type", "content_options")
    spam_filter_strength_link_posts: str | None = _setting("spam_links")
    spam_filter_strength_text_posts: str | None = _setting("spam_selfposts")
    spam_filter_strength_comments: str | None = _setting("spam_comments")
    show_content_thumbnails: bool | None = _setting("show_media")
    expand_media_previews_on_comments_pages: bool | None = _setting("show_media_preview")
    collapse_deleted_comments: bool | None = _setting("collapse_deleted_comments")
    minutes_to_hide_comment_scores: int | None = _setting("comment_score_hide_mins")
    spoilers_enabled: bool | None = _setting("spoilers_enabled")
    header_mouseover_text: str | None = _setting("header-title", "header_hover_text")
    mobile_colour: str | None = _setting("key_color")
    hide_ads: bool | None = _setting("hide_ads")
    nsfw: bool | None = _setting("over_18")
    allow_discovery_in_high_traffic_feeds: bool | None = _setting("allow_top", "default_set")
    allow_discovery_by_individual_users: bool | None = _setting("allow_discovery")
    wiki_mode: str | None = _setting("wikimode")
    wiki_minimum_account_age: int | None = _setting("wiki_edit_age")
    wiki_minimum_karma: int | None = _setting("wiki_edit_karma")

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "SubredditSettings":
        values = {f.name: data.get(f.metadata["json"]) for f in fields(cls)}
        values["id"] = values["id"] or ""
        return cls(**values)

    def to_form(self) -> dict[str, str]:
        """Form fields for every setting that is given; the id is never included."""
        form: dict[str, str] = {}
        for f in fields(self):
            key = f.metadata["form"]
            value = getattr(self, f.name)
            if key is None or value is None:
                continue
            if isinstance(value, bool):
                form[key] = "true" if value else "false"
            else:
                form[key] = str(value)
        return form


@dataclass
class SubredditPostRequirements:
    """Moderator-designed requirements for posting to a subreddit."""

    guidelines: str = ""
    guidelines_display_policy: str = ""
    title_min_length: int = 0
    title_max_length: int = 0
    body_min_length: int = 0
    body_max_length: int = 0
    title_blacklisted_strings: list[str] = field(default_factory=list)
    body_blacklisted_strings: list[str] = field(default_factory=list)
    title_required_strings: list[str] = field(default_factory=list)
    body_required_strings: list[str] = field(default_factory=list)
    domain_blacklist: list[str] = field(default_factory=list)
    domain_whitelist: list[str] = field(default_factory=list)
    body_restriction_policy: str = ""
    link_restriction_policy: str = ""
    gallery_min_items: int = 0
    gallery_max_items: int = 0
    gallery_captions_requirement: str = ""
    gallery_urls_requirement: str = ""
    link_repost_age: int = 0
    flair_required: bool = False
    title_regexes: list[str] = field(default_factory=list)
    body_regexes: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "SubredditPostRequirements":
        return cls(
            guidelines=_str(data, "guidelines_text"),
            guidelines_display_policy=_str(data, "guidelines_display_policy"),
            title_min_length=_int(data, "title_text_min_length"),
            title_max_length=_int(data, "title_text_max_length"),
            body_min_length=_int(data, "body_text_min_length"),
            body_max_length=_int(data, "body_text_max_length"),
            title_blacklisted_strings=_strings(data, "title_blacklisted_strings"),
            body_blacklisted_strings=_strings(data, "body_blacklisted_strings"),
            title_required_strings=_strings(data, "title_required_strings"),
            body_required_strings=_strings(data, "body_required_strings"),
            domain_blacklist=_strings(data, "domain_blacklist"),
            domain_whitelist=_strings(data, "domain_whitelist"),
            body_restriction_policy=_str(data, "body_restriction_policy"),
            link_restriction_policy=_str(data, "link_restriction_policy"),
            gallery_min_items=_int(data, "gallery_min_items"),
            gallery_max_items=_int(data, "gallery_max_items"),
            gallery_captions_requirement=_str(data, "gallery_captions_requirement"),
            gallery_urls_requirement=_str(data, "gallery_urls_requirement"),
            link_repost_age=_int(data, "link_repost_age"),
            flair_required=_bool(data, "is_flair_required"),
            title_regexes=_strings(data, "title_regexes"),
            body_regexes=_strings(data, "body_regexes"),
        )


@dataclass
class User:
    """A user account; ``id`` is the short id, not the full one."""

    id: str = ""
    name: str = ""
    created: Timestamp | None = None
    post_karma: int = 0
    comment_karma: int = 0
    is_friend: bool = False
    is_employee: bool = False
    has_verified_email: bool = False
    nsfw: bool = False
    is_suspended: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
            created=_timestamp(data, "created_utc"),
            post_karma=_int(data, "link_karma"),
            comment_karma=_int(data, "comment_karma"),
            is_friend=_bool(data, "is_friend"),
            is_employee=_bool(data, "is_employee"),
            has_verified_email=_bool(data, "has_verified_email"),
            nsfw=_bool(data, "over_18"),
            is_suspended=_bool(data, "is_suspended"),
        )


@dataclass
class UserSummary:
    """A shorter description of a user account."""

    name: str = ""
    created: Timestamp | None = None
    post_karma: int = 0
    comment_karma: int = 0
    nsfw: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "UserSummary":
        return cls(
            name=_str(data, "name"),
            created=_timestamp(data, "created_utc"),
            post_karma=_int(data, "link_karma"),
            comment_karma=_int(data, "comment_karma"),
            nsfw=_bool(data, "profile_over_18"),
        )


@dataclass
class Blocked:
    """A blocked user."""

    blocked: str = ""
    blocked_id: str = ""
    created: Timestamp | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Blocked":
        return cls(
            blocked=_str(data, "name"),
            blocked_id=_str(data, "id"),
            created=_timestamp(data, "date"),
        )


@dataclass
class Trophy:
    """An award given to a user."""

    id: str = ""
    name: str = ""
    description: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Trophy":
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
            description=_str(data, "description"),
        )