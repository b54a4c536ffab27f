"""Moderator endpoints of a subreddit: members, rules, traffic, styling and settings."""

from __future__ import annotations

import os
from typing import Any

from .models import (
    Ban,
    Moderator,
    Relationship,
    SubredditPostRequirements,
    SubredditRule,
    SubredditRuleCreateRequest,
    SubredditSettings,
    SubredditStyleSheet,
    SubredditTrafficStats,
)
from .transport import ApiClient, ListOptions, Response


class SubredditAdministration:
    """Talks to the subreddit moderation endpoints on behalf of an ApiClient."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def _children(
        self, path: str, options: ListOptions | None
    ) -> tuple[list[dict[str, Any]], Response]:
        params = options.to_params() if options is not None else None
        data, resp = self.client.request_json("GET", path, params=params)
        inner = (data or {}).get("data") or {}
        resp.after = inner.get("after") or ""
        return list(inner.get("children") or []), resp

    def banned(
        self, subreddit: str, options: ListOptions | None = None
    ) -> tuple[list[Ban], Response]:
        """Users banned from the subreddit."""
        children, resp = self._children(f"r/{subreddit}/about/banned", options)
        return [Ban.from_json(child) for child in children], resp

    def muted(
        self, subreddit: str, options: ListOptions | None = None
    ) -> tuple[list[Relationship], Response]:
        """Users muted in the subreddit."""
        children, resp = self._children(f"r/{subreddit}/about/muted", options)
        return [Relationship.from_json(child) for child in children], resp

    def wiki_banned(
        self, subreddit: str, options: ListOptions | None = None
    ) -> tuple[list[Ban], Response]:
        """Users banned from the subreddit's wiki."""
        children, resp = self._children(f"r/{subreddit}/about/wikibanned", options)
        return [Ban.from_json(child) for child in children], resp

    def contributors(
        self, subreddit: str, options: ListOptions | None = None
    ) -> tuple[list[Relationship], Response]:
        """Approved users of the subreddit."""
        children, resp = self._children(f"r/{subreddit}/about/contributors", options)
        return [Relationship.from_json(child) for child in children], resp

    def wiki_contributors(
        self, subreddit: str, options: ListOptions | None = None
    ) -> tuple[list[Relationship], Response]:
        """Contributors of the subreddit's wiki."""
        children, resp = self._children(f"r/{subreddit}/about/wikicontributors", options)
        return [Relationship.from_json(child) for child in children], resp

    def moderators(self, subreddit: str) -> tuple[list[Moderator], Response]:
        """The subreddit's moderators."""
        children, resp = self._children(f"r/{subreddit}/about/moderators", None)
        return [Moderator.from_json(child) for child in children], resp

    def rules(self, subreddit: str) -> tuple[list[SubredditRule], Response]:
        """The subreddit's rules."""
        data, resp = self.client.request_json("GET", f"r/{subreddit}/about/rules")
        rules = (data or {}).get("rules") or []
        return [SubredditRule.from_json(rule) for rule in rules], resp

    def create_rule(self, subreddit: str, request: SubredditRuleCreateRequest) -> Response:
        """Add a rule to the subreddit; the request is validated first."""
        if request is None:
            raise ValueError("request: cannot be None")
        request.validate()
        form = {**request.to_form(), "api_type": "json"}
        return self.client.request(
            "POST", f"r/{subreddit}/api/add_subreddit_rule", form=form
        )

    def traffic(
        self, subreddit: str
    ) -> tuple[
        list[SubredditTrafficStats],
        list[SubredditTrafficStats],
        list[SubredditTrafficStats],
        Response,
    ]:
        """Traffic of the subreddit by day, hour and month, in that order."""
        data, resp = self.client.request_json("GET", f"r/{subreddit}/about/traffic")
        data = data or {}

        def stats(key: str) -> list[SubredditTrafficStats]:
            return [SubredditTrafficStats.from_json(row) for row in data.get(key) or []]

        return stats("day"), stats("hour"), stats("month"), resp

    def style_sheet(self, subreddit: str) -> tuple[SubredditStyleSheet | None, Response]:
        """The subreddit's style sheet and information about its images."""
        thing, resp = self.client.get_thing(f"r/{subreddit}/about/stylesheet")
        sheet = thing.data if isinstance(thing.data, SubredditStyleSheet) else None
        return sheet, resp

    def style_sheet_raw(self, subreddit: str) -> tuple[str, Response]:
        """The style sheet with comments and newlines stripped, as plain text."""
        resp = self.client.request("GET", f"r/{subreddit}/stylesheet")
        return resp.body.decode("utf-8"), resp

    def update_style_sheet(
        self, subreddit: str, style_sheet: str, reason: str = ""
    ) -> Response:
        """Replace the subreddit's style sheet; the reason is optional."""
        form = {"api_type": "json", "op": "save", "stylesheet_contents": style_sheet}
        if reason:
            form["reason"] = reason
        return self.client.request(
            "POST", f"r/{subreddit}/api/subreddit_stylesheet", form=form
        )

    def _remove(self, subreddit: str, endpoint: str, **extra: str) -> Response:
        form = {"api_type": "json", **extra}
        return self.client.request("POST", f"r/{subreddit}/api/{endpoint}", form=form)

    def remove_image(self, subreddit: str, image_name: str) -> Response:
        """Remove an image from the custom image set; succeeds even if it does not exist."""
        return self._remove(subreddit, "delete_sr_img", img_name=image_name)

    def remove_header(self, subreddit: str) -> Response:
        """Remove the header image; succeeds even if there is none."""
        return self._remove(subreddit, "delete_sr_header")

    def remove_mobile_header(self, subreddit: str) -> Response:
        """Remove the mobile header; succeeds even if there is none."""
        return self._remove(subreddit, "delete_sr_banner")

    def remove_mobile_icon(self, subreddit: str) -> Response:
        """Remove the mobile icon; succeeds even if there is none."""
        return self._remove(subreddit, "delete_sr_icon")

    def _upload(
        self, subreddit: str, image_path: str, upload_type: str, image_name: str
    ) -> tuple[str, Response]:
        with open(image_path, "rb") as handle:
            content = handle.read()
        ext = os.path.splitext(image_path)[1]
        form = {
            "upload_type": upload_type,
            "name": image_name,
            "img_type": "jpg" if ext.lower() == ".jpg" else "png",
        }
        files = {"file": (os.path.basename(image_path), content)}
        data, resp = self.client.request_json(
            "POST", f"r/{subreddit}/api/upload_sr_img", form=form, files=files
        )
        data = data or {}
        errors = data.get("errors_values") or []
        if errors:
            raise ValueError(f"could not upload image: {'; '.join(errors)}")
        return data.get("img_src") or "", resp

    def upload_image(
        self, subreddit: str, image_path: str, image_name: str
    ) -> tuple[str, Response]:
        """Upload an image to the image set, replacing one of the same name; returns its link."""
        return self._upload(subreddit, image_path, "img", image_name)

    def upload_header(
        self, subreddit: str, image_path: str, image_name: str
    ) -> tuple[str, Response]:
        """Upload the header image; returns its link."""
        return self._upload(subreddit, image_path, "header", image_name)

    def upload_mobile_header(
        self, subreddit: str, image_path: str, image_name: str
    ) -> tuple[str, Response]:
        """Upload the mobile header image; returns its link."""
        return self._upload(subreddit, image_path, "banner", image_name)

    def upload_mobile_icon(
        self, subreddit: str, image_path: str, image_name: str
    ) -> tuple[str, Response]:
        """Upload the mobile icon; returns its link."""
        return self._upload(subreddit, image_path, "icon", image_name)

    def create(self, name: str, settings: SubredditSettings) -> Response:
        """Create a subreddit with the given settings."""
        if settings is None:
            raise ValueError("settings: cannot be None")
        form = {**settings.to_form(), "name": name, "api_type": "json"}
        return self.client.request("POST", "api/site_admin", form=form)

    def edit(self, subreddit_id: str, settings: SubredditSettings) -> Response:
        """Edit a subreddit; every setting is expected, see get_settings for a start."""
        if settings is None:
            raise ValueError("settings: cannot be None")
        form = {**settings.to_form(), "sr": subreddit_id, "api_type": "json"}
        return self.client.request("POST", "api/site_admin", form=form)

    def get_settings(self, subreddit: str) -> tuple[SubredditSettings | None, Response]:
        """The subreddit's settings, including its id."""
        thing, resp = self.client.get_thing(f"r/{subreddit}/about/edit")
        settings = thing.data if isinstance(thing.data, SubredditSettings) else None
        return settings, resp

    def post_requirements(
        self, subreddit: str
    ) -> tuple[SubredditPostRequirements, Response]:
        """The moderator-designed requirements for posting to the subreddit."""
        data, resp = self.client.request_json(
            "GET", f"api/v1/{subreddit}/post_requirements"
        )
        return SubredditPostRequirements.from_json(data or {}), resp