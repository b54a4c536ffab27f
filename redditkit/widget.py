"""Subreddit widgets: the sections of content shown in a subreddit's sidebar."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Union

from .transport import ApiClient, Response

WIDGET_KIND_TEXT_AREA = "textarea"
WIDGET_KIND_BUTTON = "button"
WIDGET_KIND_IMAGE = "image"
WIDGET_KIND_COMMUNITY_LIST = "community-list"
WIDGET_KIND_MENU = "menu"
WIDGET_KIND_COMMUNITY_DETAILS = "id-card"
WIDGET_KIND_MODERATORS = "moderators"
WIDGET_KIND_SUBREDDIT_RULES = "subreddit-rules"
WIDGET_KIND_CUSTOM = "custom"


def _str(data: dict[str, Any], key: str) -> str:
    return data.get(key) or ""


def _int(data: dict[str, Any], key: str) -> int:
    return data.get(key) or 0


@dataclass
class WidgetStyle:
    """Colours of a widget."""

    header_color: str = ""
    background_color: str = ""


def _style_from_json(data: Any) -> WidgetStyle | None:
    if data is None:
        return None
    return WidgetStyle(_str(data, "headerColor"), _str(data, "backgroundColor"))


def _style_to_json(style: WidgetStyle) -> dict[str, str]:
    out = {}
    if style.header_color:
        out["headerColor"] = style.header_color
    if style.background_color:
        out["backgroundColor"] = style.background_color
    return out


@dataclass
class Widget:
    """Fields every widget has."""

    id: str = ""
    kind: str = ""
    style: WidgetStyle | None = None


@dataclass
class TextAreaWidget(Widget):
    """A box of text."""

    name: str = ""
    text: str = ""


@dataclass
class WidgetButtonHoverState:
    """How a button looks while the mouse is over it."""

    text: str = ""
    text_color: str = ""
    fill_color: str = ""
    stroke_color: str = ""


@dataclass
class WidgetButton:
    """A button of a button widget; ``stroke_color`` is its outline."""

    text: str = ""
    url: str = ""
    text_color: str = ""
    fill_color: str = ""
    stroke_color: str = ""
    hover_state: WidgetButtonHoverState | None = None


@dataclass
class ButtonWidget(Widget):
    """Up to 10 button style links."""

    name: str = ""
    description: str = ""
    buttons: list[WidgetButton] = field(default_factory=list)


@dataclass
class WidgetImageLink:
    """An image that links to a URL."""

    url: str = ""
    link_url: str = ""


@dataclass
class ImageWidget(Widget):
    """A random image from up to 10 selected ones."""

    name: str = ""
    images: list[WidgetImageLink] = field(default_factory=list)


@dataclass
class WidgetCommunity:
    """A subreddit shown in a widget."""

    name: str = ""
    subscribers: int = 0
    subscribed: bool = False
    nsfw: bool = False


@dataclass
class CommunityListWidget(Widget):
    """A list of up to 10 other subreddits."""

    name: str = ""
    communities: list[WidgetCommunity] = field(default_factory=list)


@dataclass
class WidgetLinkSingle:
    """A single link of a menu."""

    text: str = ""
    url: str = ""


@dataclass
class WidgetLinkMultiple:
    """A drop-down of several links of a menu."""

    text: str = ""
    urls: list[WidgetLinkSingle] = field(default_factory=list)


WidgetLink = Union[WidgetLinkSingle, WidgetLinkMultiple]


@dataclass
class MenuWidget(Widget):
    """Tabs of the subreddit's menu: links or drop-downs of links."""

    show_wiki: bool = False
    links: list[WidgetLink] = field(default_factory=list)


@dataclass
class CommunityDetailsWidget(Widget):
    """Subscriber count, users online and the subreddit's description."""

    name: str = ""
    description: str = ""
    subscribers: int = 0
    currently_viewing: int = 0
    subscribers_text: str = ""
    currently_viewing_text: str = ""


@dataclass
class ModeratorsWidget(Widget):
    """The names of the subreddit's moderators."""

    mods: list[str] = field(default_factory=list)
    total: int = 0


@dataclass
class SubredditRulesWidget(Widget):
    """The subreddit's rules; ``display`` is full or compact."""

    name: str = ""
    display: str = ""
    rules: list[str] = field(default_factory=list)


@dataclass
class WidgetImage:
    """An image used by a custom widget."""

    name: str = ""
    url: str = ""


@dataclass
class CustomWidget(Widget):
    """A widget with custom text and style sheet."""

    name: str = ""
    text: str = ""
    style_sheet: str = ""
    style_sheet_url: str = ""
    images: list[WidgetImage] = field(default_factory=list)


def _base(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": _str(data, "id"),
        "kind": _str(data, "kind"),
        "style": _style_from_json(data.get("styles")),
    }


def _hover_state(data: Any) -> WidgetButtonHoverState | None:
    if data is None:
        return None
    return WidgetButtonHoverState(
        text=_str(data, "text"),
        text_color=_str(data, "textColor"),
        fill_color=_str(data, "fillColor"),
        stroke_color=_str(data, "color"),
    )


def _button(data: dict[str, Any]) -> WidgetButton:
    return WidgetButton(
        text=_str(data, "text"),
        url=_str(data, "url"),
        text_color=_str(data, "textColor"),
        fill_color=_str(data, "fillColor"),
        stroke_color=_str(data, "color"),
        hover_state=_hover_state(data.get("hoverState")),
    )


def _text_area(data: dict[str, Any]) -> Widget:
    return TextAreaWidget(**_base(data), name=_str(data, "shortName"), text=_str(data, "text"))


def _button_widget(data: dict[str, Any]) -> Widget:
    return ButtonWidget(
        **_base(data),
        name=_str(data, "shortName"),
        description=_str(data, "description"),
        buttons=[_button(b) for b in data.get("buttons") or []],
    )


def _image(data: dict[str, Any]) -> Widget:
    return ImageWidget(
        **_base(data),
        name=_str(data, "shortName"),
        images=[
            WidgetImageLink(_str(item, "url"), _str(item, "linkURL"))
            for item in data.get("data") or []
        ],
    )


def _community_list(data: dict[str, Any]) -> Widget:
    return CommunityListWidget(
        **_base(data),
        name=_str(data, "shortName"),
        communities=[
            WidgetCommunity(
                name=_str(item, "name"),
                subscribers=_int(item, "subscribers"),
                subscribed=bool(item.get("isSubscribed")),
                nsfw=bool(item.get("isNSFW")),
            )
            for item in data.get("data") or []
        ],
    )


def _menu(data: dict[str, Any]) -> Widget:
    return MenuWidget(
        **_base(data),
        show_wiki=bool(data.get("showWiki")),
        links=parse_widget_links(data.get("data") or []),
    )


def _community_details(data: dict[str, Any]) -> Widget:
    return CommunityDetailsWidget(
        **_base(data),
        name=_str(data, "shortName"),
        description=_str(data, "description"),
        subscribers=_int(data, "subscribersCount"),
        currently_viewing=_int(data, "currentlyViewingCount"),
        subscribers_text=_str(data, "subscribersText"),
        currently_viewing_text=_str(data, "currentlyViewingText"),
    )


def _moderators(data: dict[str, Any]) -> Widget:
    return ModeratorsWidget(
        **_base(data),
        mods=[_str(mod, "name") for mod in data.get("mods") or []],
        total=_int(data, "totalMods"),
    )


def _rules(data: dict[str, Any]) -> Widget:
    return SubredditRulesWidget(
        **_base(data),
        name=_str(data, "shortName"),
        display=_str(data, "display"),
        rules=[_str(rule, "description") for rule in data.get("data") or []],
    )


def _custom(data: dict[str, Any]) -> Widget:
    return CustomWidget(
        **_base(data),
        name=_str(data, "shortName"),
        text=_str(data, "text"),
        style_sheet=_str(data, "css"),
        style_sheet_url=_str(data, "stylesheetUrl"),
        images=[
            WidgetImage(_str(item, "name"), _str(item, "url"))
            for item in data.get("imageData") or []
        ],
    )


_PARSERS: dict[str, Callable[[dict[str, Any]], Widget]] = {
    WIDGET_KIND_TEXT_AREA: _text_area,
    WIDGET_KIND_BUTTON: _button_widget,
    WIDGET_KIND_IMAGE: _image,
    WIDGET_KIND_COMMUNITY_LIST: _community_list,
    WIDGET_KIND_MENU: _menu,
    WIDGET_KIND_COMMUNITY_DETAILS: _community_details,
    WIDGET_KIND_MODERATORS: _moderators,
    WIDGET_KIND_SUBREDDIT_RULES: _rules,
    WIDGET_KIND_CUSTOM: _custom,
}


def parse_widget(data: dict[str, Any]) -> Widget:
    """Build the widget of the right type; raises ValueError for an unknown kind."""
    if not isinstance(data, dict):
        raise ValueError(f"widget must be an object, got {data!r}")
    kind = data.get("kind") or ""
    parser = _PARSERS.get(kind)
    if parser is None:
        raise ValueError(f"unrecognized widget kind: {kind!r}")
    return parser(data)


def parse_widget_list(data: dict[str, Any]) -> list[Widget]:
    """The widgets of an id-to-widget mapping."""
    if not isinstance(data, dict):
        raise ValueError(f"widget list must be an object, got {data!r}")
    return [parse_widget(item) for item in data.values()]


def parse_widget_links(data: list[Any]) -> list[WidgetLink]:
    """Menu links: entries with ``children`` are drop-downs, the rest single links."""
    if not isinstance(data, list):
        raise ValueError(f"widget links must be an array, got {data!r}")
    links: list[WidgetLink] = []
    for item in data:
        if not isinstance(item, dict):
            raise ValueError(f"widget link must be an object, got {item!r}")
        if "children" in item:
            links.append(
                WidgetLinkMultiple(
                    text=_str(item, "text"),
                    urls=[
                        WidgetLinkSingle(_str(child, "text"), _str(child, "url"))
                        for child in item.get("children") or []
                    ],
                )
            )
        else:
            links.append(WidgetLinkSingle(_str(item, "text"), _str(item, "url")))
    return links


def _request_json(kind: str, style: WidgetStyle | None, name: str) -> dict[str, Any]:
    out: dict[str, Any] = {"kind": kind}
    if style is not None:
        out["styles"] = _style_to_json(style)
    if name:
        out["shortName"] = name
    return out


@dataclass
class TextAreaWidgetCreateRequest:
    """A request to create a text area widget; name is at most 30 characters."""

    name: str = ""
    text: str = ""
    style: WidgetStyle | None = None
    kind: ClassVar[str] = WIDGET_KIND_TEXT_AREA

    def to_json(self) -> dict[str, Any]:
        out = _request_json(self.kind, self.style, self.name)
        if self.text:
            out["text"] = self.text
        return out


@dataclass
class CommunityListWidgetCreateRequest:
    """A request to create a community list widget; name is at most 30 characters."""

    name: str = ""
    communities: list[str] = field(default_factory=list)
    style: WidgetStyle | None = None
    kind: ClassVar[str] = WIDGET_KIND_COMMUNITY_LIST

    def to_json(self) -> dict[str, Any]:
        out = _request_json(self.kind, self.style, self.name)
        if self.communities:
            out["data"] = list(self.communities)
        return out


WidgetCreateRequest = Union[TextAreaWidgetCreateRequest, CommunityListWidgetCreateRequest]


class WidgetService:
    """The widget endpoints of the API."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def get(self, subreddit: str) -> tuple[list[Widget], Response]:
        """The subreddit's widgets."""
        data, resp = self.client.request_json(
            "GET", f"r/{subreddit}/api/widgets?progressive_images=true"
        )
        items = (data or {}).get("items") or {}
        return parse_widget_list(items), resp

    def create(self, subreddit: str, request: WidgetCreateRequest) -> tuple[Widget, Response]:
        """Create a widget and return it as the API stored it."""
        if request is None:
            raise ValueError("request: cannot be None")
        data, resp = self.client.request_json(
            "POST", f"r/{subreddit}/api/widget", json_body=request.to_json()
        )
        return parse_widget(data), resp

    def delete(self, subreddit: str, widget_id: str) -> Response:
        """Delete a widget by its id."""
        return self.client.request("DELETE", f"r/{subreddit}/api/widget/{widget_id}")

    def reorder(self, subreddit: str, ids: list[str]) -> Response:
        """Set the order of the sidebar widgets; every sidebar widget id must be given."""
        return self.client.request(
            "PATCH", f"r/{subreddit}/api/widget_order/sidebar", json_body=list(ids)
        )