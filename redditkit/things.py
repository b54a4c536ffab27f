"""Things returned by the API: posts, comments, subreddits and the listings holding them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from .models import SubredditSettings, SubredditStyleSheet, Trophy, User
from .timestamp import Timestamp

KIND_COMMENT = "t1"
KIND_USER = "t2"
KIND_POST = "t3"
KIND_MESSAGE = "t4"
KIND_SUBREDDIT = "t5"
KIND_TROPHY = "t6"
KIND_LISTING = "Listing"
KIND_SUBREDDIT_SETTINGS = "subreddit_settings"
KIND_KARMA_LIST = "KarmaList"
KIND_TROPHY_LIST = "TrophyList"
KIND_USER_LIST = "UserList"
KIND_MORE = "more"
KIND_LIVE_THREAD = "LiveUpdateEvent"
KIND_LIVE_THREAD_UPDATE = "LiveUpdate"
KIND_MOD_ACTION = "modaction"
KIND_MULTI = "LabeledMulti"
KIND_MULTI_DESCRIPTION = "LabeledMultiDescription"
KIND_WIKI_PAGE = "wikipage"
KIND_WIKI_PAGE_LISTING = "wikipagelisting"
KIND_WIKI_PAGE_SETTINGS = "wikipagesettings"
KIND_STYLE_SHEET = "stylesheet"

# Kinds that are recognised but whose payload is kept as decoded JSON.
_RAW_KINDS = frozenset(
    {
        KIND_LIVE_THREAD,
        KIND_LIVE_THREAD_UPDATE,
        KIND_MOD_ACTION,
        KIND_MULTI,
        KIND_MULTI_DESCRIPTION,
        KIND_KARMA_LIST,
        KIND_WIKI_PAGE,
        KIND_WIKI_PAGE_SETTINGS,
    }
)


def _timestamp(data: dict[str, Any], key: str) -> Timestamp | None:
    value = data.get(key)
    return None if value is None else Timestamp.from_json(value)


def _str(data: dict[str, Any], key: str) -> str:
    return data.get(key) or ""


def _int(data: dict[str, Any], key: str) -> int:
    return data.get(key) or 0


def _bool(data: dict[str, Any], key: str) -> bool:
    return bool(data.get(key))


@dataclass
class More:
    """Information for retrieving comments left out of a comment tree."""

    id: str = ""
    full_id: str = ""
    parent_id: str = ""
    count: int = 0
    depth: int = 0
    children: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "More":
        return cls(
            id=_str(data, "id"),
            full_id=_str(data, "name"),
            parent_id=_str(data, "parent_id"),
            count=_int(data, "count"),
            depth=_int(data, "depth"),
            children=list(data.get("children") or []),
        )


@dataclass
class Replies:
    """Replies to a comment: loaded comments and an optional entry point to more."""

    comments: list["Comment"] = field(default_factory=list)
    more: More | None = None

    @classmethod
    def from_json(cls, data: Any) -> "Replies":
        """Build from the ``replies`` value, which is ``""`` when there are none."""
        if data is None or data == "":
            return cls()
        listing = Thing.from_json(data).data
        if not isinstance(listing, Listing):
            return cls()
        return cls(
            comments=list(listing.comments),
            more=listing.mores[0] if listing.mores else None,
        )

    def to_json(self) -> list[dict[str, Any]] | None:
        """The JSON value: None without comments, else the list of comment objects."""
        if not self.comments:
            return None
        return [_comment_json(comment) for comment in self.comments]


@dataclass
class Comment:
    """A comment posted by a user."""

    id: str = ""
    full_id: str = ""
    created: Timestamp | None = None
    edited: Timestamp | None = None
    parent_id: str = ""
    permalink: str = ""
    body: str = ""
    author: str = ""
    author_id: str = ""
    author_flair_text: str = ""
    author_flair_id: str = ""
    subreddit_name: str = ""
    subreddit_name_prefixed: str = ""
    subreddit_id: str = ""
    likes: bool | None = None
    score: int = 0
    controversiality: int = 0
    post_id: str = ""
    post_title: str = ""
    post_permalink: str = ""
    post_author: str = ""
    post_num_comments: int | None = None
    is_submitter: bool = False
    score_hidden: bool = False
    saved: bool = False
    stickied: bool = False
    locked: bool = False
    can_gild: bool = False
    nsfw: bool = False
    replies: Replies = field(default_factory=Replies)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Comment":
        return cls(
            id=_str(data, "id"),
            full_id=_str(data, "name"),
            created=_timestamp(data, "created_utc"),
            edited=_timestamp(data, "edited"),
            parent_id=_str(data, "parent_id"),
            permalink=_str(data, "permalink"),
            body=_str(data, "body"),
            author=_str(data, "author"),
            author_id=_str(data, "author_fullname"),
            author_flair_text=_str(data, "author_flair_text"),
            author_flair_id=_str(data, "author_flair_template_id"),
            subreddit_name=_str(data, "subreddit"),
            subreddit_name_prefixed=_str(data, "subreddit_name_prefixed"),
            subreddit_id=_str(data, "subreddit_id"),
            likes=data.get("likes"),
            score=_int(data, "score"),
            controversiality=_int(data, "controversiality"),
            post_id=_str(data, "link_id"),
            post_title=_str(data, "link_title"),
            post_permalink=_str(data, "link_permalink"),
            post_author=_str(data, "link_author"),
            post_num_comments=data.get("num_comments"),
            is_submitter=_bool(data, "is_submitter"),
            score_hidden=_bool(data, "score_hidden"),
            saved=_bool(data, "saved"),
            stickied=_bool(data, "stickied"),
            locked=_bool(data, "locked"),
            can_gild=_bool(data, "can_gild"),
            nsfw=_bool(data, "over_18"),
            replies=Replies.from_json(data.get("replies")),
        )

    def has_more(self) -> bool:
        """Whether the reply tree has more replies left to load."""
        more = self.replies.more
        return more is not None and len(more.children) > 0

    def _add_comment_to_replies(self, comment: "Comment") -> None:
        if self.full_id == comment.parent_id:
            self.replies.comments.append(comment)
            return
        for reply in self.replies.comments:
            reply._add_comment_to_replies(comment)

    def _add_more_to_replies(self, more: More) -> None:
        if self.full_id == more.parent_id:
            self.replies.more = more
            return
        for reply in self.replies.comments:
            reply._add_more_to_replies(more)


def _comment_json(comment: Comment) -> dict[str, Any]:
    out: dict[str, Any] = {}

    def text(key: str, value: str) -> None:
        if value:
            out[key] = value

    text("id", comment.id)
    text("name", comment.full_id)
    if comment.created is not None:
        out["created_utc"] = comment.created.to_json()
    if comment.edited is not None:
        out["edited"] = comment.edited.to_json()
    text("parent_id", comment.parent_id)
    text("permalink", comment.permalink)
    text("body", comment.body)
    text("author", comment.author)
    text("author_fullname", comment.author_id)
    text("author_flair_text", comment.author_flair_text)
    text("author_flair_template_id", comment.author_flair_id)
    text("subreddit", comment.subreddit_name)
    text("subreddit_name_prefixed", comment.subreddit_name_prefixed)
    text("subreddit_id", comment.subreddit_id)
    out["likes"] = comment.likes
    out["score"] = comment.score
    out["controversiality"] = comment.controversiality
    text("link_id", comment.post_id)
    text("link_title", comment.post_title)
    text("link_permalink", comment.post_permalink)
    text("link_author", comment.post_author)
    if comment.post_num_comments is not None:
        out["num_comments"] = comment.post_num_comments
    out["is_submitter"] = comment.is_submitter
    out["score_hidden"] = comment.score_hidden
    out["saved"] = comment.saved
    out["stickied"] = comment.stickied
    out["locked"] = comment.locked
    out["can_gild"] = comment.can_gild
    out["over_18"] = comment.nsfw
    out["replies"] = comment.replies.to_json()
    return out


@dataclass
class Post:
    """A submitted post."""

    id: str = ""
    full_id: str = ""
    created: Timestamp | None = None
    edited: Timestamp | None = None
    permalink: str = ""
    url: str = ""
    title: str = ""
    body: str = ""
    likes: bool | None = None
    score: int = 0
    upvote_ratio: float = 0.0
    number_of_comments: int = 0
    subreddit_name: str = ""
    subreddit_name_prefixed: str = ""
    subreddit_id: str = ""
    subreddit_subscribers: int = 0
    author: str = ""
    author_id: str = ""
    spoiler: bool = False
    locked: bool = False
    nsfw: bool = False
    is_self_post: bool = False
    saved: bool = False
    stickied: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Post":
        return cls(
            id=_str(data, "id"),
            full_id=_str(data, "name"),
            created=_timestamp(data, "created_utc"),
            edited=_timestamp(data, "edited"),
            permalink=_str(data, "permalink"),
            url=_str(data, "url"),
            title=_str(data, "title"),
            body=_str(data, "selftext"),
            likes=data.get("likes"),
            score=_int(data, "score"),
            upvote_ratio=float(data.get("upvote_ratio") or 0.0),
            number_of_comments=_int(data, "num_comments"),
            subreddit_name=_str(data, "subreddit"),
            subreddit_name_prefixed=_str(data, "subreddit_name_prefixed"),
            subreddit_id=_str(data, "subreddit_id"),
            subreddit_subscribers=_int(data, "subreddit_subscribers"),
            author=_str(data, "author"),
            author_id=_str(data, "author_fullname"),
            spoiler=_bool(data, "spoiler"),
            locked=_bool(data, "locked"),
            nsfw=_bool(data, "over_18"),
            is_self_post=_bool(data, "is_self"),
            saved=_bool(data, "saved"),
            stickied=_bool(data, "stickied"),
        )


@dataclass
class Subreddit:
    """Information about a subreddit."""

    id: str = ""
    full_id: str = ""
    created: Timestamp | None = None
    url: str = ""
    name: str = ""
    name_prefixed: str = ""
    title: str = ""
    description: str = ""
    type: str = ""
    suggested_comment_sort: str = ""
    subscribers: int = 0
    active_user_count: int | None = None
    nsfw: bool = False
    user_is_mod: bool = False
    subscribed: bool = False
    favorite: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Subreddit":
        return cls(
            id=_str(data, "id"),
            full_id=_str(data, "name"),
            created=_timestamp(data, "created_utc"),
            url=_str(data, "url"),
            name=_str(data, "display_name"),
            name_prefixed=_str(data, "display_name_prefixed"),
            title=_str(data, "title"),
            description=_str(data, "public_description"),
            type=_str(data, "subreddit_type"),
            suggested_comment_sort=_str(data, "suggested_comment_sort"),
            subscribers=_int(data, "subscribers"),
            active_user_count=data.get("active_user_count"),
            nsfw=_bool(data, "over18"),
            user_is_mod=_bool(data, "user_is_moderator"),
            subscribed=_bool(data, "user_is_subscriber"),
            favorite=_bool(data, "user_has_favorited"),
        )


@dataclass
class Listing:
    """A page of things, sorted by type, with the anchor for the next page."""

    after: str = ""
    comments: list[Comment] = field(default_factory=list)
    mores: list[More] = field(default_factory=list)
    users: list[User] = field(default_factory=list)
    posts: list[Post] = field(default_factory=list)
    subreddits: list[Subreddit] = field(default_factory=list)
    others: list["Thing"] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Listing":
        """Build from a listing's ``data`` object (``children`` and ``after``)."""
        listing = cls(after=_str(data, "after"))
        buckets: list[tuple[type, list[Any]]] = [
            (Comment, listing.comments),
            (More, listing.mores),
            (User, listing.users),
            (Post, listing.posts),
            (Subreddit, listing.subreddits),
        ]
        for child in data.get("children") or []:
            thing = Thing.from_json(child)
            for kind, bucket in buckets:
                if isinstance(thing.data, kind):
                    bucket.append(thing.data)
                    break
            else:
                listing.others.append(thing)
        return listing


def parse_trophy_list(data: dict[str, Any]) -> list[Trophy]:
    """The trophies of a ``TrophyList`` payload, skipping entries that are not trophies."""
    things = (Thing.from_json(item) for item in data.get("trophies") or [])
    return [thing.data for thing in things if isinstance(thing.data, Trophy)]


def _strings(data: Any) -> list[str]:
    return list(data or [])


_PARSERS: dict[str, Callable[[Any], Any]] = {
    KIND_LISTING: lambda d: Listing.from_json(d or {}),
    KIND_COMMENT: lambda d: Comment.from_json(d or {}),
    KIND_MORE: lambda d: More.from_json(d or {}),
    KIND_USER: lambda d: User.from_json(d or {}),
    KIND_POST: lambda d: Post.from_json(d or {}),
    KIND_SUBREDDIT: lambda d: Subreddit.from_json(d or {}),
    KIND_SUBREDDIT_SETTINGS: lambda d: SubredditSettings.from_json(d or {}),
    KIND_TROPHY: lambda d: Trophy.from_json(d or {}),
    KIND_TROPHY_LIST: lambda d: parse_trophy_list(d or {}),
    KIND_WIKI_PAGE_LISTING: _strings,
    KIND_STYLE_SHEET: lambda d: SubredditStyleSheet.from_json(d or {}),
}


@dataclass
class Thing:
    """An entity from the API; its kind tells what ``data`` holds."""

    kind: str
    data: Any = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Thing":
        """Build from a ``{"kind": ..., "data": ...}`` object.

        Raises ValueError for a kind that is not recognised.
        """
        if not isinstance(data, dict):
            raise ValueError(f"thing must be an object, got {data!r}")
        kind = data.get("kind") or ""
        payload = data.get("data")
        parser = _PARSERS.get(kind)
        if parser is not None:
            return cls(kind, parser(payload))
        if kind in _RAW_KINDS:
            return cls(kind, payload)
        raise ValueError(f"unrecognized kind: {kind!r}")

    def after(self) -> str:
        """The anchor for the next page when this thing is a listing, else ``""``."""
        return self.data.after if isinstance(self.data, Listing) else ""


@dataclass
class PostAndComments:
    """A post together with its comment tree."""

    post: Post | None = None
    comments: list[Comment] = field(default_factory=list)
    more: More | None = None

    @classmethod
    def from_json(cls, data: list[Any]) -> "PostAndComments":
        """Build from the API's pair of listings: the post, then its comments."""
        if not isinstance(data, list) or len(data) != 2:
            raise ValueError("expected an array of two listings")
        first, second = (Thing.from_json(item).data for item in data)
        posts = first.posts if isinstance(first, Listing) else []
        if not posts:
            raise ValueError("the first listing holds no post")
        comment_listing = second if isinstance(second, Listing) else Listing()
        return cls(
            post=posts[0],
            comments=list(comment_listing.comments),
            more=comment_listing.mores[0] if comment_listing.mores else None,
        )

    def has_more(self) -> bool:
        """Whether the post has more replies left to load."""
        return self.more is not None and len(self.more.children) > 0

    def _add_comment_to_tree(self, comment: Comment) -> None:
        if self.post is not None and self.post.full_id == comment.parent_id:
            self.comments.append(comment)
            return
        for reply in self.comments:
            reply._add_comment_to_replies(comment)

    def _add_more_to_tree(self, more: More) -> None:
        if self.post is not None and self.post.full_id == more.parent_id:
            self.more = more
        for reply in self.comments:
            reply._add_more_to_replies(more)