"""Client for the Reddit API's subreddit moderation and widget endpoints, with parsers for the things it returns."""

__version__ = "0.1.0"

__all__ = [
    "models",
    "subreddit_admin",
    "things",
    "timestamp",
    "transport",
    "widget",
]