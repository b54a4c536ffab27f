# redditkit

A small Python client for the Reddit API with no dependencies. It covers
subreddit moderation (banned, muted and approved users, moderators, rules,
traffic, style sheets, image uploads, creating and editing subreddits, and
post requirements) and sidebar widgets. It also parses the JSON "things"
that the API sends back into plain Python objects.

## Installation

```
pip install redditkit
```

The package needs Python 3.10 or later and uses only the standard library.
HTTP goes through `urllib` by way of `UrllibTransport`.

## What is inside

- `redditkit.transport`: `ApiClient` builds requests against a base URL,
  sends them through a transport and decodes the replies. This module also
  holds the listing options (`ListOptions`, `ListSubredditOptions`,
  `ListPostOptions`, `ListPostSearchOptions`, `ListUserOverviewOptions`),
  the `Request` and `Response` records, `UrllibTransport` and `ApiError`.
- `redditkit.subreddit_admin`: `SubredditAdministration`, the moderator
  endpoints of a subreddit.
- `redditkit.widget`: `WidgetService` (`get`, `create`, `delete`,
  `reorder`), the widget types (`TextAreaWidget`, `ButtonWidget`,
  `ImageWidget`, `CommunityListWidget`, `MenuWidget`,
  `CommunityDetailsWidget`, `ModeratorsWidget`, `SubredditRulesWidget`,
  `CustomWidget`), the create requests (`TextAreaWidgetCreateRequest`,
  `CommunityListWidgetCreateRequest`) and the parsers `parse_widget`,
  `parse_widget_list` and `parse_widget_links`.
- `redditkit.things`: `Thing`, `Listing`, `Post`, `Comment`, `Replies`,
  `More`, `Subreddit`, `PostAndComments` and `parse_trophy_list`.
- `redditkit.models`: the smaller records, which include `Relationship`,
  `Moderator`, `Ban`, `SubredditRule`, `SubredditRuleCreateRequest`,
  `SubredditTrafficStats`, `SubredditStyleSheet`, `SubredditSettings`,
  `SubredditPostRequirements`, `User`, `UserSummary`, `Blocked` and
  `Trophy`.
- `redditkit.timestamp`: `Timestamp`. It reads Unix seconds, RFC 3339
  strings and `false`.

## Using the client

```python
from redditkit.transport import ApiClient, ListOptions
from redditkit.subreddit_admin import SubredditAdministration
from redditkit.widget import WidgetService, TextAreaWidgetCreateRequest

client = ApiClient("https://api.example.com", access_token="token", username="someone")

admin = SubredditAdministration(client)
bans, response = admin.banned("test", ListOptions(limit=10))
print(response.after)         # anchor of the next page

day, hour, month, _ = admin.traffic("test")

widgets = WidgetService(client)
created, _ = widgets.create("test", TextAreaWidgetCreateRequest(name="About", text="hi"))
```

`ApiClient` sends the access token as a bearer `Authorization` header. A
query string in a path is merged with `params`. `request_json` decodes the
body, and an empty body decodes to `None`. `get_thing` and `get_listing`
parse the reply into a `Thing` or `Listing` and set `Response.after`.
`self_id` fetches the full id of the account named by `username` once and
then caches it.

Any object with a `send(request) -> Response` method can take the place of
`UrllibTransport`. This is useful in tests:

```python
client = ApiClient("https://api.example.com", transport=my_fake_transport)
```

## Parsing API replies

Every model has a `from_json` class method that takes decoded JSON:

```python
import json

from redditkit.things import Thing
from redditkit.timestamp import Timestamp

thing = Thing.from_json(json.loads(reply_body))
print(thing.after())          # the pagination anchor, if the thing is a listing

created = Timestamp.from_json(1136214245)
print(created.to_json())      # "2006-01-02T15:04:05Z"
print(Timestamp.from_json(False).is_zero())  # True: "edited": false means no time
```

`Thing.from_json` raises `ValueError` for a kind it does not recognise.
Widgets come back as the matching class:

```python
from redditkit.widget import parse_widget

widget = parse_widget({"kind": "textarea", "id": "w1", "shortName": "About", "text": "hi"})
```

## Errors

- `ValueError` for bad input:
  - `SubredditRuleCreateRequest.validate` raises it when a rule breaks the
    kind or length limits. `create_rule` calls `validate` before it sends
    anything.
  - `create`, `edit`, `create_rule` and `WidgetService.create` raise it when
    they are given `None`.
  - An image upload raises it when the server reports `errors_values`.
- `FileNotFoundError` (and other `OSError`s) when an image to upload cannot
  be read.
- `ApiError` when the server answers with a status outside 2xx. It carries
  the `Response` and its `status_code`.

## What this package does not do

- It does not obtain access tokens. You pass a token to `ApiClient`.
- It has no ready-made service for browsing subreddits (hot or new posts,
  search, subscriptions, random subreddits).
- It has no ready-made service for user accounts (profiles, history,
  friends, blocks, trophies).

The parsers for those replies are here (`Listing`, `Post`, `Subreddit`,
`User`, `UserSummary`, `Trophy`, `parse_trophy_list`). You can reach those
endpoints through `ApiClient.get_listing`, `get_thing` and `request_json`.

There is no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```