"""HTTP plumbing shared by the API services: options, requests, responses and the client."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
import uuid
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol
from urllib.parse import parse_qsl, urlencode, urljoin

from .models import User
from .things import KIND_USER, Listing, Thing


@dataclass
class ListOptions:
    """Paging options common to listing endpoints."""

    limit: int = 0
    after: str = ""
    before: str = ""

    def to_params(self) -> dict[str, str]:
        """Query parameters for the options that are set."""
        params: dict[str, str] = {}
        if self.limit:
            params["limit"] = str(self.limit)
        if self.after:
            params["after"] = self.after
        if self.before:
            params["before"] = self.before
        return params


@dataclass
class ListSubredditOptions(ListOptions):
    """Options for listings of subreddits."""

    sort: str = ""

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        if self.sort:
            params["sort"] = self.sort
        return params


@dataclass
class ListPostOptions(ListOptions):
    """Options for listings of posts limited to a time span."""

    time: str = ""

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        if self.time:
            params["t"] = self.time
        return params


@dataclass
class ListPostSearchOptions(ListPostOptions):
    """Options for searching posts."""

    sort: str = ""

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        if self.sort:
            params["sort"] = self.sort
        return params


@dataclass
class ListUserOverviewOptions(ListOptions):
    """Options for listings of a user's posts and comments."""

    sort: str = ""
    time: str = ""

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        if self.sort:
            params["sort"] = self.sort
        if self.time:
            params["t"] = self.time
        return params


@dataclass
class Request:
    """An outgoing request; at most one of form, json_body and files carries a body.

    ``files`` maps a field name to ``(filename, content)``; when present, ``form``
    is sent alongside it as multipart fields.
    """

    method: str
    url: str
    params: dict[str, str] = field(default_factory=dict)
    form: dict[str, str] | None = None
    json_body: Any = None
    files: dict[str, tuple[str, bytes]] | None = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class Response:
    """A response from the API; ``after`` is the anchor of the next page, if any."""

    status_code: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)
    after: str = ""


class ApiError(Exception):
    """Raised when the API answers with a status outside 2xx."""

    def __init__(self, response: Response) -> None:
        self.response = response
        self.status_code = response.status_code
        detail = response.body.decode("utf-8", errors="replace").strip()
        message = f"request failed with status {response.status_code}"
        super().__init__(f"{message}: {detail}" if detail else message)


class _Transport(Protocol):
    def send(self, request: Request) -> Response: ...


def _encode_multipart(
    form: Mapping[str, str], files: Mapping[str, tuple[str, bytes]]
) -> tuple[bytes, str]:
    boundary = uuid.uuid4().hex
    chunks: list[bytes] = []
    for name, value in form.items():
        chunks.append(
            f'--{boundary}\r\nContent-Disposition: form-data; name="{name}"\r\n\r\n'.encode()
        )
        chunks.append(value.encode("utf-8") + b"\r\n")
    for name, (filename, content) in files.items():
        chunks.append(
            (
                f"--{boundary}\r\n"
                f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'
                "Content-Type: application/octet-stream\r\n\r\n"
            ).encode()
        )
        chunks.append(content + b"\r\n")
    chunks.append(f"--{boundary}--\r\n".encode())
    return b"".join(chunks), f"multipart/form-data; boundary={boundary}"


class UrllibTransport:
    """Sends requests with the standard library's HTTP client."""

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = timeout

    def send(self, request: Request) -> Response:
        """Send the request; error statuses come back as responses, not exceptions."""
        url = request.url
        if request.params:
            url += ("&" if "?" in url else "?") + urlencode(request.params)
        headers = dict(request.headers)
        data: bytes | None = None
        if request.files:
            data, content_type = _encode_multipart(request.form or {}, request.files)
            headers["Content-Type"] = content_type
        elif request.form is not None:
            data = urlencode(request.form).encode("utf-8")
            headers["Content-Type"] = "application/x-www-form-urlencoded"
        elif request.json_body is not None:
            data = json.dumps(request.json_body).encode("utf-8")
            headers["Content-Type"] = "application/json"
        outgoing = urllib.request.Request(url, data=data, headers=headers, method=request.method)
        try:
            with urllib.request.urlopen(outgoing, timeout=self.timeout) as reply:
                return Response(reply.status, reply.read(), dict(reply.headers.items()))
        except urllib.error.HTTPError as exc:
            with exc:
                body = exc.read()
            reply_headers = dict(exc.headers.items()) if exc.headers else {}
            return Response(exc.code, body, reply_headers)


def _stringify(values: Mapping[str, Any] | None) -> dict[str, str]:
    out: dict[str, str] = {}
    for key, value in (values or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            out[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            out[key] = ",".join(str(item) for item in value)
        else:
            out[key] = str(value)
    return out


class ApiClient:
    """Builds requests against the API's base URL and decodes what comes back."""

    def __init__(
        self,
        base_url: str,
        transport: _Transport | None = None,
        *,
        username: str = "",
        user_agent: str = "redditkit",
        access_token: str | None = None,
        reddit_id: str = "",
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.transport = transport if transport is not None else UrllibTransport()
        self.username = username
        self.user_agent = user_agent
        self.access_token = access_token
        self.reddit_id = reddit_id

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        form: Mapping[str, Any] | None = None,
        json_body: Any = None,
        files: dict[str, tuple[str, bytes]] | None = None,
    ) -> Response:
        """Send a request; a query string in ``path`` is merged with ``params``.

        Raises ApiError for a status outside 2xx.
        """
        path, _, query = path.partition("?")
        merged = dict(parse_qsl(query, keep_blank_values=True))
        merged.update(_stringify(params))
        headers = {"User-Agent": self.user_agent}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        outgoing = Request(
            method=method.upper(),
            url=urljoin(self.base_url, path),
            params=merged,
            form=None if form is None else _stringify(form),
            json_body=json_body,
            files=files,
            headers=headers,
        )
        response = self.transport.send(outgoing)
        if not 200 <= response.status_code < 300:
            raise ApiError(response)
        return response

    def request_json(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        form: Mapping[str, Any] | None = None,
        json_body: Any = None,
        files: dict[str, tuple[str, bytes]] | None = None,
    ) -> tuple[Any, Response]:
        """Send a request and decode its JSON body; an empty body decodes to None."""
        response = self.request(
            method, path, params=params, form=form, json_body=json_body, files=files
        )
        data = json.loads(response.body) if response.body.strip() else None
        return data, response

    def get_thing(
        self, path: str, params: Mapping[str, Any] | None = None
    ) -> tuple[Thing, Response]:
        """GET a single thing; the response's ``after`` is set from it."""
        data, response = self.request_json("GET", path, params=params)
        thing = Thing.from_json(data)
        response.after = thing.after()
        return thing, response

    def get_listing(
        self, path: str, options: ListOptions | None = None
    ) -> tuple[Listing, Response]:
        """GET a listing; anything that is not a listing gives an empty one."""
        params = options.to_params() if options is not None else None
        thing, response = self.get_thing(path, params)
        listing = thing.data if isinstance(thing.data, Listing) else Listing()
        return listing, response

    def self_id(self) -> str:
        """The full id of the authenticated account, fetched once and then cached."""
        if not self.reddit_id:
            thing, _ = self.get_thing(f"user/{self.username}/about")
            if not isinstance(thing.data, User):
                raise ValueError(f"expected a user, got kind {thing.kind!r}")
            self.reddit_id = f"{KIND_USER}_{thing.data.id}"
        return self.reddit_id