"""Data models for Mastodon Feed."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from dateutil import parser as date_parser
from markupsafe import Markup


@dataclass(frozen=True)
class Account:
    """Author of a timeline entry."""

    display_name: str
    acct: str
    avatar: str

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "Account":
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError(f"account must be an object, got {type(data).__name__}")
        acct = _text(data.get("acct"))
        # Mastodon sends an empty display name for accounts that never set one
        display_name = _text(data.get("display_name")) or _text(data.get("username")) or acct
        return cls(display_name=display_name, acct=acct, avatar=_text(data.get("avatar")))


@dataclass(frozen=True)
class MediaAttachment:
    """Media attached to a timeline entry."""

    type: str
    url: str
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MediaAttachment":
        if not isinstance(data, dict):
            raise ValueError(f"media attachment must be an object, got {type(data).__name__}")
        return cls(
            type=_text(data.get("type")),
            url=_text(data.get("url")),
            description=_text(data.get("description")),
        )


@dataclass(frozen=True)
class Status:
    """A single entry of the home timeline.

    ``reblog`` holds the boosted status when this entry is a boost. Only one
    level is decoded: a reblog nested inside a reblog is dropped.
    """

    id: str
    content: str
    created_at: datetime
    account: Account
    url: str
    media_attachments: tuple[MediaAttachment, ...] = ()
    reblog: "Status | None" = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], decode_reblog: bool = True) -> "Status":
        """Build a Status from a decoded Mastodon API object.

        Args:
            data: One element of the ``/api/v1/timelines/home`` array
            decode_reblog: Whether to decode the nested ``reblog`` object

        Raises:
            ValueError: If the object lacks an id or a parseable ``created_at``
        """
        if not isinstance(data, dict):
            raise ValueError(f"status must be an object, got {type(data).__name__}")

        status_id = data.get("id")
        if status_id is None or status_id == "":
            raise ValueError("status is missing its id")

        reblog = None
        if decode_reblog and data.get("reblog"):
            reblog = cls.from_dict(data["reblog"], decode_reblog=False)

        return cls(
            id=str(status_id),
            content=_text(data.get("content")),
            created_at=parse_timestamp(data.get("created_at")),
            account=Account.from_dict(data.get("account")),
            url=_text(data.get("url")) or _text(data.get("uri")),
            media_attachments=tuple(
                MediaAttachment.from_dict(media)
                for media in data.get("media_attachments") or []
            ),
            reblog=reblog,
        )


@dataclass(frozen=True)
class ActionLinks:
    """Links attached to a rendered item."""

    like: str
    boost: str
    reply: str
    external: str


@dataclass(frozen=True)
class RenderableItem:
    """Display-ready projection of a Status for one output format."""

    title: str
    link: str
    description: str | Markup
    published_at: str
    avatar_url: str
    source_id: str
    action_links: ActionLinks = field(
        default_factory=lambda: ActionLinks(like="", boost="", reply="", external="")
    )


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO 8601 timestamp into a timezone-aware datetime."""
    if not value or not isinstance(value, str):
        raise ValueError(f"invalid created_at timestamp: {value!r}")
    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"invalid created_at timestamp: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
