"""Flattening of timeline entries into renderable items."""

from datetime import datetime
from email.utils import format_datetime
from urllib.parse import quote, quote_plus

from .description import OutputFormat, build_description
from .models import ActionLinks, RenderableItem, Status

BOOST_GLYPH = "↻"


def normalize(
    status: Status,
    output_format: OutputFormat = OutputFormat.HTML,
    home_instance: str = "",
) -> RenderableItem:
    """Project a timeline entry onto a display-ready item.

    A boost is unwrapped exactly one level: content, link, avatar and id all
    come from ``status.reblog`` and the wrapper only contributes the
    booster's name. Any reblog nested deeper is ignored.
    """
    post = status
    display_name = status.account.display_name
    if status.reblog is not None:
        post = status.reblog
        display_name = (
            f"{status.account.display_name} {BOOST_GLYPH} {post.account.display_name}"
        )

    return RenderableItem(
        title=f"{display_name} posted",
        link=post.url,
        description=build_description(post, output_format),
        published_at=format_rfc1123z(post.created_at),
        avatar_url=post.account.avatar,
        source_id=post.id,
        action_links=build_action_links(post, home_instance),
    )


def normalize_all(
    statuses: list[Status],
    output_format: OutputFormat = OutputFormat.HTML,
    home_instance: str = "",
) -> list[RenderableItem]:
    return [normalize(status, output_format, home_instance) for status in statuses]


def build_action_links(post: Status, home_instance: str = "") -> ActionLinks:
    """Proxy paths for like/boost/reply plus the home-instance lookup link."""
    external = search_url(home_instance, post.url) if home_instance else post.url
    post_id = quote(post.id, safe="")
    return ActionLinks(
        like=f"/api/like/{post_id}",
        boost=f"/api/boost/{post_id}",
        reply=f"/api/reply/{post_id}",
        external=external,
    )


def search_url(home_instance: str, post_url: str) -> str:
    return f"https://{home_instance}/search?q={quote_plus(post_url)}"


def share_url(home_instance: str, post_url: str) -> str:
    return f"https://{home_instance}/share?text={quote_plus(post_url)}"


def reply_share_url(home_instance: str, acct: str, post_url: str) -> str:
    return f"https://{home_instance}/share?text=@{acct}%20{quote_plus(post_url)}"


def format_rfc1123z(value: datetime) -> str:
    """Format as ``Mon, 02 Jan 2006 15:04:05 -0700``."""
    return format_datetime(value)
