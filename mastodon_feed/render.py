"""RSS, HTML and debug page rendering for Mastodon Feed."""

from datetime import datetime
from pathlib import Path
from urllib.parse import quote_plus

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import RenderableItem
from .normalize import format_rfc1123z, reply_share_url, search_url, share_url

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

CHANNEL_TITLE = "Mastodon Home Feed"
CHANNEL_DESCRIPTION = "Your Mastodon home timeline"
DEFAULT_CHANNEL_LINK = "https://mastodon.social"

# Sample used by the debug page to show how links are built
DEBUG_POST_URL = "https://fosstodon.org/@alice/123456789"
DEBUG_ACCT = "alice"

_environment = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_rss(
    items: list[RenderableItem],
    channel_link: str = DEFAULT_CHANNEL_LINK,
    now: datetime | None = None,
) -> str:
    """Render an RSS 2.0 document.

    Item descriptions must already be CDATA-wrapped fragments. Items carry
    no guid; the link identifies them.
    """
    now = now or datetime.now().astimezone()
    template = _environment.get_template("rss.xml")
    return template.render(
        title=CHANNEL_TITLE,
        description=CHANNEL_DESCRIPTION,
        link=channel_link or DEFAULT_CHANNEL_LINK,
        pub_date=format_rfc1123z(now),
        items=items,
    )


def render_html(items: list[RenderableItem], home_instance: str = "") -> str:
    """Render the interactive HTML page.

    Like and boost buttons call the relative proxy paths; nothing on the
    page talks to the origin instance directly.
    """
    template = _environment.get_template("feed.html")
    return template.render(home_instance=home_instance, items=items)


def render_debug(home_instance: str = "") -> str:
    """Render the page showing how interaction links are built."""
    links = {}
    if home_instance:
        links = {
            "share": share_url(home_instance, DEBUG_POST_URL),
            "reply_share": reply_share_url(home_instance, DEBUG_ACCT, DEBUG_POST_URL),
            "search": search_url(home_instance, DEBUG_POST_URL),
        }
    template = _environment.get_template("debug.html")
    return template.render(
        home_instance=home_instance,
        post_url=DEBUG_POST_URL,
        encoded_url=quote_plus(DEBUG_POST_URL),
        links=links,
    )
