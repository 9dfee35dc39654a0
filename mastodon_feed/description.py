"""Description fragments for rendered feed items."""

from enum import Enum

from markupsafe import Markup, escape

from .models import Status

NO_CONTENT = "<em>No content</em>"
CDATA_START = "<![CDATA["
CDATA_END = "]]>"


class OutputFormat(str, Enum):
    """Target document of a description fragment."""

    XML = "xml"
    HTML = "html"


def build_description(status: Status, output_format: OutputFormat) -> str | Markup:
    """Render a status body and its images as one fragment.

    The body comes first, followed by one ``<img>`` per image attachment in
    attachment order. A status with no body and no images yields the
    placeholder.

    For XML the fragment is wrapped in a CDATA section; for HTML it is
    returned as Markup so templates insert it without escaping. The body is
    the origin's rendered HTML and is trusted as such.
    """
    parts = []
    if status.content:
        parts.append(status.content)

    images = [media for media in status.media_attachments if media.type == "image"]
    for media in images:
        parts.append(
            f'<br><img src="{escape(media.url)}" alt="{escape(media.description)}">'
        )

    if not status.content and not images:
        parts.append(NO_CONTENT)

    fragment = "".join(parts)
    if OutputFormat(output_format) is OutputFormat.XML:
        return wrap_cdata(fragment)
    return Markup(fragment)


def wrap_cdata(text: str) -> str:
    """Wrap text in a CDATA section, splitting any embedded terminator."""
    return CDATA_START + text.replace(CDATA_END, "]]]]><![CDATA[>") + CDATA_END
