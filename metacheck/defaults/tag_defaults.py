"""Suggested head tags built from what a page already declares."""
from __future__ import annotations

from html import escape

from metacheck.parser.meta_parser import MetaTags

DEFAULT_TITLE = "Your Page Title"
DEFAULT_DESCRIPTION = "Your page description goes here."
DEFAULT_OG_TYPE = "website"
DEFAULT_TWITTER_CARD = "summary_large_image"


def _escape(text: str) -> str:
    # html.escape renders ' as &#x27;
    return escape(text, quote=True).replace("&#x27;", "&#039;")


def _meta(attribute: str, key: str, content: str) -> str:
    return f'<meta {attribute}="{key}" content="{_escape(content)}">'


def generate_default_tags(tags: MetaTags, source_url: str | None = None) -> str:
    """Generate a block of recommended meta tags, filling gaps with fallbacks.

    Existing values are reused; missing ones fall back to related tags
    (og:title -> title -> placeholder, and so on) or to ``source_url``.
    """
    og, twitter = tags.og, tags.twitter
    lines: list[str] = []

    title = og.title or tags.title or DEFAULT_TITLE
    description = og.description or tags.description or DEFAULT_DESCRIPTION

    lines.append(f"<title>{_escape(title)}</title>")
    lines.append(_meta("name", "description", description))
    lines.append('<meta name="viewport" content="width=device-width, initial-scale=1">')

    canonical = tags.canonical or source_url
    if canonical:
        lines.append(f'<link rel="canonical" href="{_escape(canonical)}">')

    if tags.favicon:
        lines.append(f'<link rel="icon" href="{_escape(tags.favicon)}">')

    lines.append("")
    lines.append("<!-- Open Graph / Facebook -->")
    lines.append(_meta("property", "og:type", og.type or DEFAULT_OG_TYPE))

    og_url = og.url or source_url
    if og_url:
        lines.append(_meta("property", "og:url", og_url))

    lines.append(_meta("property", "og:title", title))
    lines.append(_meta("property", "og:description", description))

    if og.image:
        lines.append(_meta("property", "og:image", og.image))
        if og.image_alt:
            lines.append(_meta("property", "og:image:alt", og.image_alt))

    if og.site_name:
        lines.append(_meta("property", "og:site_name", og.site_name))

    lines.append("")
    lines.append("<!-- Twitter -->")
    lines.append(_meta("name", "twitter:card", twitter.card or DEFAULT_TWITTER_CARD))

    if twitter.site:
        lines.append(_meta("name", "twitter:site", twitter.site))
    if twitter.creator:
        lines.append(_meta("name", "twitter:creator", twitter.creator))

    lines.append(_meta("name", "twitter:title", twitter.title or title))
    lines.append(_meta("name", "twitter:description", twitter.description or description))

    image = twitter.image or og.image
    if image:
        lines.append(_meta("name", "twitter:image", image))
        image_alt = twitter.image_alt or og.image_alt
        if image_alt:
            lines.append(_meta("name", "twitter:image:alt", image_alt))

    return "\n".join(lines)
