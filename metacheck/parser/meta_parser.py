"""Meta tag extraction.

Parses an HTML document (or just its ``<head>``) into a :class:`MetaTags`
record: standard meta tags, Open Graph, Twitter Card, platform-specific
tags and JSON-LD structured data.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields
from typing import Any

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


class _WireMixin:
    """Serialize a dataclass using camelCase keys."""

    # Python field name -> wire name, where camelCase conversion is not enough
    _WIRE_OVERRIDES: dict[str, str] = {}

    def to_dict(self) -> dict:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, _WireMixin):
                value = value.to_dict()
            elif isinstance(value, tuple):
                value = list(value)
            data[self._WIRE_OVERRIDES.get(f.name, _camel(f.name))] = value
        return data


@dataclass(frozen=True)
class OpenGraphTags(_WireMixin):
    title: str | None = None
    description: str | None = None
    type: str | None = None
    url: str | None = None
    image: str | None = None
    image_alt: str | None = None
    image_width: str | None = None
    image_height: str | None = None
    image_type: str | None = None
    site_name: str | None = None
    locale: str | None = None
    updated_time: str | None = None
    video: str | None = None
    audio: str | None = None

    @property
    def has_core_tags(self) -> bool:
        """True if any of og:title, og:description or og:image is set."""
        return bool(self.title or self.description or self.image)


@dataclass(frozen=True)
class FacebookTags(_WireMixin):
    app_id: str | None = None
    admins: str | None = None


@dataclass(frozen=True)
class ArticleTags(_WireMixin):
    author: str | None = None
    published_time: str | None = None
    modified_time: str | None = None
    section: str | None = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class TwitterTags(_WireMixin):
    card: str | None = None
    site: str | None = None
    creator: str | None = None
    title: str | None = None
    description: str | None = None
    image: str | None = None
    image_alt: str | None = None
    label1: str | None = None
    data1: str | None = None
    label2: str | None = None
    data2: str | None = None


@dataclass(frozen=True)
class PinterestTags(_WireMixin):
    description: str | None = None


@dataclass(frozen=True)
class AppleTags(_WireMixin):
    mobile_web_app_capable: str | None = None
    mobile_web_app_title: str | None = None
    mobile_web_app_status_bar_style: str | None = None
    touch_icon: str | None = None


@dataclass(frozen=True)
class MicrosoftTags(_WireMixin):
    tile_image: str | None = None
    tile_color: str | None = None


@dataclass(frozen=True)
class MetaTags(_WireMixin):
    """Metadata extracted from a single HTML document.

    Scalar fields are ``None`` when the tag is missing. Nested groups are
    always present, even when every field inside them is ``None``.
    """
    title: str | None = None
    description: str | None = None
    viewport: str | None = None
    robots: str | None = None
    canonical: str | None = None
    favicon: str | None = None
    theme_color: str | None = None
    author: str | None = None
    keywords: str | None = None
    language: str | None = None
    generator: str | None = None
    html_lang: str | None = None

    og: OpenGraphTags = field(default_factory=OpenGraphTags)
    facebook: FacebookTags = field(default_factory=FacebookTags)
    article: ArticleTags = field(default_factory=ArticleTags)
    twitter: TwitterTags = field(default_factory=TwitterTags)
    pinterest: PinterestTags = field(default_factory=PinterestTags)
    apple: AppleTags = field(default_factory=AppleTags)
    microsoft: MicrosoftTags = field(default_factory=MicrosoftTags)

    structured_data: tuple[Any, ...] = ()

    _WIRE_OVERRIDES = {"og": "openGraph"}


# (attribute, value) selectors per field, i.e. meta[<attribute>="<value>"]
_BASIC_SELECTORS = {
    "description": ("name", "description"),
    "viewport": ("name", "viewport"),
    "robots": ("name", "robots"),
    "theme_color": ("name", "theme-color"),
    "author": ("name", "author"),
    "keywords": ("name", "keywords"),
    "generator": ("name", "generator"),
}

_OG_SELECTORS = {
    "title": ("property", "og:title"),
    "description": ("property", "og:description"),
    "type": ("property", "og:type"),
    "url": ("property", "og:url"),
    "image": ("property", "og:image"),
    "image_alt": ("property", "og:image:alt"),
    "image_width": ("property", "og:image:width"),
    "image_height": ("property", "og:image:height"),
    "image_type": ("property", "og:image:type"),
    "site_name": ("property", "og:site_name"),
    "locale": ("property", "og:locale"),
    "updated_time": ("property", "og:updated_time"),
    "video": ("property", "og:video"),
    "audio": ("property", "og:audio"),
}

_FACEBOOK_SELECTORS = {
    "app_id": ("property", "fb:app_id"),
    "admins": ("property", "fb:admins"),
}

_ARTICLE_SELECTORS = {
    "author": ("property", "article:author"),
    "published_time": ("property", "article:published_time"),
    "modified_time": ("property", "article:modified_time"),
    "section": ("property", "article:section"),
}

_TWITTER_SELECTORS = {
    "card": ("name", "twitter:card"),
    "site": ("name", "twitter:site"),
    "creator": ("name", "twitter:creator"),
    "title": ("name", "twitter:title"),
    "description": ("name", "twitter:description"),
    "image": ("name", "twitter:image"),
    "image_alt": ("name", "twitter:image:alt"),
    "label1": ("name", "twitter:label1"),
    "data1": ("name", "twitter:data1"),
    "label2": ("name", "twitter:label2"),
    "data2": ("name", "twitter:data2"),
}

_APPLE_SELECTORS = {
    "mobile_web_app_capable": ("name", "apple-mobile-web-app-capable"),
    "mobile_web_app_title": ("name", "apple-mobile-web-app-title"),
    "mobile_web_app_status_bar_style": ("name", "apple-mobile-web-app-status-bar-style"),
}

_MICROSOFT_SELECTORS = {
    "tile_image": ("name", "msapplication-TileImage"),
    "tile_color": ("name", "msapplication-TileColor"),
}


def _attr_matcher(attribute: str, value: str):
    # http-equiv values are case-insensitive in HTML
    if attribute == "http-equiv":
        return lambda val: val is not None and val.lower() == value
    return value


def _meta_content(soup: BeautifulSoup, attribute: str, value: str) -> str | None:
    """Content of the first meta[attribute=value], or None if missing/empty."""
    tag = soup.find("meta", attrs={attribute: _attr_matcher(attribute, value)})
    if tag is None:
        return None
    return tag.get("content") or None


def _meta_content_all(soup: BeautifulSoup, attribute: str, value: str) -> tuple[str, ...]:
    tags = soup.find_all("meta", attrs={attribute: value})
    return tuple(content for tag in tags if (content := tag.get("content")))


def _meta_group(soup: BeautifulSoup, selectors: dict[str, tuple[str, str]]) -> dict[str, str | None]:
    return {name: _meta_content(soup, attr, value) for name, (attr, value) in selectors.items()}


def _rel_value(tag) -> str:
    rel = tag.get("rel")
    if isinstance(rel, list):
        return " ".join(rel)
    return rel or ""


def _link_href(soup: BeautifulSoup, *rels: str) -> str | None:
    """href of the first <link> whose rel equals one of ``rels``, in document order."""
    for tag in soup.find_all("link"):
        if _rel_value(tag) in rels:
            return tag.get("href") or None
    return None


def _extract_structured_data(soup: BeautifulSoup) -> tuple[Any, ...]:
    items = []
    for index, script in enumerate(soup.find_all("script", attrs={"type": "application/ld+json"})):
        text = script.string if script.string is not None else script.get_text()
        try:
            items.append(json.loads(text))
        except (ValueError, RecursionError):
            logger.debug("Skipping malformed JSON-LD block #%d", index)
    return tuple(items)


def parse_meta_tags(html: str) -> MetaTags:
    """Parse an HTML string and extract all meta tags.

    Args:
        html: Full HTML document or just the head section

    Returns:
        MetaTags record; never raises for malformed input
    """
    if not isinstance(html, (str, bytes)) or not html:
        return MetaTags()

    soup = BeautifulSoup(html, "lxml")

    title_tag = soup.find("title")
    title = title_tag.get_text() if title_tag else None

    html_tag = soup.find("html")
    html_lang = (html_tag.get("lang") or None) if html_tag else None

    basic = _meta_group(soup, _BASIC_SELECTORS)
    language = (
        _meta_content(soup, "name", "language")
        or _meta_content(soup, "http-equiv", "content-language")
    )

    article = ArticleTags(
        **_meta_group(soup, _ARTICLE_SELECTORS),
        tags=_meta_content_all(soup, "property", "article:tag"),
    )

    pinterest = PinterestTags(
        description=(
            _meta_content(soup, "name", "pinterest-rich-pin-description")
            or _meta_content(soup, "name", "pinterest:description")
        ),
    )

    apple = AppleTags(
        **_meta_group(soup, _APPLE_SELECTORS),
        touch_icon=_link_href(soup, "apple-touch-icon"),
    )

    return MetaTags(
        title=title or None,
        language=language,
        html_lang=html_lang,
        canonical=_link_href(soup, "canonical"),
        favicon=_link_href(soup, "icon", "shortcut icon"),
        og=OpenGraphTags(**_meta_group(soup, _OG_SELECTORS)),
        facebook=FacebookTags(**_meta_group(soup, _FACEBOOK_SELECTORS)),
        article=article,
        twitter=TwitterTags(**_meta_group(soup, _TWITTER_SELECTORS)),
        pinterest=pinterest,
        apple=apple,
        microsoft=MicrosoftTags(**_meta_group(soup, _MICROSOFT_SELECTORS)),
        structured_data=_extract_structured_data(soup),
        **basic,
    )
