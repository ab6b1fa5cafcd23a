"""Link rewriting for the scraped WordPress pages.

The mirror pages still point at the original Kalium demo site. Before a
page is sent, an ordered list of regex rules turns those links into local
routes, keeps binary assets pointing at the remote host (the mirror has no
wp-content), and strips the inline onclick that forces navigation.

Two profiles exist because the mirror has been served two ways:

- ``routes``: the backend server, with /product/<slug> and
  /index_decor/category/<slug> routes (category slug = last path segment).
- ``static``: the plain static mirror, where links go straight to
  index_<slug>.html files (category slug = first path segment).

Rule order matters: later rules see the output of earlier ones.
"""

import logging
import re
from dataclasses import dataclass
from re import Match, Pattern
from typing import AbstractSet, Callable, Tuple

from .config import CATEGORY_TEMPLATE, NON_PRODUCT_SLUGS, ORIGINAL_SITE_URL, ROOT_TEMPLATE

__all__ = [
    "RewriteRule",
    "SiteProfile",
    "LinkRewriter",
    "PROFILE_NAMES",
    "build_profile",
    "is_asset_path",
]

logger = logging.getLogger(__name__)

PROFILE_NAMES = ("routes", "static")

ASSET_DIRS = ("wp-content/", "wp-includes/")
ASSET_EXTENSIONS = (
    ".css", ".js", ".json", ".map",
    ".png", ".jpg", ".jpeg", ".gif", ".webp", ".avif", ".svg", ".ico",
    ".woff", ".woff2", ".ttf", ".otf", ".eot",
    ".mp4", ".webm", ".mp3", ".pdf",
)

ONCLICK_NAVIGATION = 'onclick="window.location.href=this.href; return false;"'


@dataclass(frozen=True)
class RewriteRule:
    """A pattern and a replacement computed from its match."""

    name: str
    pattern: Pattern[str]
    replace: Callable[[Match[str]], str]

    def apply(self, html: str) -> Tuple[str, int]:
        return self.pattern.subn(self.replace, html)


@dataclass(frozen=True)
class SiteProfile:
    """Named rewrite rule set plus the page that `/` serves."""

    name: str
    rules: Tuple[RewriteRule, ...]
    root_page: str


def is_asset_path(path: str) -> bool:
    """Return True for site paths that must keep resolving remotely."""
    if path.startswith(ASSET_DIRS):
        return True
    bare = path.split("?", 1)[0].split("#", 1)[0].lower()
    return bare.endswith(ASSET_EXTENSIONS)


def _category_segments(path: str) -> list:
    return [part for part in path.split("/") if part]


# ---------- REPLACEMENTS ----------


def _product_to_route(m: Match[str]) -> str:
    return f"/product/{m.group(1)}"


def _product_to_file(m: Match[str]) -> str:
    return f"/index_{m.group(1)}.html"


def _category_to_route(m: Match[str]) -> str:
    # decor/mirrors -> mirrors
    parts = _category_segments(m.group(1))
    if not parts:
        return m.group(0)
    return f"/index_decor/category/{parts[-1]}"


def _category_to_file(m: Match[str]) -> str:
    # decor/mirrors -> decor
    parts = _category_segments(m.group(1))
    if not parts:
        return m.group(0)
    return f"/index_{parts[0]}.html"


def _strip(m: Match[str]) -> str:
    return ""


# ---------- RULES ----------


def product_rule(origin: str, to_route: bool) -> RewriteRule:
    return RewriteRule(
        name="product",
        pattern=re.compile(re.escape(origin) + r"/product/([a-zA-Z0-9\-]+)/?"),
        replace=_product_to_route if to_route else _product_to_file,
    )


def category_rule(origin: str, to_route: bool) -> RewriteRule:
    return RewriteRule(
        name="category",
        pattern=re.compile(re.escape(origin) + r"/product-category/([a-zA-Z0-9\-/]+)/?"),
        replace=_category_to_route if to_route else _category_to_file,
    )


def legacy_index_rule(non_product_slugs: AbstractSet[str]) -> RewriteRule:
    """/index_<slug>.html -> /product/<slug>, except category pages."""
    excluded = frozenset(non_product_slugs)

    def replace(m: Match[str]) -> str:
        if m.group(1) in excluded:
            return m.group(0)
        return f"/product/{m.group(1)}"

    return RewriteRule(
        name="legacy_index",
        pattern=re.compile(r"/index_([a-zA-Z0-9\-]+)\.html"),
        replace=replace,
    )


def site_root_rule(origin: str) -> RewriteRule:
    """Any other origin URL becomes root-relative; assets stay absolute."""

    def replace(m: Match[str]) -> str:
        if is_asset_path(m.group(1)):
            return m.group(0)
        return "/" + m.group(1)

    return RewriteRule(
        name="site_root",
        pattern=re.compile(re.escape(origin) + r"/([^\s\"'<>()\\]*)"),
        replace=replace,
    )


def root_relative_asset_rule(origin: str) -> RewriteRule:
    """Quoted "/wp-content/..." and "/wp-includes/..." point back at the origin."""

    def replace(m: Match[str]) -> str:
        quote, folder, path = m.group(1), m.group(2), m.group(3)
        return f"{quote}{origin}/{folder}/{path}{quote}"

    return RewriteRule(
        name="root_relative_asset",
        pattern=re.compile(r"([\"'])/(wp-content|wp-includes)/([^\"']+)\1"),
        replace=replace,
    )


def onclick_rule() -> RewriteRule:
    return RewriteRule(
        name="onclick",
        pattern=re.compile(re.escape(ONCLICK_NAVIGATION)),
        replace=_strip,
    )


def build_profile(
    name: str,
    origin: str = ORIGINAL_SITE_URL,
    non_product_slugs: AbstractSet[str] = NON_PRODUCT_SLUGS,
) -> SiteProfile:
    """Build one of the named profiles.

    The static mirror has no /product route, so its profile leaves
    index_<slug>.html links alone.

    Raises:
        ValueError: If name is not one of PROFILE_NAMES.
    """
    origin = origin.rstrip("/")
    if name == "routes":
        rules = (
            product_rule(origin, to_route=True),
            category_rule(origin, to_route=True),
            legacy_index_rule(non_product_slugs),
            site_root_rule(origin),
            root_relative_asset_rule(origin),
            onclick_rule(),
        )
        return SiteProfile(name=name, rules=rules, root_page=ROOT_TEMPLATE)
    if name == "static":
        rules = (
            product_rule(origin, to_route=False),
            category_rule(origin, to_route=False),
            site_root_rule(origin),
            root_relative_asset_rule(origin),
            onclick_rule(),
        )
        return SiteProfile(name=name, rules=rules, root_page=CATEGORY_TEMPLATE)
    raise ValueError(f"Unknown rewrite profile: {name!r} (expected one of {PROFILE_NAMES})")


class LinkRewriter:
    """Applies a profile's rules, in order, to a whole HTML document."""

    def __init__(self, profile: SiteProfile):
        self.profile = profile

    def rewrite(self, html: str) -> str:
        for rule in self.profile.rules:
            html, count = rule.apply(html)
            if count:
                logger.debug(f"[Rewrite] {rule.name}: {count} replacement(s)")
        return html
