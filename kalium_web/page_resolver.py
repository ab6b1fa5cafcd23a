"""Map page URLs to HTML files in the scraped mirror.

Each kind of page has an ordered chain of candidate file names. The first
candidate that exists under the frontend root wins; an exhausted chain
resolves to None and the caller answers 404.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from werkzeug.security import safe_join

from .config import CATEGORY_TEMPLATE, PRODUCT_TEMPLATE, ROOT_TEMPLATE

__all__ = ["PageResolver"]

logger = logging.getLogger(__name__)


class PageResolver:
    """Resolves product, category and legacy .html pages to files."""

    def __init__(
        self,
        root: Union[str, Path],
        root_page: str = ROOT_TEMPLATE,
        product_template: str = PRODUCT_TEMPLATE,
        category_template: str = CATEGORY_TEMPLATE,
        root_template: str = ROOT_TEMPLATE,
    ):
        """
        Args:
            root: Frontend directory holding the mirror's HTML files.
            root_page: File served for `/`.
            product_template: Generic product page used for unknown slugs.
            category_template: Generic category page.
            root_template: Last resort for category pages.
        """
        self.root = Path(root).absolute()
        self.root_page = root_page
        self.product_template = product_template
        self.category_template = category_template
        self.root_template = root_template

    def locate(self, name: str) -> Optional[Path]:
        """Return the file for name if it exists inside the root."""
        joined = safe_join(str(self.root), name)
        if joined is None:
            logger.warning(f"[Pages] Rejected path outside frontend root: {name}")
            return None
        path = Path(joined)
        return path if path.is_file() else None

    def first_existing(self, candidates: Iterable[str]) -> Optional[Path]:
        for name in candidates:
            path = self.locate(name)
            if path is not None:
                return path
            logger.debug(f"[Pages] {name} not found, trying next candidate")
        return None

    # ---------- CANDIDATE CHAINS ----------

    def product_candidates(self, slug: str) -> List[str]:
        return [f"index_{slug}.html", self.product_template]

    def category_candidates(self, slug: str) -> List[str]:
        return [f"index_{slug}.html", self.category_template, self.root_template]

    def html_candidates(self, path: str) -> List[str]:
        name = path.lstrip("/") or self.root_page
        return [name, self.category_template]

    def pretty_category_candidates(self, page: str) -> List[str]:
        if page.endswith(".html"):
            return [page]
        return [page, f"{page}.html"]

    # ---------- RESOLUTION ----------

    def resolve_product(self, slug: str) -> Optional[Path]:
        return self.first_existing(self.product_candidates(slug))

    def resolve_category(self, slug: str) -> Optional[Path]:
        return self.first_existing(self.category_candidates(slug))

    def resolve_html(self, path: str) -> Optional[Path]:
        """Resolve a direct `*.html` request or `/`."""
        return self.first_existing(self.html_candidates(path))

    def resolve_pretty_category(self, page: str) -> Optional[Path]:
        """Resolve `/<page>/category/<slug>`; None means decline."""
        return self.first_existing(self.pretty_category_candidates(page))
