"""Image URL collection, normalization and validation."""

import re
from typing import Optional
from urllib.parse import urljoin, urlparse

from listing_normalizer.values import Value, get_path, normalize_text, pick_text

IMAGE_EXTENSIONS: tuple[str, ...] = (".jpg", ".jpeg", ".png", ".webp", ".gif", ".avif", ".bmp")
DEFAULT_IMAGE_LIMIT = 12
MAX_IMAGE_LIMIT = 24
MAX_IMAGE_DEPTH = 8

_SCHEME = re.compile(r"^[a-z][a-z0-9+.\-]*:", re.IGNORECASE)
_TEXT_IMAGE_URL = re.compile(
    r"(?:https?:)?//[^\s'\"<>]+?\.(?:jpe?g|png|webp|gif|avif|bmp)(?:\?[^\s'\"<>]*)?(?=$|[\s'\"<>),])",
    re.IGNORECASE,
)


def clamp_image_limit(limit: Optional[int]) -> int:
    """Cap into 1..MAX_IMAGE_LIMIT; None means the default."""
    if limit is None:
        return DEFAULT_IMAGE_LIMIT
    return max(1, min(MAX_IMAGE_LIMIT, int(limit)))


def is_valid_image_url(url: object) -> bool:
    """http(s) URL with a host whose path ends in a known image extension."""
    if not isinstance(url, str):
        return False
    s = url.strip()
    if not s:
        return False
    parsed = urlparse(s)
    if parsed.scheme.lower() not in ("http", "https") or not parsed.netloc:
        return False
    return parsed.path.lower().endswith(IMAGE_EXTENSIONS)


def normalize_image_url(raw: object, site_root: Optional[str] = None) -> Optional[str]:
    """
    Protocol-relative URLs get https, relative paths are resolved against `site_root`.
    Returns None unless the result passes is_valid_image_url.
    """
    if not isinstance(raw, str):
        return None
    s = normalize_text(raw)
    if not s:
        return None
    if s.startswith("//"):
        s = f"https:{s}"
    elif not _SCHEME.match(s):
        if not site_root:
            return None
        s = urljoin(site_root, s)
    return s if is_valid_image_url(s) else None


class _ImageCollector:
    """Accumulates unique image URLs up to a cap."""

    def __init__(self, limit: int, site_root: Optional[str], max_depth: int):
        self.limit = limit
        self.site_root = site_root
        self.max_depth = max_depth
        self.urls: list[str] = []
        self._seen_urls: set[str] = set()
        self._seen_nodes: set[int] = set()

    @property
    def full(self) -> bool:
        return len(self.urls) >= self.limit

    def add(self, raw: object) -> None:
        if self.full:
            return
        url = normalize_image_url(raw, self.site_root)
        if url and url not in self._seen_urls:
            self._seen_urls.add(url)
            self.urls.append(url)

    def walk(self, root: Value, priority_keys: list[str]) -> None:
        """Depth-bounded walk; image-ish keys of each object are visited before its other values."""
        stack: list[tuple[Value, int]] = [(root, 0)]
        while stack and not self.full:
            node, depth = stack.pop()
            if isinstance(node, str):
                self.add(node)
                continue
            if not isinstance(node, (dict, list)) or id(node) in self._seen_nodes:
                continue
            self._seen_nodes.add(id(node))
            if depth >= self.max_depth:
                continue
            if isinstance(node, dict):
                first = [node[k] for k in priority_keys if k in node]
                rest = [v for k, v in node.items() if k not in priority_keys]
                children = first + rest
            else:
                children = list(node)
            for child in reversed(children):
                stack.append((child, depth + 1))


def collect_image_urls(
    candidate: Value,
    image_keys: list[str],
    text_keys: Optional[list[str]] = None,
    *,
    limit: Optional[int] = None,
    site_root: Optional[str] = None,
    max_depth: int = MAX_IMAGE_DEPTH,
) -> list[str]:
    """
    Collect validated, deduplicated image URLs from a candidate listing.
    Order: values under `image_keys`, then the whole tree, then URLs found in
    description-like text under `text_keys`. At most `limit` URLs are returned.
    """
    collector = _ImageCollector(clamp_image_limit(limit), site_root, max_depth)
    for key in image_keys:
        if collector.full:
            break
        found = get_path(candidate, key)
        if found is not None:
            collector.walk(found, image_keys)
    if not collector.full:
        collector.walk(candidate, image_keys)
    if not collector.full and text_keys:
        text = pick_text(candidate, text_keys)
        if text:
            for match in _TEXT_IMAGE_URL.finditer(text):
                collector.add(match.group(0))
    return collector.urls
