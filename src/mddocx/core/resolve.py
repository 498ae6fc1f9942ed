"""Image reference lookup against a caller-supplied asset map"""

from typing import Iterable, Optional

from mddocx.core.models import AssetMap


EXACT, NORMALIZED, BASENAME, SUFFIX = 1, 2, 3, 4


def normalize_href(href: str) -> str:
    """Strip a single leading './' or '/' from href."""
    if href.startswith("./"):
        return href[2:]
    if href.startswith("/"):
        return href[1:]
    return href


def basename(href: str) -> str:
    """Return the part of href after the last '/'."""
    return href.rsplit("/", 1)[-1]


def _canonical(candidates: Iterable[str]) -> Optional[str]:
    """Pick the shortest candidate key, then the lexicographically first."""
    return min(candidates, key=lambda k: (len(k), k), default=None)


def shared_tail(a: str, b: str) -> int:
    """Count the trailing path segments a and b have in common."""
    count = 0
    for x, y in zip(reversed(a.split("/")), reversed(b.split("/"))):
        if x != y:
            break
        count += 1
    return count


def resolve_step(href: str, assets: AssetMap) -> tuple[Optional[int], Optional[str]]:
    """Return (step, key) for the first matching resolution step, or (None, None).

    Steps: exact key, href without a leading './' or '/', basename (a bare
    filename key first, then any key with the same basename, preferring keys
    that share more trailing folders with href), and finally any key ending
    with href or its normalized form. Remaining ties are ordered shortest
    first, then lexicographically.
    """
    if not href:
        return None, None
    if href in assets:
        return EXACT, href

    normalized = normalize_href(href)
    if normalized and normalized in assets:
        return NORMALIZED, normalized

    name = basename(href)
    if name:
        if name in assets:
            return BASENAME, name
        # Keys sharing more of the href's folders win before length and order.
        key = min(
            (k for k in assets if basename(k) == name),
            key=lambda k: (-shared_tail(k, normalized), len(k), k),
            default=None,
        )
        if key is not None:
            return BASENAME, key

    if normalized:
        key = _canonical(k for k in assets if k.endswith(href) or k.endswith(normalized))
        if key is not None:
            return SUFFIX, key
    return None, None


def resolve_asset(href: str, assets: AssetMap) -> Optional[bytes]:
    """Find the image bytes for href, or None when no key matches."""
    _, key = resolve_step(href, assets)
    return assets[key] if key is not None else None
