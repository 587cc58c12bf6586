"""Keyword lookup that decides which asset series a chat reply should chart."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

from docpilot.portfolio.catalog import ASSETS, Asset, get_asset

DEFAULT_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("vanguard", "1"),
    ("blackrock", "2"),
    ("manhattan", "3"),
)


class AssetMatcher:
    """
    Case-insensitive substring match of a query against ordered keywords.

    The first keyword in table order that appears anywhere in the query wins,
    regardless of where in the query it occurs.
    """

    def __init__(
        self,
        keywords: Iterable[Tuple[str, str]] = DEFAULT_KEYWORDS,
        assets: Sequence[Asset] = ASSETS,
    ) -> None:
        self._keywords = [(keyword.lower(), asset_id) for keyword, asset_id in keywords]
        self._assets = tuple(assets)

    def match(self, query: str) -> Optional[Asset]:
        lowered = query.lower()
        for keyword, asset_id in self._keywords:
            if keyword in lowered:
                return get_asset(asset_id, self._assets)
        return None


def default_matcher() -> AssetMatcher:
    return AssetMatcher()
