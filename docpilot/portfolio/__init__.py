"""Reference asset catalog and the dashboard figures derived from it."""

from docpilot.portfolio.catalog import ASSETS, Asset, PerformancePoint, get_asset
from docpilot.portfolio.lookup import AssetMatcher, default_matcher

__all__ = [
    "ASSETS",
    "Asset",
    "AssetMatcher",
    "PerformancePoint",
    "default_matcher",
    "get_asset",
]
