"""Aggregate figures shown on the institutional dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from docpilot.portfolio.catalog import ASSETS, Asset

RISK_WEIGHTS: Dict[str, int] = {"Low": 1, "Medium": 2, "High": 3}


def format_millions(value: float) -> str:
    return f"${value / 1_000_000:.1f}M"


def risk_weighted_label(assets: Sequence[Asset]) -> str:
    """Value-weighted risk tier, bucketed onto a five step scale."""
    total = sum(asset.value for asset in assets)
    if not total:
        return "N/A"
    score = (
        sum(RISK_WEIGHTS[asset.risk_profile] * asset.value for asset in assets) / total
    )
    if score < 1.5:
        return "Low"
    if score < 2.0:
        return "Med-Low"
    if score < 2.5:
        return "Medium"
    if score < 3.0:
        return "Med-High"
    return "High"


@dataclass(slots=True)
class QuarterlyShift:
    name: str
    value: float


@dataclass(slots=True)
class InventoryRow:
    id: str
    name: str
    type: str
    risk_profile: str
    value: str
    change_quarter: float


@dataclass(slots=True)
class DashboardOverview:
    total_aum: float
    total_aum_display: str
    active_drafts: int
    risk_weighted_average: str
    quarterly_shift: List[QuarterlyShift] = field(default_factory=list)
    inventory: List[InventoryRow] = field(default_factory=list)


def build_overview(
    assets: Sequence[Asset] = ASSETS, active_drafts: int = 0
) -> DashboardOverview:
    total = sum(asset.value for asset in assets)
    return DashboardOverview(
        total_aum=total,
        total_aum_display=format_millions(total),
        active_drafts=active_drafts,
        risk_weighted_average=risk_weighted_label(assets),
        # Chart labels use the fund family only
        quarterly_shift=[
            QuarterlyShift(name=asset.name.split(" ")[0], value=asset.change_quarter)
            for asset in assets
        ],
        inventory=[
            InventoryRow(
                id=asset.id,
                name=asset.name,
                type=asset.type,
                risk_profile=asset.risk_profile,
                value=format_millions(asset.value),
                change_quarter=asset.change_quarter,
            )
            for asset in assets
        ],
    )
