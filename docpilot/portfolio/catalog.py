"""Fixed in-memory asset catalog used by the dashboard and the copilot."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple


AssetType = Literal["Equity", "Fixed Income", "Real Estate", "Private Equity"]
RiskProfile = Literal["Low", "Medium", "High"]


@dataclass(frozen=True, slots=True)
class PerformancePoint:
    month: str
    value: float


@dataclass(frozen=True, slots=True)
class Asset:
    id: str
    name: str
    type: AssetType
    value: float
    change_24h: float
    change_quarter: float
    risk_profile: RiskProfile
    performance: Tuple[PerformancePoint, ...] = field(default_factory=tuple)

    def performance_data(self) -> List[Dict[str, Any]]:
        """Time series in the shape attached to chat messages for charting."""
        return [asdict(point) for point in self.performance]

    def to_context(self) -> Dict[str, Any]:
        """Wire shape handed to the conversational model as portfolio context."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "value": self.value,
            "change24h": self.change_24h,
            "changeQuarter": self.change_quarter,
            "riskProfile": self.risk_profile,
            "performanceData": self.performance_data(),
        }


def _series(*samples: Tuple[str, float]) -> Tuple[PerformancePoint, ...]:
    return tuple(PerformancePoint(month, value) for month, value in samples)


ASSETS: Tuple[Asset, ...] = (
    Asset(
        id="1",
        name="Vanguard Global Equity",
        type="Equity",
        value=12_500_000,
        change_24h=1.2,
        change_quarter=-4.5,
        risk_profile="Medium",
        performance=_series(
            ("Jan", 12_000_000),
            ("Feb", 12_200_000),
            ("Mar", 12_500_000),
            ("Apr", 12_300_000),
            ("May", 12_100_000),
            ("Jun", 12_500_000),
        ),
    ),
    Asset(
        id="2",
        name="BlackRock Core Bond",
        type="Fixed Income",
        value=8_400_000,
        change_24h=-0.1,
        change_quarter=2.1,
        risk_profile="Low",
        performance=_series(
            ("Jan", 8_100_000),
            ("Feb", 8_200_000),
            ("Mar", 8_250_000),
            ("Apr", 8_300_000),
            ("May", 8_350_000),
            ("Jun", 8_400_000),
        ),
    ),
    Asset(
        id="3",
        name="Manhattan Commercial REIT",
        type="Real Estate",
        value=25_000_000,
        change_24h=-0.5,
        change_quarter=-12.4,
        risk_profile="High",
        performance=_series(
            ("Jan", 28_000_000),
            ("Feb", 27_500_000),
            ("Mar", 27_000_000),
            ("Apr", 26_500_000),
            ("May", 26_000_000),
            ("Jun", 25_000_000),
        ),
    ),
)


def get_asset(asset_id: str, assets: Tuple[Asset, ...] = ASSETS) -> Optional[Asset]:
    for asset in assets:
        if asset.id == asset_id:
            return asset
    return None
