from docpilot.portfolio.catalog import ASSETS, get_asset
from docpilot.portfolio.dashboard import build_overview, format_millions, risk_weighted_label


def test_catalog_holds_three_assets_with_six_month_series():
    assert [asset.name for asset in ASSETS] == [
        "Vanguard Global Equity",
        "BlackRock Core Bond",
        "Manhattan Commercial REIT",
    ]
    for asset in ASSETS:
        assert [point.month for point in asset.performance] == [
            "Jan", "Feb", "Mar", "Apr", "May", "Jun",
        ]
    assert get_asset("3").change_quarter == -12.4
    assert get_asset("99") is None


def test_overview_totals_and_chart_series():
    overview = build_overview(ASSETS, active_drafts=12)

    assert overview.total_aum == 45_900_000
    assert overview.total_aum_display == "$45.9M"
    assert overview.active_drafts == 12
    assert [(s.name, s.value) for s in overview.quarterly_shift] == [
        ("Vanguard", -4.5),
        ("BlackRock", 2.1),
        ("Manhattan", -12.4),
    ]
    assert [row.value for row in overview.inventory] == ["$12.5M", "$8.4M", "$25.0M"]


def test_risk_weighted_label_uses_asset_values():
    # (2 * 12.5 + 1 * 8.4 + 3 * 25.0) / 45.9 is roughly 2.36
    assert risk_weighted_label(ASSETS) == "Medium"
    assert risk_weighted_label(ASSETS[1:2]) == "Low"
    assert risk_weighted_label(ASSETS[2:]) == "High"
    assert risk_weighted_label(()) == "N/A"


def test_format_millions():
    assert format_millions(8_400_000) == "$8.4M"
