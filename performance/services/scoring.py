# performance/services/scoring.py
"""
Weekly KPI scoring for goals.

Pure functions only: no model imports, no I/O. A goal's metrics bag (raw
targets and achievements, numbers or numeric strings) goes in; the same bag
extended with achievement percentages, tier scores, the total score and the
Performer of the Week flag comes out.

Each team category scores three dimensions; every category tops out at 10.

    Sales              sales 0..4  + cost 0..3       + aov 0..3
    Ads                sales 0..4  + acos 0..3       + aov 0..3
    Website Ads        sales 0..4  + roas 0..3       + aov 0..3
    Portfolio Holders  sales 0..5  + trend 0..3      + conversion 0..2
"""
from __future__ import annotations

import logging
import math
import re
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

Metrics = Mapping[str, Any]
Tiers = Sequence[Tuple[float, int]]

MAX_TOTAL_SCORE = 10


class TeamCategory(str, Enum):
    SALES = "Sales"
    ADS = "Ads"
    WEBSITE_ADS = "Website Ads"
    PORTFOLIO_HOLDERS = "Portfolio Holders"
    UNKNOWN = "Unknown"

    @property
    def is_known(self) -> bool:
        return self is not TeamCategory.UNKNOWN


# (threshold, points), most favourable first
SALES_TIERS: Tiers = ((100, 4), (80, 3), (60, 2), (40, 1))
PORTFOLIO_SALES_TIERS: Tiers = ((100, 5), (80, 4), (60, 3), (40, 2), (20, 1))
AOV_TIERS: Tiers = ((100, 3), (90, 2), (80, 1))
ACOS_DIFF_TIERS: Tiers = ((0, 3), (10, 2), (20, 1))          # lower is better
ROAS_DIFF_TIERS: Tiers = ((0, 3), (-10, 2), (-20, 1))
CONVERSION_TIERS: Tiers = ((100, 2), (90, 1))
COST_MARGIN_TIERS: Tiers = ((0, 3), (10, 2), (20, 1))        # points over target_cost_percent

# Checked in order; "website ads" must win over "ads"
_TEAM_KEYWORDS = (
    ("portfolio", TeamCategory.PORTFOLIO_HOLDERS),
    ("website", TeamCategory.WEBSITE_ADS),
    ("ads", TeamCategory.ADS),
    ("sales", TeamCategory.SALES),
)

_LEADING_NUMBER = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


# ----------------------------------------------------------------------
# Team normalization
# ----------------------------------------------------------------------

def normalize_team(raw: Any) -> TeamCategory:
    """
    Map a free-text team name ("Sales - Cairo", "website ads", "PORTFOLIO")
    to its category. Anything unrecognised, empty or None is UNKNOWN.
    """
    if isinstance(raw, TeamCategory):
        return raw
    text = str(raw or "").lower()
    for keyword, category in _TEAM_KEYWORDS:
        if keyword in text:
            return category
    return TeamCategory.UNKNOWN


# ----------------------------------------------------------------------
# Numeric helpers
# ----------------------------------------------------------------------

def to_float(value: Any) -> float:
    """
    Lenient numeric read: numbers pass through, strings are parsed from their
    leading number ("12.5%" -> 12.5). Missing, unparseable, NaN or infinite
    values read as 0.0.
    """
    if value is None or isinstance(value, bool):
        return float(value or 0)
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return 0.0
        try:
            number = float(match.group(0))
        except ValueError:
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def ratio_pct(achieved: float, target: float) -> Optional[float]:
    """achieved / target * 100, or None when there is no target."""
    if not target:
        return None
    return achieved * 100 / target


def diff_pct(actual: float, target: float) -> Optional[float]:
    """Signed distance from target in percent of target, or None."""
    if not target:
        return None
    return (actual - target) * 100 / target


def tier_at_least(value: Optional[float], tiers: Tiers) -> int:
    if value is None:
        return 0
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return 0


def tier_at_most(value: Optional[float], tiers: Tiers) -> int:
    if value is None:
        return 0
    for threshold, points in tiers:
        if value <= threshold:
            return points
    return 0


def trend_tier(trend: Optional[float]) -> int:
    if trend is None:
        return 0
    if trend > 0:
        return 3
    if trend == 0:
        return 2
    if trend >= -10:
        return 1
    return 0


def _finish(result: Dict[str, Any], *dimensions: str) -> Dict[str, Any]:
    total = sum(result[d] for d in dimensions)
    result["total_score"] = total
    result["isPerformerOfTheWeek"] = total == MAX_TOTAL_SCORE
    return result


# ----------------------------------------------------------------------
# Per-team scorers: raw metrics -> computed fields only
# ----------------------------------------------------------------------

def _sales_and_aov(metrics: Metrics) -> Dict[str, Any]:
    sales_pct = ratio_pct(to_float(metrics.get("weekly_sales")), to_float(metrics.get("weekly_sales_target")))
    aov_pct = ratio_pct(to_float(metrics.get("aov")), to_float(metrics.get("aov_target")))
    return {
        "sales_achievement_percent": sales_pct,
        "aov_achievement_percent": aov_pct,
        "sales_score": tier_at_least(sales_pct, SALES_TIERS),
        "aov_score": tier_at_least(aov_pct, AOV_TIERS),
    }


def score_sales(metrics: Metrics) -> Dict[str, Any]:
    result = _sales_and_aov(metrics)
    cost_pct = ratio_pct(to_float(metrics.get("weekly_spend")), to_float(metrics.get("weekly_sales")))
    cost_target = to_float(metrics.get("target_cost_percent"))
    cost_tiers = tuple((cost_target + margin, points) for margin, points in COST_MARGIN_TIERS)
    result["cost_percent"] = cost_pct
    result["cost_score"] = tier_at_most(cost_pct, cost_tiers)
    return _finish(result, "sales_score", "cost_score", "aov_score")


def score_ads(metrics: Metrics) -> Dict[str, Any]:
    result = _sales_and_aov(metrics)
    acos_diff = diff_pct(to_float(metrics.get("weekly_acos_percent")), to_float(metrics.get("target_acos_percent")))
    result["acos_score"] = tier_at_most(acos_diff, ACOS_DIFF_TIERS)
    return _finish(result, "sales_score", "acos_score", "aov_score")


def score_website_ads(metrics: Metrics) -> Dict[str, Any]:
    result = _sales_and_aov(metrics)
    roas_diff = diff_pct(to_float(metrics.get("weekly_roas")), to_float(metrics.get("target_roas")))
    result["roas_score"] = tier_at_least(roas_diff, ROAS_DIFF_TIERS)
    return _finish(result, "sales_score", "roas_score", "aov_score")


def score_portfolio_holders(metrics: Metrics) -> Dict[str, Any]:
    sales_pct = ratio_pct(to_float(metrics.get("weekly_sales")), to_float(metrics.get("weekly_sales_target")))
    trend = diff_pct(to_float(metrics.get("this_week_sales")), to_float(metrics.get("last_week_sales")))
    cr_pct = ratio_pct(to_float(metrics.get("conversion_rate")), to_float(metrics.get("conversion_target")))
    result = {
        "sales_achievement_percent": sales_pct,
        "trend_percent": trend,
        "sales_score": tier_at_least(sales_pct, PORTFOLIO_SALES_TIERS),
        "trend_score": trend_tier(trend),
        "conversion_score": tier_at_least(cr_pct, CONVERSION_TIERS),
    }
    return _finish(result, "sales_score", "trend_score", "conversion_score")


TEAM_SCORERS: Dict[TeamCategory, Callable[[Metrics], Dict[str, Any]]] = {
    TeamCategory.SALES: score_sales,
    TeamCategory.ADS: score_ads,
    TeamCategory.WEBSITE_ADS: score_website_ads,
    TeamCategory.PORTFOLIO_HOLDERS: score_portfolio_holders,
}

# Raw input keys per team (targets first, then achievements)
TEAM_FIELDS: Dict[TeamCategory, Tuple[str, ...]] = {
    TeamCategory.SALES: (
        "weekly_sales_target", "target_cost_percent", "aov_target",
        "weekly_sales", "weekly_spend", "aov",
    ),
    TeamCategory.ADS: (
        "weekly_sales_target", "target_acos_percent", "aov_target",
        "weekly_sales", "weekly_acos_percent", "aov",
    ),
    TeamCategory.WEBSITE_ADS: (
        "weekly_sales_target", "target_roas", "aov_target",
        "weekly_sales", "weekly_roas", "aov",
    ),
    TeamCategory.PORTFOLIO_HOLDERS: (
        "weekly_sales_target", "conversion_target",
        "weekly_sales", "last_week_sales", "this_week_sales", "conversion_rate",
    ),
}

# Every key a scorer can add; none of them is ever an input
COMPUTED_KEYS = frozenset((
    "sales_achievement_percent", "aov_achievement_percent",
    "cost_percent", "trend_percent",
    "sales_score", "aov_score", "cost_score", "acos_score", "roas_score",
    "trend_score", "conversion_score",
    "total_score", "isPerformerOfTheWeek",
))


# ----------------------------------------------------------------------
# Public entry points
# ----------------------------------------------------------------------

def score(team: Any, metrics: Optional[Metrics]) -> Dict[str, Any]:
    """
    Return a copy of `metrics` extended with the computed fields for `team`.

    Never raises: an unknown team, or any failure while scoring, returns the
    raw metrics unchanged (failures are logged with their traceback).
    """
    raw = dict(metrics or {})
    category = normalize_team(team)
    scorer = TEAM_SCORERS.get(category)
    if scorer is None:
        return raw
    try:
        computed = scorer(raw)
    except Exception:
        logger.exception("Scoring failed for team %r; keeping raw metrics", category.value)
        return raw
    return {**raw, **computed}


def extract_target_value(team: Any, metrics: Optional[Metrics]) -> float:
    """Headline target shown on the goal: the weekly sales target."""
    if not normalize_team(team).is_known:
        return 0.0
    return to_float((metrics or {}).get("weekly_sales_target"))


def merge_metrics(old: Optional[Metrics], new: Optional[Metrics]) -> Dict[str, Any]:
    """Shallow merge: keys in `new` win, everything else is kept from `old`."""
    return {**(old or {}), **(new or {})}


def strip_computed(metrics: Optional[Metrics]) -> Dict[str, Any]:
    """Copy of `metrics` without the computed fields (raw inputs and `team` only)."""
    return {key: value for key, value in (metrics or {}).items() if key not in COMPUTED_KEYS}
