from alpha_forge.models.calendar import ReportTime
from alpha_forge.models.common import HealthRating, RiskLevel, TaxRecommendation, Urgency


def fmt_pct(value: float | None, decimals: int = 2) -> str:
    if value is None:
        return "N/A"
    return f"{value:+.{decimals}f}%"


def fmt_weight(value: float | None, decimals: int = 1) -> str:
    if value is None:
        return "N/A"
    return f"{value:.{decimals}f}%"


def fmt_number(value: float | None, decimals: int = 2) -> str:
    if value is None:
        return "N/A"
    return f"{value:,.{decimals}f}"


def fmt_large_number(value: float | None) -> str:
    if value is None:
        return "N/A"
    abs_val = abs(value)
    sign = "-" if value < 0 else ""
    if abs_val >= 1e12:
        return f"{sign}${abs_val / 1e12:.2f}T"
    if abs_val >= 1e9:
        return f"{sign}${abs_val / 1e9:.2f}B"
    if abs_val >= 1e6:
        return f"{sign}${abs_val / 1e6:.2f}M"
    return f"{sign}${abs_val:,.0f}"


def fmt_money(value: float | None) -> str:
    if value is None:
        return "N/A"
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def risk_level_color(level: RiskLevel) -> str:
    colors = {
        RiskLevel.LOW: "green",
        RiskLevel.MODERATE: "yellow",
        RiskLevel.HIGH: "orange3",
        RiskLevel.EXTREME: "bold red",
    }
    return colors.get(level, "white")


def urgency_color(urgency: Urgency) -> str:
    colors = {
        Urgency.CRITICAL: "bold red",
        Urgency.HIGH: "red",
        Urgency.MEDIUM: "yellow",
        Urgency.LOW: "green",
    }
    return colors.get(urgency, "white")


def health_color(health: HealthRating) -> str:
    colors = {
        HealthRating.EXCELLENT: "bold green",
        HealthRating.GOOD: "green",
        HealthRating.FAIR: "yellow",
        HealthRating.POOR: "orange3",
        HealthRating.CRITICAL: "bold red",
    }
    return colors.get(health, "white")


def tax_recommendation_color(rec: TaxRecommendation) -> str:
    colors = {
        TaxRecommendation.HARVEST: "green",
        TaxRecommendation.HOLD: "yellow",
        TaxRecommendation.AVOID: "red",
    }
    return colors.get(rec, "white")


def beat_rate_color(beat_rate: float) -> str:
    if beat_rate >= 80:
        return "green"
    if beat_rate >= 65:
        return "yellow"
    if beat_rate >= 50:
        return "grey50"
    return "red"


def report_time_label(time: ReportTime) -> str:
    labels = {
        ReportTime.BEFORE: "Pre-Market",
        ReportTime.AFTER: "After Hours",
        ReportTime.DURING: "During Market",
    }
    return labels[time]


def score_bar(score: float, width: int = 10) -> str:
    filled = round(max(0.0, min(100.0, score)) / 100 * width)
    return "█" * filled + "░" * (width - filled)
