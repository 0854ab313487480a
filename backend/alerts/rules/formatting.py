"""Number formatting for alert messages (pt-BR dashboard)."""


def thousands(value: float) -> str:
    """4000 → '4.000'"""
    return f"{value:,.0f}".replace(",", ".")


def whole(value: float) -> str:
    return f"{value:.0f}"


def percent(fraction: float) -> str:
    return f"{fraction * 100:.0f}%"
