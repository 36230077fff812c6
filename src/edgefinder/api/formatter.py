"""JSON rendering for API responses.

Pure functions over core result objects. No provider or request state.
"""

from edgefinder.probability.blend import BlendedProbability


def format_percent(prob: float) -> str:
    """Render a probability in [0, 1] as a one-decimal percentage, e.g. "54.3%"."""
    return f"{prob * 100:.1f}%"


def format_blended(result: BlendedProbability) -> dict:
    """Render a blended probability with every signal's value and resolved flag.

    Args:
        result: Output of a blend

    Returns:
        JSON-ready dict. ``fullyResolved`` is False whenever any signal fell
        back to its default, so a degraded estimate is never shown as fully
        informed.
    """
    return {
        "profile": result.profile,
        "homeWinProbability": result.home_prob,
        "awayWinProbability": result.away_prob,
        "homeWinPercent": format_percent(result.home_prob),
        "awayWinPercent": format_percent(result.away_prob),
        "fullyResolved": result.is_fully_resolved,
        "degraded": [kind.value for kind in result.degraded_kinds],
        "signals": {
            signal.kind.value: {
                "value": signal.value,
                "percent": format_percent(signal.value),
                "resolved": signal.resolved,
            }
            for signal in result.signals
        },
    }


def error_body(message: str, status: int) -> dict:
    return {"error": message, "status": status}
