"""Signal resolution and weighted win-probability blending."""

from edgefinder.probability.blend import (
    LIVE_CONTEXT_PROFILE,
    MARKET_CONTEXT_PROFILE,
    PROFILES,
    BlendedProbability,
    BlendProfile,
    InvalidWeightConfigurationError,
    blend,
)
from edgefinder.probability.service import (
    live_context_probability,
    market_context_probability,
)
from edgefinder.probability.signals import (
    Signal,
    SignalKind,
    SignalUnavailableError,
    resolve,
    resolve_h2h,
    resolve_live,
    resolve_market,
    resolve_pace,
    resolve_season,
)

__all__ = [
    "Signal",
    "SignalKind",
    "SignalUnavailableError",
    "resolve",
    "resolve_h2h",
    "resolve_live",
    "resolve_market",
    "resolve_pace",
    "resolve_season",
    "BlendProfile",
    "BlendedProbability",
    "InvalidWeightConfigurationError",
    "LIVE_CONTEXT_PROFILE",
    "MARKET_CONTEXT_PROFILE",
    "PROFILES",
    "blend",
    "live_context_probability",
    "market_context_probability",
]
