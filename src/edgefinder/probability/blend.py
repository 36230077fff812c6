"""Weighted blending of resolved signals into a home/away probability pair.

Blend profiles are tagged configuration records (name -> weight per signal
kind). Weights are validated when a profile is built, so the built-in
profiles fail at import rather than at call time.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import numpy as np

from edgefinder.probability.signals import Signal, SignalKind

WEIGHT_TOLERANCE = 1e-9


class InvalidWeightConfigurationError(ValueError):
    """Raised when a blend profile's weights are negative or do not sum to 1.0."""


@dataclass(frozen=True)
class BlendProfile:
    """Named fixed weighting over a fixed set of signal kinds."""

    name: str
    weights: Mapping[SignalKind, float]

    def __post_init__(self) -> None:
        if not self.weights:
            raise InvalidWeightConfigurationError(f"Profile {self.name!r} has no weights")

        negative = {k.value: w for k, w in self.weights.items() if w < 0}
        if negative:
            raise InvalidWeightConfigurationError(
                f"Profile {self.name!r} has negative weights: {negative}"
            )

        total = math.fsum(self.weights.values())
        if not math.isclose(total, 1.0, rel_tol=0.0, abs_tol=WEIGHT_TOLERANCE):
            raise InvalidWeightConfigurationError(
                f"Profile {self.name!r} weights sum to {total}, expected 1.0"
            )

        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))

    @property
    def kinds(self) -> tuple[SignalKind, ...]:
        return tuple(self.weights)


@dataclass(frozen=True)
class BlendedProbability:
    """Result of one blend, with the signals that went into it."""

    profile: str
    home_prob: float
    away_prob: float
    signals: tuple[Signal, ...] = field(default_factory=tuple)

    def signal(self, kind: SignalKind) -> Signal:
        for s in self.signals:
            if s.kind == kind:
                return s
        raise KeyError(kind)

    @property
    def degraded_kinds(self) -> list[SignalKind]:
        """Kinds that fell back to the midpoint default."""
        return [s.kind for s in self.signals if not s.resolved]

    @property
    def is_fully_resolved(self) -> bool:
        return not self.degraded_kinds


LIVE_CONTEXT_PROFILE = BlendProfile(
    name="live_context",
    weights={
        SignalKind.LIVE: 0.70,
        SignalKind.SEASON: 0.25,
        SignalKind.PACE: 0.05,
    },
)

MARKET_CONTEXT_PROFILE = BlendProfile(
    name="market_context",
    weights={
        SignalKind.MARKET: 0.50,
        SignalKind.SEASON: 0.30,
        SignalKind.H2H: 0.20,
    },
)

PROFILES: Mapping[str, BlendProfile] = MappingProxyType(
    {p.name: p for p in (LIVE_CONTEXT_PROFILE, MARKET_CONTEXT_PROFILE)}
)


def blend(profile: BlendProfile, signals: Iterable[Signal]) -> BlendedProbability:
    """Combine signals with the profile's weights.

    Args:
        profile: Weighting to apply
        signals: Exactly one signal per kind in the profile

    Returns:
        BlendedProbability with away_prob = 1 - home_prob

    Raises:
        ValueError: If a kind is duplicated, missing, or not part of the profile
    """
    by_kind: dict[SignalKind, Signal] = {}
    for s in signals:
        if s.kind in by_kind:
            raise ValueError(f"Duplicate {s.kind.value} signal for profile {profile.name!r}")
        by_kind[s.kind] = s

    missing = [k.value for k in profile.kinds if k not in by_kind]
    extra = [k.value for k in by_kind if k not in profile.weights]
    if missing or extra:
        raise ValueError(
            f"Profile {profile.name!r} needs signals {[k.value for k in profile.kinds]}, "
            f"missing {missing}, unexpected {extra}"
        )

    weights = np.array([profile.weights[k] for k in profile.kinds], dtype=np.float64)
    values = np.array([by_kind[k].value for k in profile.kinds], dtype=np.float64)
    home_prob = float(np.clip(np.dot(weights, values), 0.0, 1.0))

    return BlendedProbability(
        profile=profile.name,
        home_prob=home_prob,
        away_prob=1.0 - home_prob,
        signals=tuple(by_kind[k] for k in profile.kinds),
    )
