"""Tests for blend profiles, weighted blending and the win-probability services."""

import pytest

from edgefinder.odds import BookmakerLine, NamedReferenceBook, OddsQuote
from edgefinder.probability import (
    LIVE_CONTEXT_PROFILE,
    MARKET_CONTEXT_PROFILE,
    PROFILES,
    BlendProfile,
    InvalidWeightConfigurationError,
    Signal,
    SignalKind,
    SignalUnavailableError,
    blend,
    live_context_probability,
    market_context_probability,
)


def live_signals(live: float, season: float, pace: float) -> list[Signal]:
    return [
        Signal(SignalKind.LIVE, live, resolved=True),
        Signal(SignalKind.SEASON, season, resolved=True),
        Signal(SignalKind.PACE, pace, resolved=True),
    ]


class TestBlendProfile:
    def test_builtin_weights(self):
        assert dict(LIVE_CONTEXT_PROFILE.weights) == {
            SignalKind.LIVE: 0.70,
            SignalKind.SEASON: 0.25,
            SignalKind.PACE: 0.05,
        }
        assert dict(MARKET_CONTEXT_PROFILE.weights) == {
            SignalKind.MARKET: 0.50,
            SignalKind.SEASON: 0.30,
            SignalKind.H2H: 0.20,
        }

    def test_registry(self):
        assert PROFILES["live_context"] is LIVE_CONTEXT_PROFILE
        assert PROFILES["market_context"] is MARKET_CONTEXT_PROFILE

    def test_weights_not_summing_to_one_rejected(self):
        with pytest.raises(InvalidWeightConfigurationError):
            BlendProfile("bad", {SignalKind.LIVE: 0.70, SignalKind.SEASON: 0.25})

    def test_negative_weight_rejected(self):
        with pytest.raises(InvalidWeightConfigurationError):
            BlendProfile("bad", {SignalKind.LIVE: 1.2, SignalKind.SEASON: -0.2})

    def test_empty_profile_rejected(self):
        with pytest.raises(InvalidWeightConfigurationError):
            BlendProfile("bad", {})

    def test_float_rounding_tolerated(self):
        profile = BlendProfile(
            "thirds", {SignalKind.LIVE: 0.1 + 0.2, SignalKind.SEASON: 0.7}
        )
        assert profile.kinds == (SignalKind.LIVE, SignalKind.SEASON)

    def test_weights_read_only(self):
        with pytest.raises(TypeError):
            LIVE_CONTEXT_PROFILE.weights[SignalKind.LIVE] = 1.0

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            BlendProfile("bad", {SignalKind.LIVE: 0.5})


class TestBlend:
    def test_live_context_example(self):
        result = blend(LIVE_CONTEXT_PROFILE, live_signals(0.60, 0.55, 0.50))

        assert result.home_prob == pytest.approx(0.5825)
        assert result.away_prob == pytest.approx(0.4175)
        assert result.home_prob + result.away_prob == pytest.approx(1.0)
        assert result.profile == "live_context"
        assert result.is_fully_resolved

    def test_signal_order_irrelevant(self):
        signals = live_signals(0.60, 0.55, 0.50)
        assert blend(LIVE_CONTEXT_PROFILE, reversed(signals)).home_prob == pytest.approx(0.5825)

    def test_signals_kept_in_profile_order(self):
        result = blend(LIVE_CONTEXT_PROFILE, reversed(live_signals(0.6, 0.55, 0.5)))
        assert [s.kind for s in result.signals] == list(LIVE_CONTEXT_PROFILE.kinds)
        assert result.signal(SignalKind.SEASON).value == 0.55

    def test_missing_kind_rejected(self):
        with pytest.raises(ValueError):
            blend(LIVE_CONTEXT_PROFILE, live_signals(0.6, 0.55, 0.5)[:2])

    def test_duplicate_kind_rejected(self):
        signals = live_signals(0.6, 0.55, 0.5) + [Signal(SignalKind.LIVE, 0.4, True)]
        with pytest.raises(ValueError):
            blend(LIVE_CONTEXT_PROFILE, signals)

    def test_extra_kind_rejected(self):
        signals = live_signals(0.6, 0.55, 0.5) + [Signal(SignalKind.H2H, 0.4, True)]
        with pytest.raises(ValueError):
            blend(LIVE_CONTEXT_PROFILE, signals)

    def test_degraded_kinds_reported(self):
        signals = [
            Signal(SignalKind.MARKET, 0.6, resolved=True),
            Signal(SignalKind.SEASON, 0.5, resolved=False),
            Signal(SignalKind.H2H, 0.5, resolved=False),
        ]
        result = blend(MARKET_CONTEXT_PROFILE, signals)

        assert result.degraded_kinds == [SignalKind.SEASON, SignalKind.H2H]
        assert not result.is_fully_resolved
        assert result.home_prob == pytest.approx(0.5 * 0.6 + 0.5 * 0.5)


class TestDefaultNeutrality:
    """The 0.5 default pulls toward even odds without favouring either side."""

    def test_all_midpoint_is_even(self):
        result = blend(LIVE_CONTEXT_PROFILE, live_signals(0.5, 0.5, 0.5))
        assert result.home_prob == pytest.approx(0.5)
        assert result.away_prob == pytest.approx(0.5)

    def test_monotonic_in_remaining_signal(self):
        homes = [
            blend(LIVE_CONTEXT_PROFILE, live_signals(live, 0.5, 0.5)).home_prob
            for live in (0.1, 0.3, 0.5, 0.7, 0.9)
        ]
        assert homes == sorted(homes)
        assert homes[2] == pytest.approx(0.5)

    def test_symmetric_around_midpoint(self):
        up = blend(LIVE_CONTEXT_PROFILE, live_signals(0.8, 0.5, 0.5)).home_prob
        down = blend(LIVE_CONTEXT_PROFILE, live_signals(0.2, 0.5, 0.5)).home_prob
        assert up - 0.5 == pytest.approx(0.5 - down)


class TestServices:
    STANDINGS = {"teams": [{"team_id": "147", "wins": 55, "losses": 45}]}

    def test_live_context_probability(self):
        result = live_context_probability(
            {"home_win_probability": 60.0}, self.STANDINGS, "147", None
        )
        assert result.home_prob == pytest.approx(0.5825)
        assert result.degraded_kinds == [SignalKind.PACE]

    def test_live_context_requires_live_record(self):
        with pytest.raises(SignalUnavailableError):
            live_context_probability({}, self.STANDINGS, "147", None)

    def test_market_context_probability(self):
        lines = [BookmakerLine("Pinnacle", (OddsQuote.decimal(1.6), OddsQuote.decimal(2.4)))]
        result = market_context_probability(
            lines,
            NamedReferenceBook("pinnacle"),
            self.STANDINGS,
            "147",
            {"home_wins": 3, "away_wins": 1},
        )
        expected = 0.5 * (1 / 1.6) + 0.3 * 0.55 + 0.2 * 0.75
        assert result.home_prob == pytest.approx(expected)
        assert result.is_fully_resolved

    def test_market_context_all_sources_missing(self):
        result = market_context_probability(None, NamedReferenceBook("pinnacle"), None, "147", None)
        assert result.home_prob == pytest.approx(0.5)
        assert len(result.degraded_kinds) == 3
