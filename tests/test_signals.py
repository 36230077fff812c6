"""Tests for signal resolution and the midpoint default."""

import logging

import pytest

from edgefinder.odds import BookmakerLine, NamedReferenceBook, OddsQuote
from edgefinder.probability import (
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
from edgefinder.probability.signals import pace_adjustment

STANDINGS = {
    "teams": [
        {"team_id": "147", "wins": 55, "losses": 45},
        {"team_id": "111", "wins": 0, "losses": 0},
        {"team_id": "121", "wins": "n/a", "losses": 10},
    ]
}


def assert_default(signal: Signal, kind: SignalKind) -> None:
    assert signal.kind == kind
    assert signal.value == 0.5
    assert signal.resolved is False


class TestSignal:
    def test_value_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            Signal(SignalKind.SEASON, 1.2, resolved=True)

    def test_kind_values(self):
        assert [k.value for k in SignalKind] == ["live", "season", "h2h", "market", "pace"]


class TestResolveLive:
    def test_percent_scaled(self):
        signal = resolve_live({"home_win_probability": 60.0})
        assert signal.kind == SignalKind.LIVE
        assert signal.value == pytest.approx(0.60)
        assert signal.resolved is True

    def test_numeric_string_accepted(self):
        assert resolve_live({"home_win_probability": "42.5"}).value == pytest.approx(0.425)

    def test_missing_record_raises(self):
        with pytest.raises(SignalUnavailableError):
            resolve_live(None)

    @pytest.mark.parametrize("value", [None, "n/a", True, 140.0, -5.0, float("nan")])
    def test_unusable_value_raises(self, value):
        with pytest.raises(SignalUnavailableError):
            resolve_live({"home_win_probability": value})

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            resolve_live({})


class TestResolveSeason:
    def test_win_rate(self):
        signal = resolve_season(STANDINGS, "147")
        assert signal.value == pytest.approx(0.55)
        assert signal.resolved is True

    def test_integer_team_id_matches(self):
        assert resolve_season(STANDINGS, 147).value == pytest.approx(0.55)

    def test_missing_standings(self):
        assert_default(resolve_season(None, "147"), SignalKind.SEASON)

    def test_team_not_found(self):
        assert_default(resolve_season(STANDINGS, "999"), SignalKind.SEASON)

    def test_zero_games(self):
        assert_default(resolve_season(STANDINGS, "111"), SignalKind.SEASON)

    def test_non_numeric_record(self):
        assert_default(resolve_season(STANDINGS, "121"), SignalKind.SEASON)

    def test_default_is_logged(self, caplog):
        with caplog.at_level(logging.INFO):
            resolve_season(STANDINGS, "999")
        assert "Degraded season signal" in caplog.text


class TestResolveH2H:
    def test_rate(self):
        signal = resolve_h2h({"home_wins": 3, "away_wins": 1})
        assert signal.value == pytest.approx(0.75)
        assert signal.resolved is True

    def test_no_games(self):
        assert_default(resolve_h2h({"home_wins": 0, "away_wins": 0}), SignalKind.H2H)

    def test_missing_record(self):
        assert_default(resolve_h2h(None), SignalKind.H2H)

    def test_missing_field(self):
        assert_default(resolve_h2h({"home_wins": 2}), SignalKind.H2H)


class TestResolveMarket:
    def test_reference_home_quote(self):
        lines = [
            BookmakerLine("Bet365", (OddsQuote.decimal(1.5), OddsQuote.decimal(2.6))),
            BookmakerLine("pinnacle", (OddsQuote.decimal(1.6), OddsQuote.decimal(2.4))),
        ]
        signal = resolve_market(lines, NamedReferenceBook("Pinnacle"))
        assert signal.value == pytest.approx(1 / 1.6)
        assert signal.resolved is True

    def test_partial_reference_uses_home_quote(self):
        lines = [BookmakerLine("Pinnacle", (OddsQuote.decimal(2.0),))]
        assert resolve_market(lines, NamedReferenceBook("Pinnacle")).value == pytest.approx(0.5)

    def test_no_lines(self):
        assert_default(resolve_market([], NamedReferenceBook("Pinnacle")), SignalKind.MARKET)
        assert_default(resolve_market(None, NamedReferenceBook("Pinnacle")), SignalKind.MARKET)

    def test_reference_absent(self):
        lines = [BookmakerLine("Bet365", (OddsQuote.decimal(1.5), OddsQuote.decimal(2.6)))]
        assert_default(resolve_market(lines, NamedReferenceBook("Pinnacle")), SignalKind.MARKET)

    def test_reference_without_quotes(self):
        lines = [BookmakerLine("Pinnacle")]
        assert_default(resolve_market(lines, NamedReferenceBook("Pinnacle")), SignalKind.MARKET)


class TestResolvePace:
    def test_center_is_midpoint(self):
        assert pace_adjustment(2.5) == pytest.approx(0.5)

    def test_bounded(self):
        assert 0.45 < pace_adjustment(-5.0) < pace_adjustment(10.0) < 0.55
        assert pace_adjustment(-50.0) == pytest.approx(0.45)
        assert pace_adjustment(50.0) == pytest.approx(0.55)

    def test_resolved(self):
        signal = resolve_pace({"pace_value": 3.5})
        assert signal.resolved is True
        assert signal.value > 0.5

    def test_unsupported_sport(self):
        assert_default(resolve_pace(None), SignalKind.PACE)

    def test_missing_value(self):
        assert_default(resolve_pace({}), SignalKind.PACE)


class TestResolveDispatch:
    def test_dispatches_by_kind(self):
        assert resolve(SignalKind.LIVE, {"home_win_probability": 60}).value == pytest.approx(0.6)
        assert resolve(SignalKind.SEASON, STANDINGS, team_id="147").value == pytest.approx(0.55)
        assert resolve(SignalKind.H2H, None).resolved is False
        assert resolve(SignalKind.PACE, None).resolved is False

    def test_market_needs_selector(self):
        lines = [BookmakerLine("Pinnacle", (OddsQuote.decimal(2.0), OddsQuote.decimal(2.0)))]
        signal = resolve(SignalKind.MARKET, lines, selector=NamedReferenceBook("pinnacle"))
        assert signal.value == pytest.approx(0.5)
        assert signal.resolved is True

        with pytest.raises(KeyError):
            resolve(SignalKind.MARKET, lines)

    def test_season_needs_team_id(self):
        with pytest.raises(KeyError):
            resolve(SignalKind.SEASON, STANDINGS)
