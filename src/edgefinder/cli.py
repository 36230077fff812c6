"""Command-line expected-value calculator for a single American price."""

import argparse

from edgefinder.odds import InvalidOddsError, OddsQuote, expected_value_percent, implied_probability


def probability(value: str) -> float:
    prob = float(value)
    if not 0.0 <= prob <= 1.0:
        raise argparse.ArgumentTypeError(f"{value} is not a probability in [0, 1]")
    return prob


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edgefinder-ev",
        description="Expected value of a bet at American odds given a true win probability",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  edgefinder-ev 0.55 -110\n"
            "  edgefinder-ev 0.45 +150"
        ),
    )
    parser.add_argument(
        "true_prob",
        type=probability,
        metavar="TRUE_PROB",
        help="True probability as a decimal, e.g. 0.55",
    )
    parser.add_argument(
        "odds",
        type=float,
        metavar="ODDS",
        help="American odds, e.g. +150 or -110",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the EV calculator."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        quote = OddsQuote.american(args.odds)
    except InvalidOddsError as exc:
        parser.error(str(exc))
        return  # unreachable, parser.error() exits

    ev = expected_value_percent(args.true_prob, quote)
    print(f"Implied probability: {implied_probability(quote) * 100:.2f}%")
    print(f"Expected value: {ev:.2f}%")


if __name__ == "__main__":
    main()
