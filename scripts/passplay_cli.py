#!/usr/bin/env python3
"""Command-line interface for passplay."""

import argparse
import random
from pathlib import Path

import pandas as pd

from passplay.analysis.fairness import FairnessAnalyzer, outcomes_to_frame, win_rates
from passplay.analysis.simulation import play_random_rounds
from passplay.catalog import InMemoryCatalog, YamlCatalog
from passplay.core.exceptions import PassPlayException
from passplay.environments.imposter import ImposterSession, ImposterSettings, load_settings
from passplay.environments.imposter.config import MIN_PLAYERS
from passplay.logging.game_logger import GameLogger


DEFAULT_CONFIG = Path(__file__).parent.parent / "configs" / "imposter.yaml"


def load_config(config_path=None, overrides=None):
    """Load settings, catalog and logging settings.

    Falls back to built-in defaults when no config file exists.

    Returns:
        Tuple of (settings, catalog, logging_settings)
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG
    if not path.exists():
        if config_path:
            raise PassPlayException(f"Config file not found: {path}")
        settings = ImposterSettings.from_dict(overrides or {})
        return settings, InMemoryCatalog(), {}

    settings, logging_settings = load_settings(path, overrides=overrides)
    return settings, YamlCatalog(path), logging_settings


def settings_overrides(args):
    """Collect settings given on the command line."""
    overrides = {}
    if getattr(args, "imposters", None):
        overrides["imposter_count"] = args.imposters
    for flag in ("troll_mode", "jester_enabled", "confused_enabled",
                 "accomplice_enabled", "imposter_never_starts"):
        if getattr(args, flag, False):
            overrides[flag] = True
    return overrides


def cmd_list_categories(args):
    """List all categories in the catalog."""
    try:
        _, catalog, _ = load_config(args.config)
    except PassPlayException as e:
        print(f"Error loading config: {e}")
        return

    print("\nAvailable Categories:")
    print("=" * 70)
    for category in catalog.list_categories():
        twins = sum(1 for pair in category.word_pairs if pair.has_twin)
        print(f"  • {category.id:<20} {category.emoji} {category.name}")
        print(f"    {'':22} ({len(category.word_pairs)} words, {twins} with twins)")
    print(f"\nTroll words: {len(catalog.get_troll_words())}")
    print()


def cmd_simulate(args):
    """Autoplay rounds with random ballots and print outcomes."""
    if args.players < MIN_PLAYERS:
        print(f"Error: at least {MIN_PLAYERS} players are required (you specified {args.players})")
        return

    try:
        settings, catalog, logging_settings = load_config(args.config, settings_overrides(args))
    except PassPlayException as e:
        print(f"Error loading config: {e}")
        return

    category_ids = [args.category] if args.category else [c.id for c in catalog.list_categories()]

    logger = None
    output_dir = args.log_dir or logging_settings.get("output_dir")
    if output_dir:
        logger = GameLogger(output_dir=Path(output_dir), log_private=logging_settings.get("log_private", True))

    session = ImposterSession(
        catalog=catalog,
        settings=settings,
        rng=random.Random(args.seed),
        logger=logger,
    )
    for i in range(args.players):
        session.add_player(f"Player {i + 1}")

    print(f"\nSimulating {args.rounds} rounds with {args.players} players")
    print("=" * 70)

    try:
        outcomes = play_random_rounds(session, category_ids, args.rounds)
    except PassPlayException as e:
        print(f"\nError during simulation: {e}")
        if logger:
            logger.log_error(type(e).__name__, e.message, e.details)
        return

    with pd.option_context("display.max_rows", 50, "display.width", 120):
        print(outcomes_to_frame(outcomes).to_string(index=False))
        print("\nWin rates:")
        print(win_rates(outcomes).to_string())

    if logger:
        print(f"\nLog saved to: {logger.log_file}")


def cmd_fairness(args):
    """Check that roles and starters are spread evenly over seats."""
    if args.players < MIN_PLAYERS:
        print(f"Error: at least {MIN_PLAYERS} players are required (you specified {args.players})")
        return

    try:
        settings, catalog, _ = load_config(args.config, settings_overrides(args))
    except PassPlayException as e:
        print(f"Error loading config: {e}")
        return

    analyzer = FairnessAnalyzer(n_players=args.players, settings=settings, catalog=catalog, seed=args.seed)
    df = analyzer.simulate(args.rounds)

    print(f"\nRole frequencies over {args.rounds} rounds")
    print("=" * 70)
    print(analyzer.role_frequencies(df).round(3).to_string())

    for label, column, value in (
        ("Imposter", "role", "imposter"),
        ("Round starter", "is_starter", True),
    ):
        result = analyzer.uniformity_test(df, column=column, value=value)
        verdict = "uniform" if result["uniform"] else "NOT uniform"
        print(f"\n{label}: chi2={result['statistic']:.3f} p={result['p_value']:.4f} ({verdict})")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="passplay - pass-and-play Imposter session engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List categories
  passplay categories

  # Autoplay 20 rounds with 6 players and a jester
  passplay simulate --players 6 --rounds 20 --jester-enabled

  # Check role assignment fairness
  passplay fairness --players 8 --rounds 5000 --imposters 2
        """
    )
    parser.add_argument("--config", help="YAML config file (default: configs/imposter.yaml)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_list = subparsers.add_parser("categories", help="List catalog categories")
    parser_list.set_defaults(func=cmd_list_categories)

    for name, func, default_rounds, help_text in (
        ("simulate", cmd_simulate, 10, "Autoplay rounds with random votes"),
        ("fairness", cmd_fairness, 2000, "Test role assignment for uniformity"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--players", type=int, default=6, help="Number of players (default: 6)")
        sub.add_argument("--rounds", type=int, default=default_rounds,
                         help=f"Number of rounds (default: {default_rounds})")
        sub.add_argument("--seed", type=int, help="Random seed")
        sub.add_argument("--imposters", type=int, help="Imposters per round")
        sub.add_argument("--troll-mode", action="store_true", help="Enable troll rounds")
        sub.add_argument("--jester-enabled", action="store_true", help="Add a jester")
        sub.add_argument("--confused-enabled", action="store_true", help="Add a confused player")
        sub.add_argument("--accomplice-enabled", action="store_true", help="Add an accomplice")
        sub.add_argument("--imposter-never-starts", action="store_true",
                         help="Never pick an imposter to speak first")
        sub.set_defaults(func=func)

    parser_simulate = subparsers.choices["simulate"]
    parser_simulate.add_argument("--category", help="Category id (default: cycle through all)")
    parser_simulate.add_argument("--log-dir", help="Output directory for JSONL logs")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
