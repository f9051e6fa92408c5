"""Example: Play one Imposter round on a single shared device (autoplayed)."""

import random
from pathlib import Path

import yaml

from passplay.catalog import YamlCatalog
from passplay.environments.imposter import ImposterSession, ImposterSettings, Phase
from passplay.logging.game_logger import GameLogger


def main():
    """Run one Imposter round with scripted players."""

    print("🕵️  Imposter")
    print("=" * 70)

    # Load configuration from YAML
    config_path = Path(__file__).parent.parent / "configs" / "imposter.yaml"
    with open(config_path, 'r') as f:
        yaml_config = yaml.safe_load(f)

    print(f"✅ Loaded config from imposter.yaml")

    settings = ImposterSettings.from_dict(yaml_config)
    settings = settings.merge({"jester_enabled": True, "accomplice_enabled": True})
    catalog = YamlCatalog(config_path)

    print(f"\n⚙️  Configuration:")
    print(f"  • Imposters: {settings.imposter_count}")
    print(f"  • Jester: {settings.jester_enabled}, Accomplice: {settings.accomplice_enabled}")
    print(f"  • Timer: {settings.discussion_seconds}s")

    # Setup logging
    logging_config = yaml_config.get('logging', {})
    output_dir = Path(logging_config.get('output_dir', 'experiments/imposter'))
    logger = GameLogger(output_dir=output_dir, log_private=logging_config.get('log_private', False))
    print(f"\n📁 Logs will be saved to: {output_dir}/")

    rng = random.Random(7)
    session = ImposterSession(catalog=catalog, settings=settings, rng=rng, logger=logger)
    for name in ["Ada", "Ben", "Cleo", "Dev", "Eli", "Fay"]:
        session.add_player(name)

    session.proceed_to_category()
    session.select_category("animals")
    result = session.start_game()
    if not result:
        print(f"❌ Could not start: {result.message}")
        return

    print(f"\n🎲 Round {session.state.round_number} started. Pass the device!")
    print("-" * 70)

    while session.phase in (Phase.PASSING, Phase.REVEAL):
        if session.phase == Phase.PASSING:
            print(f"📱 Hand the device to {session.current_player.name}")
            session.request_reveal()
        else:
            card = session.current_card().payload
            role = card.shown_role.value if card.shown_role else "?"
            print(f"  🔒 {card.player_name} sees: {role} / {card.word or card.category_hint}")
            session.mark_current_player_seen()

    print(f"\n🗣️  {session.state.artifacts.round_starter_name} starts the discussion")
    session.start_discussion()
    session.go_to_voting()

    while session.phase == Phase.VOTING:
        voter = session.next_voter()
        suspects = [p for p in session.state.players if p.id != voter.id]
        suspect = rng.choice(suspects)
        print(f"  🗳️  {voter.name} votes for {suspect.name}")
        session.submit_vote(voter.id, suspect.id)

    outcome = session.state.outcome
    print("\n" + "=" * 70)
    print("🏁 Results")
    print("=" * 70)
    print(f"Eliminated: {outcome.eliminated_name}")
    print(f"Winning team: {outcome.winning_team.value if outcome.winning_team else 'nobody'}")
    print(f"Winners: {', '.join(outcome.winners) or '-'}")
    for name, role in outcome.roles.items():
        print(f"  • {name}: {role.value}")

    if logger.log_file:
        print(f"\n📁 Log saved to: {logger.log_file}")


if __name__ == "__main__":
    main()
