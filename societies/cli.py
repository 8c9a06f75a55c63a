"""
Societies CLI - Command-line interface for the game server.

Usage:
    societies serve [--host H] [--port P]   Run the API server
    societies leaderboard --data-dir DIR    Print the top players
    societies cards [--zone NAME]           Print the secret card catalog
"""

import argparse
import logging
import sys


def main(argv=None):
    """Main CLI entry point."""
    from .api.app import SOCIETIES_DATA_DIR, SOCIETIES_LOG_LEVEL

    parser = argparse.ArgumentParser(
        description="Secret Societies - Game server",
        prog="societies",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")
    serve_parser.add_argument(
        "--data-dir", default=SOCIETIES_DATA_DIR,
        help="Directory for the JSON file store (in-memory if omitted)",
    )
    serve_parser.add_argument("--log-level", default=SOCIETIES_LOG_LEVEL, help="Logging level")

    # Leaderboard command
    leaderboard_parser = subparsers.add_parser("leaderboard", help="Print the top players")
    leaderboard_parser.add_argument(
        "--data-dir", default=SOCIETIES_DATA_DIR,
        help="Directory of the JSON file store",
    )
    leaderboard_parser.add_argument("--limit", type=int, default=10, help="Number of entries")

    # Cards command
    cards_parser = subparsers.add_parser("cards", help="Print the secret card catalog")
    cards_parser.add_argument("--zone", help="Only cards from this zone")

    args = parser.parse_args(argv)

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "leaderboard":
        cmd_leaderboard(args)
    elif args.command == "cards":
        cmd_cards(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args):
    """Run the API server with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn")
        sys.exit(1)

    from .api import APIService, create_app, build_gateway

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    gateway = build_gateway(data_dir=args.data_dir)
    app = create_app(service=APIService(gateway=gateway))
    store_name = type(gateway.store).__name__
    print(f"Serving Secret Societies on http://{args.host}:{args.port} ({store_name})")
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def cmd_leaderboard(args):
    """Print the top players by wins."""
    from .session import JsonFileGameStore

    if not args.data_dir:
        print("Error: --data-dir (or SOCIETIES_DATA_DIR) is required")
        sys.exit(1)

    store = JsonFileGameStore(args.data_dir)
    entries = store.leaderboard(args.limit)
    if not entries:
        print("No games recorded yet.")
        return

    print(f"{'#':>3}  {'Player':<24} Wins")
    for rank, entry in enumerate(entries, start=1):
        print(f"{rank:>3}  {entry.player_name:<24} {entry.wins}")


def cmd_cards(args):
    """Print the secret card catalog."""
    from .games import create_secret_societies_catalog

    catalog = create_secret_societies_catalog()
    if args.zone and catalog.get_zone(args.zone) is None:
        print(f"Error: Unknown zone: {args.zone}")
        print(f"Zones: {', '.join(catalog.zone_names)}")
        sys.exit(1)

    zones = [args.zone] if args.zone else catalog.zone_names
    for zone_name in zones:
        cards = catalog.cards_in_zone(zone_name)
        copies = sum(card.copies for card in cards)
        print(f"\n{zone_name} ({len(cards)} cards, {copies} copies)")
        for card in cards:
            print(f"  {card.id:<14} {card.name:<32} {card.rarity.value:<7} x{card.copies}")


if __name__ == "__main__":
    main()
