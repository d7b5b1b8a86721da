#!/usr/bin/env python3
"""Take a one-shot snapshot of a peer network.

Usage examples:
  - python scripts/net_explore.py --seed 10.0.0.1:1984 graph
  - python scripts/net_explore.py --seeds-file config/seeds.yaml peers --live
  - python scripts/net_explore.py connectivity
  - python scripts/net_explore.py --output-dir /tmp/out gephi
  - python scripts/net_explore.py --workers 8 clock

Seeds default to NETEXPLORE_SEEDS when neither --seed nor --seeds-file is given.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


# Ensure src is on sys.path when run from a checkout
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from netexplore.config.seeds import load_seed_config  # noqa: E402
from netexplore.config.settings import get_settings  # noqa: E402
from netexplore.errors import NetExploreError  # noqa: E402
from netexplore.explorer import NetExplorer  # noqa: E402
from netexplore.peers.address import PeerAddress  # noqa: E402
from netexplore.utils.logging_config import setup_logging  # noqa: E402


def parse_args(argv=None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Explore the topology of a peer network")
    parser.add_argument("--seed", action="append", default=[], type=PeerAddress.parse,
                        help="Seed peer host:port (repeatable)")
    parser.add_argument("--seeds-file", help="Seed file (see config/seeds.yaml)")
    parser.add_argument("--output-dir", default=settings.OUTPUT_DIR,
                        help=f"Where to write generated files (default: {settings.OUTPUT_DIR})")
    parser.add_argument("--workers", type=int, default=settings.CRAWL_WORKERS,
                        help="Concurrent peer queries during the crawl")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("graph", help="Render a Graphviz snapshot of the live network")
    peers = sub.add_parser("peers", help="List discovered peers")
    peers.add_argument("--live", action="store_true", help="Only peers answering /info")
    sub.add_parser("connectivity", help="Rank live peers by average neighbor position")
    sub.add_parser("gephi", help="Write a Gephi edge CSV of the live network")
    sub.add_parser("clock", help="Estimate clock skew of every discovered peer")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level, component="net_explore")

    seeds = list(args.seed)
    if args.seeds_file:
        seeds.extend(load_seed_config(args.seeds_file).seeds)

    explorer = NetExplorer(
        seeds=seeds or None,
        output_dir=args.output_dir,
        workers=args.workers,
    )
    if not explorer.seeds:
        print("No seeds given (use --seed, --seeds-file or NETEXPLORE_SEEDS)", file=sys.stderr)
        return 2

    try:
        if args.command == "graph":
            artifacts = explorer.graph()
            print(f"Dot file written to: '{artifacts.dot_file}'")
            if artifacts.rendered:
                print(f"Done! Image written to: '{artifacts.png_file}'")
        elif args.command == "peers":
            found = explorer.get_live_peers() if args.live else explorer.get_all_peers()
            for peer in found:
                print(peer)
        elif args.command == "connectivity":
            for score in explorer.nodes_connectivity():
                print(f"{score.peer}\t{score.average_position:.3f}\t{score.occurrence_count}")
        elif args.command == "gephi":
            print(f"Gephi CSV file written to: '{explorer.generate_gephi_csv()}'")
        elif args.command == "clock":
            for peer, diff in explorer.peers_clock_diff():
                print(f"{peer}\t{'unknown' if diff is None else diff}")
    except NetExploreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
