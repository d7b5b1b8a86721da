#!/usr/bin/env python3
"""Start a local network of simulated peers.

The topology file is JSON, keyed by the address each node listens on:

{
  "127.0.0.1:9001": {"peers": ["127.0.0.1:9002", "127.0.0.1:9003"]},
  "127.0.0.1:9002": {"peers": ["127.0.0.1:9001"], "clock_offset": 30},
  "127.0.0.1:9003": {"peers": [], "alive": false}
}

Each node runs in its own process. Press Ctrl+C to stop them all.
"""

from __future__ import annotations

import argparse
import json
import multiprocessing
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from netexplore.peers.address import PeerAddress  # noqa: E402


def _serve(host: str, port: int, spec: dict) -> None:
    import uvicorn

    from netexplore.sim.peer_app import create_peer_app

    app = create_peer_app(
        spec.get("peers", []),
        clock_offset=int(spec.get("clock_offset", 0)),
        alive=bool(spec.get("alive", True)),
    )
    uvicorn.run(app, host=host, port=port, log_level="warning")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run simulated peers")
    parser.add_argument(
        "--topology",
        default=str((ROOT / "config" / "sim_topology.json").resolve()),
        help="Topology JSON (default: config/sim_topology.json)",
    )
    args = parser.parse_args()

    with open(args.topology, "r", encoding="utf-8") as f:
        topology = json.load(f)

    procs = []
    for addr, spec in topology.items():
        peer = PeerAddress.parse(addr)
        proc = multiprocessing.Process(target=_serve, args=(peer.host, peer.port, spec), daemon=True)
        proc.start()
        procs.append(proc)
        print(f"  - {peer} -> {', '.join(spec.get('peers', [])) or '(no peers)'}")

    print(f"Started {len(procs)} simulated peers. Press Ctrl+C to stop.")
    try:
        for proc in procs:
            proc.join()
    except KeyboardInterrupt:
        pass
    finally:
        for proc in procs:
            proc.terminate()


if __name__ == "__main__":
    main()
