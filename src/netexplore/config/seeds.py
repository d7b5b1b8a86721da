"""Seed peer file loader.

Parses a minimal YAML-like file with the following structure:

seeds:
  - host: 10.0.0.1
    port: 1984
  - host: 10.0.0.2
    port: 1984

Note: Implements a tiny, line-oriented parser for exactly this subset.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from netexplore.peers.address import PeerAddress


@dataclass
class SeedConfig:
    seeds: List[PeerAddress]


def _parse_minimal_yaml(text: str) -> Dict[str, Any]:
    lines = [ln.rstrip() for ln in text.splitlines() if ln.strip() and not ln.strip().startswith("#")]
    result: Dict[str, Any] = {}
    i = 0
    while i < len(lines):
        if lines[i].startswith("seeds:"):
            entries: List[Dict[str, Any]] = []
            i += 1
            while i < len(lines) and lines[i].lstrip().startswith("-"):
                entry: Dict[str, Any] = {}
                first = lines[i].lstrip()[1:].strip()  # drop leading '-'
                if ":" in first:
                    k, v = [p.strip() for p in first.split(":", 1)]
                    entry[k] = _coerce(v)
                i += 1
                while i < len(lines) and not lines[i].lstrip().startswith("-") and lines[i].startswith("  "):
                    kv = lines[i].strip()
                    if ":" in kv:
                        k, v = [p.strip() for p in kv.split(":", 1)]
                        entry[k] = _coerce(v)
                    i += 1
                entries.append(entry)
            result["seeds"] = entries
            continue
        i += 1
    return result


def _coerce(val: str):
    try:
        return int(val)
    except ValueError:
        pass
    if (val.startswith('"') and val.endswith('"')) or (val.startswith("'") and val.endswith("'")):
        return val[1:-1]
    return val


def load_seed_config(path: str) -> SeedConfig:
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    data = _parse_minimal_yaml(text)
    seeds: List[PeerAddress] = []
    for n, raw in enumerate(data.get("seeds") or [], start=1):
        for field in ("host", "port"):
            if field not in raw:
                raise ValueError(f"Seed #{n} is missing required field '{field}'")
        if not isinstance(raw["port"], int):
            raise ValueError(f"Seed #{n} has a non-integer port: {raw['port']!r}")
        seed = PeerAddress(str(raw["host"]), raw["port"])
        if seed in seeds:
            raise ValueError(f"Duplicate seed: {seed}")
        seeds.append(seed)
    if not seeds:
        raise ValueError(f"No seeds defined in {path}")
    return SeedConfig(seeds=seeds)
