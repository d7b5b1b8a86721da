"""Fakes for the peer API used across the test suite."""

from typing import Dict, Iterable, List, Optional

import requests

from netexplore.errors import PeerUnreachableError
from netexplore.peers.address import PeerAddress


def P(text: str) -> PeerAddress:
    return PeerAddress.parse(text)


class FakePeerClient:
    """In-memory stand-in for PeerClient.

    ``graph`` maps "host:port" -> list of "host:port" neighbors.
    """

    def __init__(self, graph: Dict[str, List[str]], dead: Iterable[str] = (),
                 times: Optional[Dict[str, Optional[int]]] = None, failing: Iterable[str] = ()):
        self.graph = {P(k): [P(n) for n in v] for k, v in graph.items()}
        self.dead = {P(d) for d in dead}
        self.times = {P(k): v for k, v in (times or {}).items()}
        self.failing = {P(f) for f in failing}
        self.peer_calls: List[PeerAddress] = []
        self.info_calls: List[PeerAddress] = []

    def get_peers(self, peer: PeerAddress) -> List[PeerAddress]:
        self.peer_calls.append(peer)
        if peer in self.failing or peer not in self.graph:
            raise PeerUnreachableError(peer, "connection refused")
        return list(self.graph[peer])

    def get_info(self, peer: PeerAddress):
        self.info_calls.append(peer)
        if peer in self.dead or peer not in self.graph:
            return None
        return {"network": "test"}

    def get_time(self, peer: PeerAddress) -> Optional[int]:
        return self.times.get(peer)


class FakeResponse:
    def __init__(self, status_code: int = 200, body=None, text: Optional[str] = None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else ("" if body is None else str(body))

    def json(self):
        if self._body is None:
            raise ValueError("Expecting value")
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Maps full URLs to FakeResponse objects; unknown URLs refuse the connection."""

    def __init__(self, routes: Dict[str, FakeResponse]):
        self.routes = routes
        self.requests: List[tuple] = []

    def get(self, url: str, timeout=None):
        self.requests.append((url, timeout))
        if url not in self.routes:
            raise requests.ConnectionError(f"Connection refused: {url}")
        return self.routes[url]
