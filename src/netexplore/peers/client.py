"""HTTP client for the peer API.

Every peer exposes three endpoints under ``http://host:port``:

- ``GET /peers``: JSON list of ``"host:port"`` strings, in the peer's own
  priority order.
- ``GET /info``: JSON object while the node is up.
- ``GET /time``: the node's clock as integer unix seconds.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests
import structlog

from netexplore.errors import PeerUnreachableError
from netexplore.peers.address import PeerAddress

logger = structlog.get_logger(__name__)

PeerInfo = Dict[str, Any]

DEFAULT_TIMEOUT = 5.0


class PeerClient:
    """Queries peers over HTTP."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, peer: PeerAddress, path: str) -> requests.Response:
        url = f"{peer.base_url}{path}"
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response

    def get_peers(self, peer: PeerAddress) -> List[PeerAddress]:
        """Return the peer's neighbor list in the order the peer reported it.

        Raises PeerUnreachableError on transport failure or a malformed body.
        """
        try:
            body = self._get(peer, "/peers").json()
        except (requests.RequestException, ValueError) as e:
            logger.error("get_peers failed", peer=str(peer), error=str(e))
            raise PeerUnreachableError(peer, "peer list unavailable", e) from e

        if not isinstance(body, list):
            raise PeerUnreachableError(peer, f"unexpected /peers body: {type(body).__name__}")

        neighbors: List[PeerAddress] = []
        for item in body:
            try:
                neighbors.append(PeerAddress.parse(str(item)))
            except ValueError:
                logger.warning("Skipping malformed neighbor", peer=str(peer), neighbor=item)
        return neighbors

    def get_info(self, peer: PeerAddress) -> Optional[PeerInfo]:
        """Return the peer's info document, or None when the peer is unavailable."""
        try:
            body = self._get(peer, "/info").json()
        except (requests.RequestException, ValueError) as e:
            logger.debug("Peer unavailable", peer=str(peer), error=str(e))
            return None
        return body if isinstance(body, dict) else {"info": body}

    def get_time(self, peer: PeerAddress) -> Optional[int]:
        """Return the peer's clock in unix seconds, or None when it cannot be read.

        Raises PeerUnreachableError when the peer cannot be contacted at all.
        """
        try:
            response = self._get(peer, "/time")
        except requests.HTTPError as e:
            logger.debug("Peer time unknown", peer=str(peer), error=str(e))
            return None
        except requests.RequestException as e:
            logger.error("get_time failed", peer=str(peer), error=str(e))
            raise PeerUnreachableError(peer, "time unavailable", e) from e

        try:
            return int(response.text.strip())
        except ValueError:
            logger.debug("Peer time unknown", peer=str(peer), body=response.text[:64])
            return None
