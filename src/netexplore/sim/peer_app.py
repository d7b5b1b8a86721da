"""
Simulated peer node

Serves the same endpoints the explorer consumes (/peers, /info, /time) so a
local test network can be stood up without real nodes.
"""

import time
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field


class PeerInfoResponse(BaseModel):
    """Response model for /info"""
    network: str = Field(..., description="Network name")
    version: int = Field(..., description="Node software version")
    peers: int = Field(..., description="Number of advertised peers")


class PeerState:
    """Mutable state behind one simulated node."""

    def __init__(self, peers: List[str], clock_offset: int = 0, alive: bool = True,
                 network: str = "netexplore.sim"):
        self.peers = list(peers)
        self.clock_offset = clock_offset
        self.alive = alive
        self.network = network


def create_peer_app(peers: List[str], clock_offset: int = 0, alive: bool = True,
                    state: Optional[PeerState] = None) -> FastAPI:
    """Build a FastAPI app for a single simulated peer.

    ``peers`` is returned verbatim and in order from /peers; ``clock_offset``
    is added to the local clock on /time; when ``alive`` is False, /info
    answers 503.
    """
    state = state or PeerState(peers, clock_offset, alive)
    app = FastAPI(title="netexplore simulated peer", version="0.1.0")
    app.state.peer = state

    @app.get("/peers", response_model=List[str])
    async def get_peers():
        return state.peers

    @app.get("/info", response_model=PeerInfoResponse)
    async def get_info():
        if not state.alive:
            raise HTTPException(status_code=503, detail="Node unavailable")
        return PeerInfoResponse(network=state.network, version=1, peers=len(state.peers))

    @app.get("/time", response_class=PlainTextResponse)
    async def get_time():
        return str(int(time.time()) + state.clock_offset)

    return app
