from typing import List

from pydantic_settings import BaseSettings

from netexplore.peers.address import PeerAddress


class Settings(BaseSettings):
    """Explorer settings with environment variable support"""

    # Where generated graph/CSV files go
    OUTPUT_DIR: str = "net-explore-output"

    # Peer API
    PEER_TIMEOUT: float = 5.0
    SEEDS: str = ""  # comma separated host:port

    # Crawl
    CRAWL_WORKERS: int = 1

    # Graphviz
    DOT_BINARY: str = "dot"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_prefix = "NETEXPLORE_"
        env_file = ".env"
        case_sensitive = True

    def seed_addresses(self) -> List[PeerAddress]:
        return [PeerAddress.parse(s) for s in self.SEEDS.split(",") if s.strip()]


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    return settings
