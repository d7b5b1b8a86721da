"""netexplore - peer-to-peer network topology explorer."""

__version__ = "0.1.0"
