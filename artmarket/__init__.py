"""
ArtMarket

A marketplace backend for tokenized digital artworks:
- Artist profiles, artworks and ownership tokens
- English auctions with strictly ascending bids
- Atomic settlement of token ownership
- In-memory or SQLite persistence
"""

__version__ = "0.1.0"
