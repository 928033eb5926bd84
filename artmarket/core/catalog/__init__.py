"""Artist, artwork and token catalog"""
from artmarket.core.catalog.models import Artist, Artwork, Token
from artmarket.core.catalog.catalog import Catalog

__all__ = [
    "Artist",
    "Artwork",
    "Token",
    "Catalog",
]
