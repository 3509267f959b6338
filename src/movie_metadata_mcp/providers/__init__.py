"""HTTP clients for the external metadata providers."""

from .base import Provider, ProviderClient
from .omdb import OmdbClient
from .tmdb import TmdbClient

__all__ = [
    "OmdbClient",
    "Provider",
    "ProviderClient",
    "TmdbClient",
]
