"""
Adaptateur du fournisseur de metadonnees TMDB.

- tmdb_client.py : Client TMDB (IMetadataProvider)
- cache.py : Cache disque avec TTL par nature d'appel
- retry.py : Relance sur 429 avec backoff exponentiel
- images.py : URLs d'images et images de remplacement
"""

from cineform.adapters.api.cache import APICache
from cineform.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from cineform.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "APICache",
    "RateLimitError",
    "TMDBClient",
    "request_with_retry",
    "with_retry",
]
