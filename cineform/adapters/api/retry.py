"""
Relance des appels TMDB avec backoff exponentiel.

Seules les reponses 429 (rate limiting) sont relancees ; les autres erreurs
HTTP remontent immediatement et sont classees par le client.
"""

from typing import Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Le fournisseur a repondu 429 Too Many Requests.

    Attributes:
        retry_after: Secondes indiquees par l'en-tete Retry-After, si present
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """
    Decorateur tenacity : relance sur RateLimitError avec jitter.

    Args:
        max_attempts: Nombre maximum de tentatives
        max_wait: Delai maximum entre deux tentatives (secondes)
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


def _retry_after(response: httpx.Response) -> Optional[int]:
    header = response.headers.get("Retry-After")
    if header and header.isdigit():
        return int(header)
    return None


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP, relancee sur 429.

    Raises:
        RateLimitError: 429 persistant apres max_attempts tentatives
        httpx.HTTPStatusError: Toute autre reponse non 2xx
    """

    @with_retry(max_attempts=max_attempts)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(_retry_after(response))
        response.raise_for_status()
        return response

    return await _do_request()
