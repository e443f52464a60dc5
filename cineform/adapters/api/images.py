"""
URLs des images TMDB et images de remplacement.

TMDB retourne des chemins relatifs (ex: "/abc.jpg") ; l'URL complete depend
de la taille demandee. Un chemin absent donne une image de remplacement
deterministe, jamais un lien casse.
"""

from typing import Optional
from urllib.parse import quote_plus

TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"

THUMBNAIL_SIZE = "w185"
POSTER_SIZE = "w500"
BANNER_SIZE = "w1280"

POSTER_PLACEHOLDER = "https://placehold.co/500x750.png?text=Sem+Poster"
BANNER_PLACEHOLDER = "https://placehold.co/1280x720.png?text=Sem+Banner"


def image_url(path: Optional[str], size: str, placeholder: Optional[str] = None) -> Optional[str]:
    """
    URL complete d'une image TMDB.

    Args:
        path: Chemin relatif retourne par TMDB
        size: Taille demandee (w185, w500, w1280, ...)
        placeholder: URL retournee si le chemin est vide

    Returns:
        L'URL de l'image, le placeholder, ou None sans placeholder
    """
    if not path:
        return placeholder
    return f"{TMDB_IMAGE_BASE_URL}/{size}{path}"


def poster_url(path: Optional[str]) -> str:
    return image_url(path, POSTER_SIZE, POSTER_PLACEHOLDER) or POSTER_PLACEHOLDER


def banner_url(path: Optional[str]) -> str:
    return image_url(path, BANNER_SIZE, BANNER_PLACEHOLDER) or BANNER_PLACEHOLDER


def thumbnail_url(path: Optional[str], title: str) -> str:
    """Vignette de liste ; le remplacement porte le titre du media."""
    placeholder = f"https://placehold.co/185x278.png?text={quote_plus(title)}"
    return image_url(path, THUMBNAIL_SIZE, placeholder) or placeholder
