"""
Vues de lecture du catalogue pour l'accueil, la recherche et les favoris.

Toutes les vues ne retiennent que les contenus actifs. Le calcul se fait en
memoire sur un instantane du catalogue (ICatalogRepository.list()).
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from cineform.core.entities.content import ContentItem
from cineform.core.ports.repositories import ICatalogRepository
from cineform.utils.constants import MISC_GENRE_ROW


@dataclass
class GenreRow:
    """Rangee de l'accueil : un genre et ses contenus."""

    title: str
    items: list[ContentItem] = field(default_factory=list)


def _newest_first(items: Iterable[ContentItem]) -> list[ContentItem]:
    return sorted(items, key=lambda item: item.last_touched, reverse=True)


class CatalogBrowser:
    """
    Navigation dans le catalogue.

    Example:
        browser = CatalogBrowser(catalog_repository)
        hero = browser.hero_item()
        rows = browser.genre_rows()
    """

    def __init__(self, repository: ICatalogRepository) -> None:
        self._repository = repository

    def active_items(self, items: Optional[Iterable[ContentItem]] = None) -> list[ContentItem]:
        """Contenus actifs, dans l'ordre du catalogue (plus recents en premier)."""
        if items is None:
            items = self._repository.list()
        return [item for item in items if item.is_active]

    def hero_item(self, items: Optional[Iterable[ContentItem]] = None) -> Optional[ContentItem]:
        """
        Contenu mis en avant sur l'accueil.

        Le plus recent des contenus actifs marques featured_on_home, a defaut
        le plus recent des contenus actifs ; None si le catalogue est vide.
        """
        active = self.active_items(items)
        featured = _newest_first(item for item in active if item.featured_on_home)
        if featured:
            return featured[0]
        newest = _newest_first(active)
        return newest[0] if newest else None

    def genre_rows(self, items: Optional[Iterable[ContentItem]] = None) -> list[GenreRow]:
        """
        Rangees par genre, triees alphabetiquement.

        Un contenu apparait dans chacun de ses genres. Les contenus sans genre
        sont regroupes dans une derniere rangee "Diversos".
        """
        rows: dict[str, GenreRow] = {}
        misc: list[ContentItem] = []
        for item in self.active_items(items):
            genres = item.genre_list()
            if not genres:
                misc.append(item)
                continue
            for genre in genres:
                rows.setdefault(genre, GenreRow(title=genre)).items.append(item)

        ordered = sorted(rows.values(), key=lambda row: row.title.casefold())
        if misc:
            ordered.append(GenreRow(title=MISC_GENRE_ROW, items=misc))
        return ordered

    def search(self, query: str, items: Optional[Iterable[ContentItem]] = None) -> list[ContentItem]:
        """Recherche insensible a la casse sur le titre original et le titre localise."""
        needle = query.strip().casefold()
        if not needle:
            return []
        return [
            item
            for item in self.active_items(items)
            if needle in item.original_title.casefold()
            or needle in item.localized_title.casefold()
        ]

    def favorites(
        self,
        favorite_ids: Iterable[str],
        items: Optional[Iterable[ContentItem]] = None,
    ) -> list[ContentItem]:
        """Contenus actifs presents dans les favoris, dans l'ordre du catalogue."""
        wanted = set(favorite_ids)
        return [item for item in self.active_items(items) if item.id in wanted]
