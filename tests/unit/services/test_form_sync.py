"""
Tests unitaires pour la synchronisation de l'etat du formulaire.

Ces tests verifient:
- reconcile_count : croissance par la fin, troncature par la fin, no-op
- Les elements conserves gardent leur identite
- La liste d'entree n'est jamais modifiee
- sync_total_seasons sur une serie
"""

import pytest

from cineform.core.entities.content import Episode, Season, SeriesItem
from cineform.services.form_sync import (
    append_episode,
    append_season,
    default_episode,
    default_season,
    reconcile_count,
    remove_at,
    sync_total_seasons,
)


@pytest.fixture
def seasons() -> list[Season]:
    return [Season(season_number=n, episodes=[Episode(title=f"E{n}")]) for n in (1, 2, 3)]


class TestReconcileCount:
    """Tests pour reconcile_count."""

    @pytest.mark.parametrize("new_count", [3, 4, 7])
    def test_growth_keeps_prefix_and_reaches_count(self, seasons, new_count):
        """La liste atteint la cardinalite, le prefixe est intact."""
        result = reconcile_count(seasons, new_count, default_season)

        assert len(result) == new_count
        for original, kept in zip(seasons, result):
            assert kept is original

    def test_growth_uses_index_for_defaults(self, seasons):
        """Les nouvelles saisons sont numerotees index + 1."""
        result = reconcile_count(seasons, 5, default_season)

        assert [season.season_number for season in result[3:]] == [4, 5]
        assert result[3].episodes == []

    @pytest.mark.parametrize("new_count", [0, 1, 2])
    def test_shrink_drops_tail(self, seasons, new_count):
        """La troncature garde la tete, dans l'ordre."""
        result = reconcile_count(seasons, new_count, default_season)

        assert result == seasons[:new_count]
        assert all(kept is original for kept, original in zip(result, seasons))

    def test_shrink_is_by_index_not_by_number(self):
        """La troncature ignore les numeros de saison."""
        unordered = [Season(season_number=3), Season(season_number=1), Season(season_number=2)]

        result = reconcile_count(unordered, 2, default_season)

        assert [season.season_number for season in result] == [3, 1]

    @pytest.mark.parametrize("new_count", [None, -1, -10])
    def test_invalid_count_is_a_noop(self, seasons, new_count):
        assert reconcile_count(seasons, new_count, default_season) == seasons

    def test_input_is_never_mutated(self, seasons):
        snapshot = list(seasons)

        reconcile_count(seasons, 5, default_season)
        reconcile_count(seasons, 1, default_season)

        assert seasons == snapshot
        assert len(seasons) == 3

    def test_returns_a_new_list(self, seasons):
        result = reconcile_count(seasons, 3, default_season)
        assert result == seasons
        assert result is not seasons

    def test_idempotent(self, seasons):
        once = reconcile_count(seasons, 5, default_season)
        twice = reconcile_count(once, 5, default_season)
        assert twice == once

    def test_works_on_empty_list(self):
        result = reconcile_count([], 2, default_episode)
        assert [episode.title for episode in result] == ["Episódio 1", "Episódio 2"]


class TestListHelpers:
    def test_append_season_numbers_next(self, seasons):
        result = append_season(seasons)
        assert result[-1].season_number == 4
        assert len(seasons) == 3

    def test_append_episode(self):
        result = append_episode([Episode(title="Piloto")])
        assert [episode.title for episode in result] == ["Piloto", "Episódio 2"]

    def test_remove_at(self, seasons):
        result = remove_at(seasons, 1)
        assert [season.season_number for season in result] == [1, 3]
        assert len(seasons) == 3

    @pytest.mark.parametrize("index", [-1, 3])
    def test_remove_at_out_of_bounds(self, seasons, index):
        assert remove_at(seasons, index) == seasons


class TestSyncTotalSeasons:
    def test_grows_seasons_and_sets_total(self, series_item):
        result = sync_total_seasons(series_item, 4)

        assert result.total_seasons == 4
        assert [season.season_number for season in result.seasons] == [1, 2, 3, 4]
        assert result.seasons[0] is series_item.seasons[0]
        assert series_item.total_seasons == 2
        assert len(series_item.seasons) == 2

    def test_shrinks_seasons(self, series_item):
        result = sync_total_seasons(series_item, 1)

        assert result.total_seasons == 1
        assert result.seasons == series_item.seasons[:1]

    def test_none_clears_total_and_keeps_seasons(self, series_item):
        result = sync_total_seasons(series_item, None)

        assert result.total_seasons is None
        assert result.seasons == series_item.seasons

    def test_negative_is_ignored(self, series_item):
        result = sync_total_seasons(series_item, -2)

        assert result == series_item
        assert result is not series_item

    def test_keeps_identity_fields(self, series_item):
        result = sync_total_seasons(series_item, 3)

        assert isinstance(result, SeriesItem)
        assert result.id == series_item.id
        assert result.tmdb_id == series_item.tmdb_id
