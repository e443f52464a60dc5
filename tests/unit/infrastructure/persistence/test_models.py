"""
Tests unitaires pour la serialisation JSON des documents.
"""

from datetime import datetime, timezone

import pytest

from cineform.infrastructure.persistence.models import DocumentModel, dumps_document, loads_document


class TestDocumentCodec:
    def test_datetime_is_wrapped(self):
        value = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

        raw = dumps_document({"updatedAt": value})

        assert '"$datetime": "2024-06-01T12:00:00+00:00"' in raw

    def test_datetime_is_restored(self):
        value = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

        data = loads_document(dumps_document({"updatedAt": value, "nested": {"at": value}}))

        assert data["updatedAt"] == value
        assert data["nested"]["at"] == value

    def test_unicode_kept_readable(self):
        raw = dumps_document({"generos": "Animação"})
        assert "Animação" in raw

    def test_plain_objects_untouched(self):
        data = loads_document('{"a": {"$datetime": "x", "b": 1}, "c": [1, 2]}')
        assert data == {"a": {"$datetime": "x", "b": 1}, "c": [1, 2]}

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            dumps_document({"value": object()})


class TestDocumentModel:
    def test_defaults(self):
        model = DocumentModel(collection="contentItems", id="abc")

        assert model.sequence == 0
        assert model.data_json == "{}"
