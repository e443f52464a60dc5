"""
Modeles SQLModel pour la base de donnees CineForm.

Le catalogue est un store documentaire : chaque document (contenu, bandeau,
retour utilisateur, favoris) est une ligne de la table `documents`, identifiee
par (collection, id), dont le contenu est serialise en JSON dans data_json.

Les horodatages poses par le store sont serialises sous la forme
{"$datetime": "<iso>"} pour etre restitues en objets datetime a la lecture.
"""


import json
from datetime import datetime
from typing import Any

from sqlmodel import Field, SQLModel

_DATETIME_KEY = "$datetime"


def _encode_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return {_DATETIME_KEY: value.isoformat()}
    raise TypeError(f"Type non serialisable: {type(value).__name__}")


def _decode_object(obj: dict[str, Any]) -> Any:
    if len(obj) == 1 and _DATETIME_KEY in obj:
        return datetime.fromisoformat(obj[_DATETIME_KEY])
    return obj


def dumps_document(data: dict[str, Any]) -> str:
    """Serialise un document (les datetime sont encapsules)."""
    return json.dumps(data, default=_encode_value, ensure_ascii=False)


def loads_document(raw: str) -> dict[str, Any]:
    """Deserialise un document (les datetime encapsules sont restaures)."""
    return json.loads(raw, object_hook=_decode_object)


class DocumentModel(SQLModel, table=True):
    """
    Modele representant un document d'une collection.

    La colonne sequence conserve l'ordre d'insertion pour les listes non triees.
    """

    __tablename__ = "documents"

    collection: str = Field(primary_key=True)
    id: str = Field(primary_key=True)
    sequence: int = Field(default=0, index=True)
    data_json: str = "{}"

