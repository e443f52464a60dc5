"""
Package des commandes CLI de CineForm.

Re-exporte toutes les commandes pour que main.py puisse les importer.
"""

from cineform.adapters.cli.commands.catalog_commands import (
    add,
    delete,
    init_db,
    list_items,
    show,
    update,
)
from cineform.adapters.cli.commands.tmdb_commands import autofill, cast, upcoming

__all__ = [
    "add",
    "autofill",
    "cast",
    "delete",
    "init_db",
    "list_items",
    "show",
    "update",
    "upcoming",
]
