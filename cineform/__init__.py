"""
CineForm - Gestion d'un catalogue de films et de series.

Ce package fournit le modele de contenu (films, series, saisons, episodes,
sources video), sa persistance documentaire et la reconciliation des
prochains episodes annonces par TMDB avec le catalogue local.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, schemas de validation, erreurs)
- services/ : Couche application (synchronisation de formulaire, reconciliation)
- infrastructure/ : Persistance (document store SQLModel, mapper, repositories)
- adapters/ : Clients API et interface CLI
"""

__version__ = "0.1.0"
