"""
Couche domaine (core).

Contient les entites metier, ports (interfaces abstraites), schemas de
validation et la taxonomie d'erreurs.
Cette couche n'a AUCUNE dependance vers l'infrastructure (BDD, HTTP, CLI).

Sous-packages :
- entities/ : Entites metier (MovieItem, SeriesItem, Season, Episode, VideoSource)
- ports/ : Interfaces abstraites definissant les contrats pour les adaptateurs
"""
