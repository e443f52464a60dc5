"""
Constantes globales pour CineForm.

- Valeurs par defaut des series synthetisees par le calendrier
- Identifiants TMDB utilises par la decouverte des animes
"""

# Decouverte TMDB des animes a venir
ANIME_GENRE_ID = 16
ANIME_ORIGINAL_LANGUAGE = "ja"

# Serie construite a partir d'un episode TMDB absent du catalogue
EXTERNAL_ID_PREFIX = "ext-"
SYNTHESIZED_GENRES = "Animação"
SYNTHESIZED_LANGUAGE = "Japonês"
SYNTHESIZED_CONTENT_RATING = "Livre"
SYNTHESIZED_QUALITY = "HD"
SYNTHESIZED_TAGS = "Anime"

# Valeurs de repli de l'auto-remplissage
UNAVAILABLE_TITLE = "Título Indisponível"
UNAVAILABLE_SYNOPSIS = "Sinopse Indisponível"
UNAVAILABLE_DATE = "Data Indisponível"

# Genre attribue aux contenus sans genre sur l'accueil
MISC_GENRE_ROW = "Diversos"
