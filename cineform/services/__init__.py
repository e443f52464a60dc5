"""
Couche application de CineForm.

- form_sync : synchronisation pure de l'etat du formulaire
- upcoming : calendrier des prochains episodes et rattachement au catalogue
- autofill : auto-remplissage depuis TMDB
- catalog_browser : vues de lecture (accueil, recherche, favoris)
"""
