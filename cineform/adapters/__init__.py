"""Adaptateurs : fournisseur TMDB et interface en ligne de commande."""
