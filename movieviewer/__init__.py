"""
MovieViewer - Consultation de films TMDB avec mode hors-ligne.

Ce package fournit la couche donnees d'un client de consultation de films :
listes TMDB, cache local pour le mode hors-ligne, comptes utilisateurs
et films favoris.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, erreurs)
- services/ : Couche application (synchronisation distant/local, validation)
- state/ : Etat observable de l'application (equivalent view-model)
- adapters/ : Couche infrastructure (CLI, client API TMDB)
- infrastructure/ : Persistance SQLite via SQLModel
"""
