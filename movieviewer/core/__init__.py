"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites) et la taxonomie
d'erreurs. Cette couche n'a AUCUNE dépendance vers l'infrastructure
(adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entités métier (Movie, Genre, Review, User, FavoriteMovie)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- errors : Erreurs typées remontées par les adaptateurs et les services
"""
