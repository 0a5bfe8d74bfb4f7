"""
Constantes partagees de MovieViewer.
"""

# Genres TMDB (noms anglais renvoyes par l'API sans parametre language).
# Les endpoints de liste ne renvoient que genre_ids : ce mapping permet de
# reconstruire des Genre complets pour le cache hors-ligne.
TMDB_GENRE_MAPPING = {
    28: "Action",
    12: "Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    14: "Fantasy",
    36: "History",
    27: "Horror",
    10402: "Music",
    9648: "Mystery",
    10749: "Romance",
    878: "Science Fiction",
    10770: "TV Movie",
    53: "Thriller",
    10752: "War",
    37: "Western",
}

# Tailles d'image TMDB utilisees par les ecrans liste et detail
POSTER_SIZE_LIST = "w185"
POSTER_SIZE_DETAIL = "original"
