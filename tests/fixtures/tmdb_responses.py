"""Canned TMDb payloads used across the test-suite."""

INCEPTION_DETAILS = {
    "id": 27205,
    "title": "Inception",
    "original_title": "Inception",
    "genres": [
        {"id": 28, "name": "Action"},
        {"id": 878, "name": "Science Fiction"},
        {"id": 12, "name": "Adventure"},
    ],
    "release_date": "2010-07-15",
    "vote_average": 8.369,
    "overview": "Cobb, a skilled thief who commits corporate espionage...",
}

INCEPTION_CREDITS = {
    "id": 27205,
    "cast": [
        {"name": "Leonardo DiCaprio", "original_name": "Leonardo DiCaprio"},
        {"name": "Joseph Gordon-Levitt", "original_name": "Joseph Gordon-Levitt"},
        {"name": "Ken Watanabe", "original_name": "渡辺謙"},
        {"name": "Tom Hardy", "original_name": "Tom Hardy"},
        {"name": "Elliot Page", "original_name": "Elliot Page"},
        {"name": "Dileep Rao", "original_name": "Dileep Rao"},
    ],
}

FIGHT_CLUB_DETAILS = {
    "id": 550,
    "title": "Fight Club",
    "original_title": "Fight Club",
    "genres": [{"id": 18, "name": "Drama"}],
    "release_date": "1999-10-15",
    "vote_average": 8.433,
    "overview": "A ticking-time-bomb insomniac...",
}

FIGHT_CLUB_CREDITS = {
    "id": 550,
    "cast": [
        {"name": "Edward Norton", "original_name": "Edward Norton"},
        {"name": "Brad Pitt", "original_name": "Brad Pitt"},
    ],
}


INCEPTION_SEARCH_RESULT = {
    "id": 27205,
    "title": "Inception",
    "genre_ids": [28, 878, 12],
    "release_date": "2010-07-16",
    "vote_average": 8.4,
    "overview": "Cobb, a skilled thief...",
}
