"""Categories offered on the selection screen."""

from __future__ import annotations

from typing import Dict, Iterable, List

from models import TriviaCategory

AVAILABLE_CATEGORIES: List[TriviaCategory] = [
    TriviaCategory.create("otdb_general", "General", "🧠", source_id=9),
    TriviaCategory.create("otdb_film", "Film", "🎬", source_id=11),
    TriviaCategory.create("otdb_music", "Music Facts", "🎼", source_id=12),
    TriviaCategory.create("otdb_video_games", "Games", "🎮", source_id=15),
    TriviaCategory.create("otdb_science", "Science", "🔬", source_id=17),
    TriviaCategory.create("otdb_computers", "Computers", "💻", source_id=18),
    TriviaCategory.create("otdb_mythology", "Mythology", "⚡", source_id=20),
    TriviaCategory.create("otdb_sports", "Sports", "🏅", source_id=21),
    TriviaCategory.create("otdb_geography", "Geography", "🗺️", source_id=22),
    TriviaCategory.create("otdb_history", "History", "📜", source_id=23),
    TriviaCategory.create("otdb_art", "Art", "🎨", source_id=25),
    TriviaCategory.create("otdb_animals", "Animals", "🐾", source_id=27),
    TriviaCategory.create("music_80s", "80s Hits", "📼", decade=(1980, 1989)),
    TriviaCategory.create("music_90s", "90s Hits", "💿", decade=(1990, 1999)),
    TriviaCategory.create("music_2000s", "2000s Hits", "📀", decade=(2000, 2009)),
    TriviaCategory.create("music_2010s", "2010s Hits", "🎧", decade=(2010, 2019)),
    TriviaCategory.create("music_hits", "Golden Oldies", "🎵"),
    TriviaCategory.create("music_movies", "Movie Themes", "🎞️", variant="soundtrack"),
    TriviaCategory.create("geo_flags", "Flags", "🏳️", variant="flags"),
    TriviaCategory.create("geo_capitals", "Capitals", "🏛️", variant="capitals"),
    TriviaCategory.create("mov_posters", "Movie Years", "🍿"),
    TriviaCategory.create("football_career", "Career Paths", "⚽"),
]

_BY_ID: Dict[str, TriviaCategory] = {category.id: category for category in AVAILABLE_CATEGORIES}


def get_category(category_id: str) -> TriviaCategory:
    try:
        return _BY_ID[category_id]
    except KeyError as exc:
        raise KeyError(f"Unknown category '{category_id}'") from exc


def categories_for(category_ids: Iterable[str]) -> List[TriviaCategory]:
    """Resolve ids in the order given."""
    return [get_category(category_id) for category_id in category_ids]
