"""Guess-the-release-year questions from TMDB movie posters."""

from __future__ import annotations

import logging
import random
from datetime import date
from typing import Dict, List, Optional, Sequence

from pydantic import ValidationError

from models import (
    QUESTIONS_PER_CATEGORY,
    Difficulty,
    MediaType,
    ProcessedQuestion,
    QuestionType,
    TriviaCategory,
)
from services.provider_schemas import TmdbDiscoverResponse, TmdbMovie, parse_items
from services.providers.base import ProviderError, QuestionProvider
from services.shuffle import sample, shuffle
from services.slotting import prefer_unplayed

logger = logging.getLogger(__name__)

TMDB_DISCOVER_URL = "https://api.themoviedb.org/3/discover/movie"
POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"
PAGES_TO_FETCH = 3
MAX_PAGE = 20
MIN_VOTE_COUNT = 1000
YEAR_SPREAD = 5
EARLIEST_YEAR = 1900
DISTRACTOR_COUNT = 3
EASY_VOTES = 15000
MEDIUM_VOTES = 5000


def distractor_years(
    year: int,
    rng: random.Random,
    *,
    latest_year: int,
    count: int = DISTRACTOR_COUNT,
    spread: int = YEAR_SPREAD,
) -> List[int]:
    """Distinct wrong years within ``spread`` of ``year``, inside the calendar bounds."""
    options = [
        year + offset
        for offset in range(-spread, spread + 1)
        if offset != 0 and EARLIEST_YEAR <= year + offset <= latest_year
    ]
    return shuffle(options, rng)[:count]


def difficulty_for_votes(vote_count: int) -> Difficulty:
    if vote_count >= EASY_VOTES:
        return Difficulty.EASY
    if vote_count >= MEDIUM_VOTES:
        return Difficulty.MEDIUM
    return Difficulty.HARD


class MoviePosterProvider(QuestionProvider):
    name = "movie-posters"

    def __init__(self, *args, api_key: Optional[str] = None, today: Optional[date] = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.api_key = api_key
        self.today = today

    async def fetch_candidates(self, category: TriviaCategory) -> List[ProcessedQuestion]:
        if not self.api_key:
            raise ProviderError("TMDB_API_KEY is not configured.")
        today = self.today or date.today()
        movies: Dict[int, TmdbMovie] = {}
        for page in sample(range(1, MAX_PAGE + 1), PAGES_TO_FETCH, self.rng):
            try:
                raw = await self._get_json(
                    TMDB_DISCOVER_URL,
                    params={
                        "api_key": self.api_key,
                        "sort_by": "vote_count.desc",
                        "vote_count.gte": MIN_VOTE_COUNT,
                        "primary_release_date.lte": today.isoformat(),
                        "include_adult": "false",
                        "page": page,
                    },
                )
                response = TmdbDiscoverResponse.model_validate(raw)
            except (ProviderError, ValidationError) as exc:
                logger.warning("Skipping TMDB page %s: %s", page, exc)
                continue
            for movie in parse_items(TmdbMovie, response.results):
                movies.setdefault(movie.id, movie)

        questions: List[ProcessedQuestion] = []
        for movie in movies.values():
            question = self._to_question(category, movie, today.year)
            if question is not None:
                questions.append(question)
        return questions

    def _to_question(self, category: TriviaCategory, movie: TmdbMovie, latest_year: int) -> Optional[ProcessedQuestion]:
        year = movie.release_year
        if not movie.poster_path or year is None or movie.vote_count < MIN_VOTE_COUNT:
            return None
        if not EARLIEST_YEAR <= year <= latest_year:
            return None
        correct = str(year)
        incorrect = [str(value) for value in distractor_years(year, self.rng, latest_year=latest_year)]
        key = f"movie-{movie.id}"
        return ProcessedQuestion(
            id=key,
            category=category.name,
            type=QuestionType.MULTIPLE,
            difficulty=difficulty_for_votes(movie.vote_count),
            media_type=MediaType.IMAGE,
            question="What year was this movie released?",
            correct_answer=correct,
            incorrect_answers=incorrect,
            all_answers=self._shuffled_answers(correct, incorrect),
            image_url=f"{POSTER_BASE_URL}{movie.poster_path}",
            info_text=movie.title,
            history_key=key,
            popularity=float(movie.vote_count),
        )

    def select(self, category: TriviaCategory, candidates: Sequence[ProcessedQuestion]) -> List[ProcessedQuestion]:
        played = self.history.get_played()
        pool = prefer_unplayed(shuffle(candidates, self.rng), lambda question: question.history_key in played)
        picked = pool[:QUESTIONS_PER_CATEGORY]
        # Best-known movies take the cheapest slots.
        picked.sort(key=lambda question: question.popularity or 0.0, reverse=True)
        return picked
