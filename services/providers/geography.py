"""Flag and capital questions from the REST Countries dataset."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from models import Difficulty, MediaType, ProcessedQuestion, QuestionType, TriviaCategory
from services.provider_schemas import RestCountry, parse_items
from services.providers.base import ProviderError, QuestionProvider
from services.shuffle import sample, shuffle
from services.slotting import FIVE_TIER_PLAN, fill_slots, prefer_unplayed

logger = logging.getLogger(__name__)

REST_COUNTRIES_URL = "https://restcountries.com/v3.1/all"
EASY_POPULATION = 20_000_000
MEDIUM_POPULATION = 5_000_000
DISTRACTOR_COUNT = 3
CAPITALS_VARIANT = "capitals"

# Exhausted bucket -> neighbouring buckets to borrow from.
BACKFILL_ORDER: Dict[str, Sequence[str]] = {
    "easy": ("medium", "hard"),
    "medium": ("easy", "hard"),
    "hard": ("medium", "easy"),
}


def difficulty_for_population(population: int) -> Difficulty:
    if population > EASY_POPULATION:
        return Difficulty.EASY
    if population >= MEDIUM_POPULATION:
        return Difficulty.MEDIUM
    return Difficulty.HARD


class GeographyProvider(QuestionProvider):
    name = "geography"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._countries: Optional[List[RestCountry]] = None

    async def fetch_candidates(self, category: TriviaCategory) -> List[ProcessedQuestion]:
        capitals = category.variant == CAPITALS_VARIANT
        countries: Dict[str, RestCountry] = {}
        for country in await self._load_countries():
            if not country.flag_url or (capitals and not country.primary_capital):
                continue
            countries.setdefault(country.name.common, country)
        answers = {
            name: (country.primary_capital if capitals else name) for name, country in countries.items()
        }

        questions: List[ProcessedQuestion] = []
        for name, country in countries.items():
            correct = answers[name]
            others = sorted({answer for answer in answers.values() if answer != correct})
            if len(others) < DISTRACTOR_COUNT:
                continue
            incorrect = sample(others, DISTRACTOR_COUNT, self.rng)
            key = f"geo-capital-{name}" if capitals else f"geo-{name}"
            questions.append(
                ProcessedQuestion(
                    id=key,
                    category=category.name,
                    type=QuestionType.MULTIPLE,
                    difficulty=difficulty_for_population(country.population),
                    media_type=MediaType.IMAGE,
                    question="What is the capital of this country?"
                    if capitals
                    else "Which country does this flag belong to?",
                    correct_answer=correct,
                    incorrect_answers=incorrect,
                    all_answers=self._shuffled_answers(correct, incorrect),
                    image_url=country.flag_url,
                    info_text=name if capitals else None,
                    history_key=key,
                    popularity=float(country.population),
                )
            )
        return questions

    async def _load_countries(self) -> List[RestCountry]:
        # Both variants share one download per game.
        if self._countries is None:
            raw = await self._get_json(REST_COUNTRIES_URL, params={"fields": "name,flags,capital,population"})
            if not isinstance(raw, list):
                raise ProviderError("REST Countries returned an unexpected payload")
            self._countries = parse_items(RestCountry, raw)
            logger.info("Loaded %s countries", len(self._countries))
        return self._countries

    def select(self, category: TriviaCategory, candidates: Sequence[ProcessedQuestion]) -> List[ProcessedQuestion]:
        played = self.history.get_played()

        def _is_played(question: ProcessedQuestion) -> bool:
            return question.history_key in played

        pool = shuffle(candidates, self.rng)
        buckets = {
            level.value: prefer_unplayed([question for question in pool if question.difficulty == level], _is_played)
            for level in (Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD)
        }
        return fill_slots(buckets, FIVE_TIER_PLAN, BACKFILL_ORDER)
