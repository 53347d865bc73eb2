"""Generic trivia questions from the Open Trivia DB."""

from __future__ import annotations

import asyncio
import hashlib
import html
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from pydantic import ValidationError

from models import (
    QUESTIONS_PER_CATEGORY,
    Difficulty,
    MediaType,
    ProcessedQuestion,
    QuestionType,
    TriviaCategory,
)
from services.provider_schemas import OpenTriviaItem, OpenTriviaResponse, parse_items
from services.providers.base import ProviderError, QuestionProvider, RateLimitedError
from services.retry import linear_backoff, retry_with_backoff
from services.shuffle import shuffle
from services.slotting import FIVE_TIER_PLAN, fill_slots, prefer_unplayed

logger = logging.getLogger(__name__)

OPEN_TRIVIA_URL = "https://opentdb.com/api.php"
BATCH_SIZE = 20
RATE_LIMIT_RESPONSE_CODE = 5
FALLBACK_ORDER = ("medium", "easy", "hard")


def history_key_for(question_text: str) -> str:
    digest = hashlib.sha1(question_text[:40].strip().lower().encode("utf-8")).hexdigest()
    return f"otdb-{digest[:10]}"


class OpenTriviaProvider(QuestionProvider):
    name = "open-trivia"

    def __init__(
        self,
        *args,
        max_attempts: int = 4,
        backoff_seconds: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        self._sleep = sleep

    async def fetch_candidates(self, category: TriviaCategory) -> List[ProcessedQuestion]:
        if category.source_id is None:
            raise ProviderError(f"Category {category.id} has no Open Trivia DB id.")
        response = await retry_with_backoff(
            lambda: self._request_batch(category),
            max_attempts=self.max_attempts,
            delay=linear_backoff(self.backoff_seconds),
            retry_on=(RateLimitedError,),
            sleep=self._sleep,
        )
        questions: List[ProcessedQuestion] = []
        seen = set()
        for item in parse_items(OpenTriviaItem, response.results):
            question = self._to_question(category, item)
            if question is None or question.history_key in seen:
                continue
            seen.add(question.history_key)
            questions.append(question)
        return questions

    async def _request_batch(self, category: TriviaCategory) -> OpenTriviaResponse:
        raw = await self._get_json(
            OPEN_TRIVIA_URL,
            params={"amount": BATCH_SIZE, "category": category.source_id, "type": "multiple"},
        )
        try:
            response = OpenTriviaResponse.model_validate(raw)
        except ValidationError as exc:
            raise ProviderError(f"Unexpected Open Trivia DB payload for {category.id}") from exc
        if response.response_code == RATE_LIMIT_RESPONSE_CODE:
            raise RateLimitedError(f"Open Trivia DB throttled category {category.id}")
        if response.response_code != 0:
            raise ProviderError(f"Open Trivia DB returned response code {response.response_code}")
        return response

    def _to_question(self, category: TriviaCategory, item: OpenTriviaItem) -> Optional[ProcessedQuestion]:
        incorrect = [html.unescape(answer) for answer in item.incorrect_answers]
        if len(incorrect) != 3:
            return None
        text = html.unescape(item.question)
        correct = html.unescape(item.correct_answer)
        key = history_key_for(text)
        return ProcessedQuestion(
            id=key,
            category=category.name,
            type=QuestionType.MULTIPLE,
            difficulty=Difficulty(item.difficulty),
            media_type=MediaType.TEXT,
            question=text,
            correct_answer=correct,
            incorrect_answers=incorrect,
            all_answers=self._shuffled_answers(correct, incorrect),
            history_key=key,
        )

    def select(self, category: TriviaCategory, candidates: Sequence[ProcessedQuestion]) -> List[ProcessedQuestion]:
        played = self.history.get_played()
        fresh = [question for question in candidates if question.history_key not in played]
        if len(fresh) < QUESTIONS_PER_CATEGORY:
            logger.info(
                "Only %s fresh questions for %s, allowing replays from the full pool", len(fresh), category.id
            )
        pool = shuffle(candidates, self.rng)

        def _is_played(question: ProcessedQuestion) -> bool:
            return question.history_key in played

        buckets: Dict[str, List[ProcessedQuestion]] = {}
        for level in ("easy", "medium", "hard"):
            bucket = [question for question in pool if question.difficulty.value == level]
            if len(fresh) >= QUESTIONS_PER_CATEGORY:
                bucket = [question for question in bucket if not _is_played(question)]
            buckets[level] = prefer_unplayed(bucket, _is_played)

        picked = fill_slots(buckets, FIVE_TIER_PLAN, FALLBACK_ORDER)
        for slot, question in enumerate(picked):
            question.id = f"{question.history_key}-{slot}"
        return picked
