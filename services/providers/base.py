"""Abstract provider interface shared by every question source."""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

import httpx

from models import QUESTIONS_PER_CATEGORY, ProcessedQuestion, TriviaCategory
from services.shuffle import shuffle
from storage.history_repository import HistoryStore

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Raised when a provider cannot produce candidates for a category."""


class RateLimitedError(ProviderError):
    """The upstream service asked us to slow down."""


class QuestionProvider(ABC):
    """Turns one third-party source into normalized, unslotted questions."""

    name = "provider"

    def __init__(
        self,
        client: httpx.AsyncClient,
        history: HistoryStore,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.client = client
        self.history = history
        self.rng = rng or random.Random()

    @abstractmethod
    async def fetch_candidates(self, category: TriviaCategory) -> List[ProcessedQuestion]:
        """Return zero or more validated questions for ``category``."""

    def select(self, category: TriviaCategory, candidates: Sequence[ProcessedQuestion]) -> List[ProcessedQuestion]:
        """Pick up to five questions in slot order. Flat rate by default."""
        return list(candidates[:QUESTIONS_PER_CATEGORY])

    async def enrich(self, category: TriviaCategory, questions: List[ProcessedQuestion]) -> List[ProcessedQuestion]:
        """Optional post-selection hook for sub-resource lookups."""
        return questions

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = await self.client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise ProviderError(f"{self.name}: request to {url} failed: {exc}") from exc
        if response.status_code == 429:
            raise RateLimitedError(f"{self.name}: rate limited by {url}")
        if response.status_code >= 400:
            raise ProviderError(f"{self.name}: {url} returned HTTP {response.status_code}")
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError(f"{self.name}: {url} returned invalid JSON") from exc

    def _shuffled_answers(self, correct: str, incorrect: Sequence[str]) -> List[str]:
        return shuffle([correct, *incorrect], self.rng)
