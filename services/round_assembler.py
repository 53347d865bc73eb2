"""Build one five-question column for a category, or nothing at all."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from models import (
    POINT_VALUES,
    QUESTIONS_PER_CATEGORY,
    CategoryColumn,
    CategoryKind,
    ProcessedQuestion,
    TriviaCategory,
)
from services.providers.base import QuestionProvider
from storage.history_repository import HistoryStore

logger = logging.getLogger(__name__)


class RoundAssembler:
    """Routes a category to its provider and turns the result into a column."""

    def __init__(self, providers: Dict[CategoryKind, QuestionProvider], history: HistoryStore) -> None:
        self.providers = providers
        self.history = history

    async def assemble_column(self, category: TriviaCategory) -> Optional[CategoryColumn]:
        provider = self.providers.get(category.kind)
        if provider is None:
            logger.warning("No provider registered for %s (%s)", category.id, category.kind.value)
            return None
        try:
            candidates = await provider.fetch_candidates(category)
            selected = provider.select(category, candidates)
        except Exception:
            logger.exception("Provider %s failed for category %s", provider.name, category.id)
            return None

        if len(selected) < QUESTIONS_PER_CATEGORY:
            logger.warning(
                "Dropping category %s: only %s of %s questions available",
                category.id,
                len(selected),
                QUESTIONS_PER_CATEGORY,
            )
            return None

        questions = self._slot(selected[:QUESTIONS_PER_CATEGORY])
        self.history.mark_many(question.history_key for question in questions if question.history_key)

        try:
            questions = await provider.enrich(category, questions)
        except Exception:
            logger.exception("Enrichment failed for %s; keeping plain questions", category.id)

        return CategoryColumn(title=category.name, questions=questions)

    @staticmethod
    def _slot(questions: List[ProcessedQuestion]) -> List[ProcessedQuestion]:
        for question, points in zip(questions, POINT_VALUES):
            question.point_value = points
            question.is_answered = False
        return questions
