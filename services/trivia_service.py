"""Game data pipeline: selected categories in, playable board columns out."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Set

import httpx

from config import AppConfig, load_config
from models import CategoryColumn, CategoryKind, TriviaCategory
from services.providers.base import QuestionProvider
from services.providers.football import FootballCareerProvider
from services.providers.geography import GeographyProvider
from services.providers.movie_posters import MoviePosterProvider
from services.providers.music import MusicProvider
from services.providers.open_trivia import OpenTriviaProvider
from services.round_assembler import RoundAssembler
from storage.history_repository import HistoryStore, JsonHistoryStore

logger = logging.getLogger(__name__)

USER_AGENT = "TriviaNight/1.0"


class GameDataPipeline:
    """Assembles categories strictly one after another.

    Shared third-party services rate-limit per IP, so each category is awaited
    fully and followed by a fixed pause before the next one starts.
    """

    def __init__(
        self,
        assembler: RoundAssembler,
        *,
        delay_seconds: float = 0.5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.assembler = assembler
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    async def fetch_game_data(self, categories: Sequence[TriviaCategory]) -> List[CategoryColumn]:
        columns: List[CategoryColumn] = []
        seen_ids: Set[str] = set()
        for category in categories:
            try:
                column = await self.assembler.assemble_column(category)
            except Exception:
                logger.exception("Unexpected failure assembling %s", category.id)
                column = None
            if column is not None:
                self._ensure_unique_ids(column, seen_ids)
                columns.append(column)
            await self._sleep(self.delay_seconds)
        logger.info("Assembled %s of %s categories", len(columns), len(categories))
        return columns

    @staticmethod
    def _ensure_unique_ids(column: CategoryColumn, seen_ids: Set[str]) -> None:
        for question in column.questions:
            base = question.id
            suffix = 1
            while question.id in seen_ids:
                suffix += 1
                question.id = f"{base}~{suffix}"
            seen_ids.add(question.id)


def build_providers(
    client: httpx.AsyncClient,
    history: HistoryStore,
    config: AppConfig,
    rng: Optional[random.Random] = None,
) -> Dict[CategoryKind, QuestionProvider]:
    rng = rng or random.Random()
    return {
        CategoryKind.GENERIC: OpenTriviaProvider(client, history, rng),
        CategoryKind.MUSIC: MusicProvider(client, history, rng),
        CategoryKind.GEOGRAPHY: GeographyProvider(client, history, rng),
        CategoryKind.MOVIE_POSTER: MoviePosterProvider(client, history, rng, api_key=config.tmdb_api_key),
        CategoryKind.FOOTBALL_CAREER: FootballCareerProvider(
            client, history, rng, api_key=config.sportsdb_api_key
        ),
    }


def default_history(config: Optional[AppConfig] = None) -> HistoryStore:
    config = config or load_config()
    return JsonHistoryStore(config.history_path)


async def fetch_game_data(
    categories: Sequence[TriviaCategory],
    history: Optional[HistoryStore] = None,
    config: Optional[AppConfig] = None,
    rng: Optional[random.Random] = None,
) -> List[CategoryColumn]:
    """Single entry point used by the UI to build a game board."""
    config = config or load_config()
    if history is None:
        history = default_history(config)
    async with httpx.AsyncClient(
        timeout=config.http_timeout_seconds,
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
    ) as client:
        assembler = RoundAssembler(build_providers(client, history, config, rng), history)
        pipeline = GameDataPipeline(assembler, delay_seconds=config.category_delay_seconds)
        return await pipeline.fetch_game_data(categories)


def reset_played_tracks(history: Optional[HistoryStore] = None) -> None:
    if history is None:
        history = default_history()
    history.reset()
    logger.info("Replay history cleared")
