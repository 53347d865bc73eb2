"""Guess-the-player questions from bundled football career paths."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional, Sequence

from pydantic import ValidationError

from models import (
    AnswerReveal,
    Difficulty,
    MediaType,
    ProcessedQuestion,
    QuestionType,
    TriviaCategory,
)
from services.datasets import FOOTBALL_CAREERS
from services.provider_schemas import SportsDbSearchResponse, SportsDbTeam, parse_items
from services.providers.base import ProviderError, QuestionProvider
from services.shuffle import shuffle
from services.slotting import fill_slots, prefer_unplayed

logger = logging.getLogger(__name__)

SPORTSDB_SEARCH_URL = "https://www.thesportsdb.com/api/v1/json/{api_key}/searchteams.php"
TIERS = ("1", "2", "3", "4", "5")


def nearest_tiers(tier: str) -> List[str]:
    """Other tiers ordered by distance, easier tier first on ties."""
    level = int(tier)
    others = [candidate for candidate in TIERS if candidate != tier]
    return sorted(others, key=lambda candidate: (abs(int(candidate) - level), int(candidate)))


class FootballCareerProvider(QuestionProvider):
    name = "football-career"

    def __init__(
        self,
        *args,
        careers: Optional[List[Dict[str, object]]] = None,
        api_key: str = "3",
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.careers = careers if careers is not None else FOOTBALL_CAREERS
        self.api_key = api_key
        self._tier_by_key: Dict[str, str] = {}
        self._badge_cache: Dict[str, Optional[str]] = {}

    async def fetch_candidates(self, category: TriviaCategory) -> List[ProcessedQuestion]:
        questions: List[ProcessedQuestion] = []
        for entry in self.careers:
            player = entry.get("player")
            clubs = entry.get("clubs")
            tier = str(entry.get("tier", ""))
            if not isinstance(player, str) or not player.strip() or tier not in TIERS:
                continue
            if not isinstance(clubs, list) or not clubs or not all(isinstance(club, str) for club in clubs):
                continue
            key = f"football-{player}"
            self._tier_by_key[key] = tier
            questions.append(
                ProcessedQuestion(
                    id=key,
                    category=category.name,
                    type=QuestionType.HONOR_SYSTEM,
                    difficulty=Difficulty.HONOR_SYSTEM,
                    media_type=MediaType.TEXT_SEQUENCE,
                    question="Who am I? Follow the career path.",
                    club_list=list(clubs),
                    answer_reveal=AnswerReveal(title=player),
                    history_key=key,
                )
            )
        return questions

    def select(self, category: TriviaCategory, candidates: Sequence[ProcessedQuestion]) -> List[ProcessedQuestion]:
        played = self.history.get_played()

        def _is_played(question: ProcessedQuestion) -> bool:
            return question.history_key in played

        pool = shuffle(candidates, self.rng)
        buckets = {
            tier: prefer_unplayed(
                [question for question in pool if self._tier_by_key.get(question.history_key or "") == tier],
                _is_played,
            )
            for tier in TIERS
        }
        return fill_slots(buckets, TIERS, {tier: nearest_tiers(tier) for tier in TIERS})

    async def enrich(self, category: TriviaCategory, questions: List[ProcessedQuestion]) -> List[ProcessedQuestion]:
        for question in questions:
            # Badge quotas are per club, so one career path resolves all at once.
            badges = await asyncio.gather(*(self._badge_for(club) for club in question.club_list))
            if badges and all(badges):
                question.image_urls = [badge for badge in badges if badge]
                question.media_type = MediaType.IMAGE_SEQUENCE
        return questions

    async def _badge_for(self, club: str) -> Optional[str]:
        if club in self._badge_cache:
            return self._badge_cache[club]
        badge: Optional[str] = None
        try:
            raw = await self._get_json(SPORTSDB_SEARCH_URL.format(api_key=self.api_key), params={"t": club})
            response = SportsDbSearchResponse.model_validate(raw)
        except (ProviderError, ValidationError) as exc:
            logger.info("No badge for %s: %s", club, exc)
            return None
        teams = parse_items(SportsDbTeam, response.teams or [])
        exact = [team for team in teams if team.name.lower() == club.lower()]
        for team in exact or teams:
            if team.badge_url:
                badge = team.badge_url
                break
        self._badge_cache[club] = badge
        return badge
