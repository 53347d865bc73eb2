"""Listen-and-guess questions built from iTunes 30-second previews."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from pydantic import ValidationError

from models import (
    QUESTIONS_PER_CATEGORY,
    AnswerReveal,
    Difficulty,
    MediaType,
    ProcessedQuestion,
    QuestionType,
    TriviaCategory,
)
from services.datasets import MUSIC_SEEDS, MusicSeed
from services.provider_schemas import ItunesSearchResponse, ItunesTrack, parse_items
from services.providers.base import ProviderError, QuestionProvider
from services.shuffle import shuffle

logger = logging.getLogger(__name__)

ITUNES_SEARCH_URL = "https://itunes.apple.com/search"
ITUNES_LOOKUP_URL = "https://itunes.apple.com/lookup"
SEARCH_LIMIT = 25
PREVIEW_SECONDS = 30
BANNED_WORDS = ("tribute", "cover", "karaoke")
SOUNDTRACK_VARIANT = "soundtrack"


@dataclass
class SeedQuery:
    artist: Optional[str] = None
    query: Optional[str] = None
    track_id: Optional[int] = None
    title: Optional[str] = None

    @property
    def label(self) -> str:
        return self.artist or self.query or f"id:{self.track_id}"

    @property
    def is_artist_search(self) -> bool:
        return self.artist is not None


def parse_seed(raw: MusicSeed) -> Optional[SeedQuery]:
    if isinstance(raw, str):
        return SeedQuery(artist=raw.strip()) if raw.strip() else None
    if not isinstance(raw, dict):
        return None
    title = str(raw["title"]) if raw.get("title") else None
    if raw.get("id") is not None:
        try:
            return SeedQuery(track_id=int(raw["id"]), title=title)
        except (TypeError, ValueError):
            return None
    if raw.get("query"):
        return SeedQuery(query=str(raw["query"]), title=title)
    return None


def music_key(track_id: int) -> str:
    return f"music-{track_id}"


class MusicProvider(QuestionProvider):
    name = "music"

    def __init__(self, *args, seeds: Optional[Dict[str, List[MusicSeed]]] = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.seeds = seeds if seeds is not None else MUSIC_SEEDS

    async def fetch_candidates(self, category: TriviaCategory) -> List[ProcessedQuestion]:
        queries = [seed for seed in (parse_seed(raw) for raw in self.seeds.get(category.id, [])) if seed]
        if not queries:
            raise ProviderError(f"No music seeds configured for {category.id}")

        played = self.history.get_played()
        picked: List[ProcessedQuestion] = []
        replays: List[Tuple[SeedQuery, ItunesTrack]] = []
        used_tracks: Set[int] = set()

        # One lookup at a time: iTunes throttles bursts per IP.
        for seed in shuffle(queries, self.rng):
            if len(picked) >= QUESTIONS_PER_CATEGORY:
                break
            try:
                tracks = await self._lookup(seed)
            except ProviderError as exc:
                logger.warning("Skipping music seed %s: %s", seed.label, exc)
                continue
            valid = [
                track for track in tracks if track.track_id not in used_tracks and self._accepts(category, seed, track)
            ]
            if not valid:
                continue
            fresh = [track for track in valid if music_key(track.track_id) not in played]
            if fresh:
                track = self.rng.choice(fresh)
                used_tracks.add(track.track_id)
                picked.append(self._to_question(category, seed, track))
            else:
                replays.append((seed, self.rng.choice(valid)))

        if len(picked) < QUESTIONS_PER_CATEGORY and replays:
            logger.warning(
                "Music category %s ran out of unplayed tracks (%s found); backfilling with replays",
                category.id,
                len(picked),
            )
            for seed, track in replays:
                if len(picked) >= QUESTIONS_PER_CATEGORY:
                    break
                if track.track_id in used_tracks:
                    continue
                used_tracks.add(track.track_id)
                question = self._to_question(category, seed, track)
                question.id = f"{question.history_key}-replay-{self.rng.getrandbits(32):08x}"
                picked.append(question)
        return picked

    async def _lookup(self, seed: SeedQuery) -> List[ItunesTrack]:
        if seed.track_id is not None:
            raw = await self._get_json(ITUNES_LOOKUP_URL, params={"id": seed.track_id, "entity": "song"})
        else:
            params = {"term": seed.artist or seed.query, "media": "music", "entity": "song", "limit": SEARCH_LIMIT}
            if seed.is_artist_search:
                params["attribute"] = "artistTerm"
            raw = await self._get_json(ITUNES_SEARCH_URL, params=params)
        try:
            response = ItunesSearchResponse.model_validate(raw)
        except ValidationError as exc:
            raise ProviderError(f"Unexpected iTunes payload for {seed.label}") from exc
        return parse_items(ItunesTrack, response.results)

    def _accepts(self, category: TriviaCategory, seed: SeedQuery, track: ItunesTrack) -> bool:
        if not track.preview_url:
            return False
        if track.kind and track.kind != "song":
            return False
        if seed.track_id is None:
            haystack = " ".join(
                part.lower() for part in (track.artist_name, track.track_name, track.collection_name or "")
            )
            if any(word in haystack for word in BANNED_WORDS):
                return False
        if seed.is_artist_search and seed.artist.lower() not in track.artist_name.lower():
            return False
        if category.decade:
            start, end = category.decade
            year = track.release_year
            if year is None or not start <= year <= end:
                return False
        return True

    def _to_question(self, category: TriviaCategory, seed: SeedQuery, track: ItunesTrack) -> ProcessedQuestion:
        soundtrack = category.variant == SOUNDTRACK_VARIANT
        if soundtrack:
            # The composer would give the movie away.
            reveal = AnswerReveal(
                title=seed.title or track.collection_name or track.track_name, artist="", year=track.release_year
            )
        else:
            reveal = AnswerReveal(title=track.track_name, artist=track.artist_name, year=track.release_year)
        key = music_key(track.track_id)
        return ProcessedQuestion(
            id=key,
            category=category.name,
            type=QuestionType.MUSIC,
            difficulty=Difficulty.HONOR_SYSTEM,
            media_type=MediaType.AUDIO,
            question="Name the movie!" if soundtrack else "Listen & Guess!",
            audio_url=track.preview_url,
            timer_duration=PREVIEW_SECONDS,
            answer_reveal=reveal,
            history_key=key,
            strict_scoring=soundtrack,
        )
