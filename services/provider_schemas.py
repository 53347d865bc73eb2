"""Structured models for the third-party payloads the providers consume."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from typing_extensions import Literal

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _year_of(date_text: Optional[str]) -> Optional[int]:
    if not date_text or len(date_text) < 4 or not date_text[:4].isdigit():
        return None
    return int(date_text[:4])


def parse_items(model: Type[ModelT], raw_items: Iterable[Any]) -> List[ModelT]:
    """Validate each raw item, silently dropping the malformed ones."""
    parsed: List[ModelT] = []
    for raw in raw_items or []:
        try:
            parsed.append(model.model_validate(raw))
        except ValidationError as exc:
            logger.debug("Discarding malformed %s: %s", model.__name__, exc.errors()[:1])
    return parsed


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# Open Trivia DB ---------------------------------------------------------------


class OpenTriviaItem(_Payload):
    category: str = ""
    type: str = "multiple"
    difficulty: Literal["easy", "medium", "hard"]
    question: str = Field(min_length=1)
    correct_answer: str = Field(min_length=1)
    incorrect_answers: List[str] = Field(min_length=1)


class OpenTriviaResponse(_Payload):
    response_code: int
    results: List[Any] = Field(default_factory=list)


# iTunes Search ----------------------------------------------------------------


class ItunesTrack(_Payload):
    track_id: int = Field(alias="trackId")
    artist_name: str = Field(alias="artistName", min_length=1)
    track_name: str = Field(alias="trackName", min_length=1)
    collection_name: Optional[str] = Field(default=None, alias="collectionName")
    preview_url: Optional[str] = Field(default=None, alias="previewUrl")
    release_date: Optional[str] = Field(default=None, alias="releaseDate")
    kind: Optional[str] = None

    @property
    def release_year(self) -> Optional[int]:
        return _year_of(self.release_date)


class ItunesSearchResponse(_Payload):
    result_count: int = Field(default=0, alias="resultCount")
    results: List[Any] = Field(default_factory=list)


# TMDB discover ----------------------------------------------------------------


class TmdbMovie(_Payload):
    id: int
    title: str = Field(min_length=1)
    release_date: Optional[str] = None
    poster_path: Optional[str] = None
    vote_count: int = 0

    @property
    def release_year(self) -> Optional[int]:
        return _year_of(self.release_date)


class TmdbDiscoverResponse(_Payload):
    page: int = 1
    total_pages: int = 1
    results: List[Any] = Field(default_factory=list)


# REST Countries ---------------------------------------------------------------


class CountryName(_Payload):
    common: str = Field(min_length=1)


class CountryFlags(_Payload):
    png: Optional[str] = None
    svg: Optional[str] = None


class RestCountry(_Payload):
    name: CountryName
    flags: CountryFlags = Field(default_factory=CountryFlags)
    capital: List[str] = Field(default_factory=list)
    population: int = 0

    @property
    def flag_url(self) -> Optional[str]:
        return self.flags.png or self.flags.svg

    @property
    def primary_capital(self) -> Optional[str]:
        return self.capital[0] if self.capital else None


# TheSportsDB ------------------------------------------------------------------


class SportsDbTeam(_Payload):
    name: str = Field(alias="strTeam")
    badge: Optional[str] = Field(default=None, alias="strBadge")
    team_badge: Optional[str] = Field(default=None, alias="strTeamBadge")

    @property
    def badge_url(self) -> Optional[str]:
        return self.badge or self.team_badge


class SportsDbSearchResponse(_Payload):
    teams: Optional[List[Any]] = None
