"""Core dataclasses and enums representing the Trivia Night domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class CategoryKind(str, Enum):
    """Which provider family serves a category."""

    GENERIC = "generic"
    MUSIC = "music"
    GEOGRAPHY = "geography"
    MOVIE_POSTER = "movie_poster"
    FOOTBALL_CAREER = "football_career"


class QuestionType(str, Enum):
    TEXT = "text"
    MULTIPLE = "multiple"
    MUSIC = "music"
    HONOR_SYSTEM = "honor-system"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    HONOR_SYSTEM = "honor-system"


class MediaType(str, Enum):
    TEXT = "text"
    AUDIO = "audio"
    IMAGE = "image"
    IMAGE_SEQUENCE = "image_sequence"
    TEXT_SEQUENCE = "text_sequence"


class GamePhase(str, Enum):
    SETUP = "setup"
    CATEGORY_SELECT = "category_select"
    LOADING = "loading"
    BOARD = "board"
    QUESTION = "question"
    GAME_OVER = "game_over"


class UnknownCategoryError(ValueError):
    """Raised when a category id does not map to any provider family."""


POINT_VALUES: Tuple[int, ...] = (200, 400, 600, 800, 1000)
QUESTIONS_PER_CATEGORY = len(POINT_VALUES)

MIN_PLAYERS = 1
MAX_PLAYERS = 4
MIN_CATEGORIES = 1
MAX_CATEGORIES = 6

CHOICE_QUESTION_TYPES = (QuestionType.TEXT, QuestionType.MULTIPLE)
HONOR_QUESTION_TYPES = (QuestionType.MUSIC, QuestionType.HONOR_SYSTEM)

DEFAULT_TIMER_SECONDS: Dict[MediaType, int] = {
    MediaType.TEXT: 20,
    MediaType.IMAGE: 15,
    MediaType.AUDIO: 30,
    MediaType.IMAGE_SEQUENCE: 30,
    MediaType.TEXT_SEQUENCE: 30,
}

ANIMAL_PLAYERS: List[Dict[str, str]] = [
    {"name": "Fox", "avatar": "🦊"},
    {"name": "Lion", "avatar": "🦁"},
    {"name": "Panda", "avatar": "🐼"},
    {"name": "Koala", "avatar": "🐨"},
]

# Exact ids first, then prefixes.
_KIND_BY_ID: Dict[str, CategoryKind] = {
    "mov_posters": CategoryKind.MOVIE_POSTER,
    "football_career": CategoryKind.FOOTBALL_CAREER,
}
_KIND_BY_PREFIX: List[Tuple[str, CategoryKind]] = [
    ("otdb_", CategoryKind.GENERIC),
    ("music_", CategoryKind.MUSIC),
    ("geo_", CategoryKind.GEOGRAPHY),
]


def resolve_kind(category_id: str) -> CategoryKind:
    """Map a category id onto its provider family."""
    if category_id in _KIND_BY_ID:
        return _KIND_BY_ID[category_id]
    for prefix, kind in _KIND_BY_PREFIX:
        if category_id.startswith(prefix):
            return kind
    raise UnknownCategoryError(f"No provider handles category '{category_id}'.")


@dataclass(frozen=True)
class TriviaCategory:
    id: str
    name: str
    emoji: str
    kind: CategoryKind
    source_id: Optional[int] = None
    decade: Optional[Tuple[int, int]] = None
    variant: Optional[str] = None

    @classmethod
    def create(cls, category_id: str, name: str, emoji: str, **params: Any) -> "TriviaCategory":
        return cls(id=category_id, name=name, emoji=emoji, kind=resolve_kind(category_id), **params)

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "emoji": self.emoji,
            "kind": self.kind.value,
            "source_id": self.source_id,
            "decade": list(self.decade) if self.decade else None,
            "variant": self.variant,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TriviaCategory":
        decade = data.get("decade")
        return cls(
            id=data["id"],
            name=data["name"],
            emoji=data.get("emoji", ""),
            kind=resolve_kind(data["id"]),
            source_id=data.get("source_id"),
            decade=(int(decade[0]), int(decade[1])) if decade else None,
            variant=data.get("variant"),
        )


@dataclass
class AnswerReveal:
    title: str
    artist: str = ""
    year: Optional[int] = None

    def to_dict(self) -> Dict[str, object]:
        return {"title": self.title, "artist": self.artist, "year": self.year}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnswerReveal":
        return cls(title=data["title"], artist=data.get("artist", ""), year=data.get("year"))


@dataclass
class ProcessedQuestion:
    """Uniform question shape produced by every provider."""

    id: str
    category: str
    type: QuestionType
    difficulty: Difficulty
    media_type: MediaType
    question: str
    correct_answer: str = ""
    incorrect_answers: List[str] = field(default_factory=list)
    all_answers: List[str] = field(default_factory=list)
    point_value: int = 0
    is_answered: bool = False
    audio_url: Optional[str] = None
    image_url: Optional[str] = None
    image_urls: List[str] = field(default_factory=list)
    club_list: List[str] = field(default_factory=list)
    info_text: Optional[str] = None
    timer_duration: Optional[int] = None
    answer_reveal: Optional[AnswerReveal] = None
    history_key: Optional[str] = None
    strict_scoring: bool = False
    popularity: Optional[float] = None

    @property
    def is_multiple_choice(self) -> bool:
        return self.type in CHOICE_QUESTION_TYPES

    @property
    def effective_timer(self) -> int:
        if self.timer_duration:
            return self.timer_duration
        return DEFAULT_TIMER_SECONDS.get(self.media_type, 20)

    def mark_answered(self) -> None:
        self.is_answered = True

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "category": self.category,
            "type": self.type.value,
            "difficulty": self.difficulty.value,
            "media_type": self.media_type.value,
            "question": self.question,
            "correct_answer": self.correct_answer,
            "incorrect_answers": list(self.incorrect_answers),
            "all_answers": list(self.all_answers),
            "point_value": self.point_value,
            "is_answered": self.is_answered,
            "audio_url": self.audio_url,
            "image_url": self.image_url,
            "image_urls": list(self.image_urls),
            "club_list": list(self.club_list),
            "info_text": self.info_text,
            "timer_duration": self.timer_duration,
            "answer_reveal": self.answer_reveal.to_dict() if self.answer_reveal else None,
            "history_key": self.history_key,
            "strict_scoring": self.strict_scoring,
            "popularity": self.popularity,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProcessedQuestion":
        reveal = data.get("answer_reveal")
        return cls(
            id=data["id"],
            category=data["category"],
            type=QuestionType(data["type"]),
            difficulty=Difficulty(data["difficulty"]),
            media_type=MediaType(data["media_type"]),
            question=data["question"],
            correct_answer=data.get("correct_answer", ""),
            incorrect_answers=list(data.get("incorrect_answers", [])),
            all_answers=list(data.get("all_answers", [])),
            point_value=int(data.get("point_value", 0)),
            is_answered=bool(data.get("is_answered", False)),
            audio_url=data.get("audio_url"),
            image_url=data.get("image_url"),
            image_urls=list(data.get("image_urls", [])),
            club_list=list(data.get("club_list", [])),
            info_text=data.get("info_text"),
            timer_duration=data.get("timer_duration"),
            answer_reveal=AnswerReveal.from_dict(reveal) if reveal else None,
            history_key=data.get("history_key"),
            strict_scoring=bool(data.get("strict_scoring", False)),
            popularity=data.get("popularity"),
        )


@dataclass
class CategoryColumn:
    title: str
    questions: List[ProcessedQuestion] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return all(question.is_answered for question in self.questions)

    def to_dict(self) -> Dict[str, object]:
        return {
            "title": self.title,
            "questions": [question.to_dict() for question in self.questions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CategoryColumn":
        return cls(
            title=data["title"],
            questions=[ProcessedQuestion.from_dict(item) for item in data.get("questions", [])],
        )


@dataclass
class Player:
    id: int
    name: str
    avatar: str
    score: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {"id": self.id, "name": self.name, "avatar": self.avatar, "score": self.score}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        return cls(
            id=int(data["id"]),
            name=data["name"],
            avatar=data.get("avatar", ""),
            score=int(data.get("score", 0)),
        )


@dataclass
class GameSession:
    phase: GamePhase = GamePhase.SETUP
    players: List[Player] = field(default_factory=list)
    columns: List[CategoryColumn] = field(default_factory=list)
    selected_categories: List[TriviaCategory] = field(default_factory=list)
    current_turn: int = 0
    active_question_id: Optional[str] = None
    question_started_at: Optional[float] = None
    answer_revealed: bool = False
    last_delta: Optional[int] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "phase": self.phase.value,
            "players": [player.to_dict() for player in self.players],
            "columns": [column.to_dict() for column in self.columns],
            "selected_categories": [category.to_dict() for category in self.selected_categories],
            "current_turn": self.current_turn,
            "active_question_id": self.active_question_id,
            "question_started_at": self.question_started_at,
            "answer_revealed": self.answer_revealed,
            "last_delta": self.last_delta,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameSession":
        return cls(
            phase=GamePhase(data.get("phase", GamePhase.SETUP.value)),
            players=[Player.from_dict(item) for item in data.get("players", [])],
            columns=[CategoryColumn.from_dict(item) for item in data.get("columns", [])],
            selected_categories=[TriviaCategory.from_dict(item) for item in data.get("selected_categories", [])],
            current_turn=int(data.get("current_turn", 0)),
            active_question_id=data.get("active_question_id"),
            question_started_at=data.get("question_started_at"),
            answer_revealed=bool(data.get("answer_revealed", False)),
            last_delta=data.get("last_delta"),
        )
