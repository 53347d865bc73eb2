"""Turn and scoring state machine driving a game from setup to the podium."""

from __future__ import annotations

import logging
import time
from typing import List, Optional, Sequence, Tuple

from models import (
    ANIMAL_PLAYERS,
    HONOR_QUESTION_TYPES,
    MAX_CATEGORIES,
    MAX_PLAYERS,
    MIN_CATEGORIES,
    MIN_PLAYERS,
    CategoryColumn,
    GamePhase,
    GameSession,
    Player,
    ProcessedQuestion,
    TriviaCategory,
)

logger = logging.getLogger(__name__)

FULL_CREDIT = 1.0
HALF_CREDIT = 0.5
NO_CREDIT = 0.0


class GameStateError(Exception):
    """Base error for illegal moves in the game flow."""


class InvalidTransitionError(GameStateError):
    pass


class InvalidPlayerCountError(GameStateError):
    pass


class QuestionNotFoundError(GameStateError):
    pass


class QuestionAlreadyAnsweredError(GameStateError):
    pass


class InvalidMultiplierError(GameStateError):
    pass


class AnswerNotRevealedError(GameStateError):
    pass


class NoPlayableCategoriesError(GameStateError):
    """Every selected category failed to load; the players should pick again."""


def score_delta(point_value: int, multiplier: float) -> int:
    """Points won or lost for a resolved question.

    A miss costs the full value. This mirrors the board's "0%" button, which
    some variants treated as "no change"; the deduction is kept on purpose.
    """
    if multiplier == FULL_CREDIT:
        return point_value
    if multiplier == HALF_CREDIT:
        return point_value // 2
    if multiplier == NO_CREDIT:
        return -point_value
    raise InvalidMultiplierError(f"Unsupported multiplier {multiplier!r}")


class GameService:
    """Owns one ``GameSession`` and every legal move on it."""

    def __init__(self, session: Optional[GameSession] = None) -> None:
        self.session = session or GameSession()

    # ------------------------------------------------------------------ #
    # Setup
    # ------------------------------------------------------------------ #
    @property
    def phase(self) -> GamePhase:
        return self.session.phase

    def setup_players(self, count: int) -> List[Player]:
        self._require(GamePhase.SETUP)
        if not MIN_PLAYERS <= count <= MAX_PLAYERS:
            raise InvalidPlayerCountError(f"Between {MIN_PLAYERS} and {MAX_PLAYERS} players can play.")
        self.session.players = [
            Player(id=index, name=animal["name"], avatar=animal["avatar"], score=0)
            for index, animal in enumerate(ANIMAL_PLAYERS[:count])
        ]
        self.session.phase = GamePhase.CATEGORY_SELECT
        return self.session.players

    def back_to_setup(self) -> None:
        self._require(GamePhase.CATEGORY_SELECT)
        self.session.players = []
        self.session.phase = GamePhase.SETUP

    def begin_loading(self, categories: Sequence[TriviaCategory]) -> None:
        self._require(GamePhase.CATEGORY_SELECT)
        if not MIN_CATEGORIES <= len(categories) <= MAX_CATEGORIES:
            raise InvalidTransitionError(f"Pick between {MIN_CATEGORIES} and {MAX_CATEGORIES} categories.")
        self.session.selected_categories = list(categories)
        self.session.phase = GamePhase.LOADING

    def load_board(self, columns: Sequence[CategoryColumn]) -> None:
        self._require(GamePhase.LOADING)
        if not columns:
            self.session.phase = GamePhase.CATEGORY_SELECT
            raise NoPlayableCategoriesError("No category could be loaded. Try again or pick other categories.")
        if len(columns) < len(self.session.selected_categories):
            logger.info("Starting with %s of %s categories", len(columns), len(self.session.selected_categories))
        self.session.columns = list(columns)
        self.session.current_turn = 0
        self.session.active_question_id = None
        self.session.phase = GamePhase.BOARD

    # ------------------------------------------------------------------ #
    # Board & questions
    # ------------------------------------------------------------------ #
    @property
    def current_player(self) -> Optional[Player]:
        if not self.session.players:
            return None
        return self.session.players[self.session.current_turn % len(self.session.players)]

    @property
    def active_question(self) -> Optional[ProcessedQuestion]:
        if not self.session.active_question_id:
            return None
        return self.find_question(self.session.active_question_id)

    def find_question(self, question_id: str) -> ProcessedQuestion:
        for column in self.session.columns:
            for question in column.questions:
                if question.id == question_id:
                    return question
        raise QuestionNotFoundError(f"No question with id {question_id}")

    def select_question(self, question_id: str, now: Optional[float] = None) -> ProcessedQuestion:
        self._require(GamePhase.BOARD)
        question = self.find_question(question_id)
        if question.is_answered:
            raise QuestionAlreadyAnsweredError(f"Question {question_id} was already played.")
        self.session.active_question_id = question.id
        self.session.question_started_at = now if now is not None else time.time()
        self.session.answer_revealed = False
        self.session.phase = GamePhase.QUESTION
        return question

    def allowed_multipliers(self, question: Optional[ProcessedQuestion] = None) -> Tuple[float, ...]:
        question = question or self._require_active()
        if question.is_multiple_choice or question.strict_scoring:
            return (NO_CREDIT, FULL_CREDIT)
        return (NO_CREDIT, HALF_CREDIT, FULL_CREDIT)

    def choose_answer(self, answer: str) -> int:
        question = self._require_active()
        if not question.is_multiple_choice:
            raise InvalidTransitionError("This question is scored by the players, not by picking an option.")
        multiplier = FULL_CREDIT if answer == question.correct_answer else NO_CREDIT
        return self.submit_answer(multiplier)

    def reveal_answer(self) -> None:
        question = self._require_active()
        if question.type not in HONOR_QUESTION_TYPES:
            raise InvalidTransitionError("Only honor-system questions have a manual reveal.")
        self.session.answer_revealed = True

    def submit_answer(self, multiplier: float) -> int:
        question = self._require_active()
        if question.type in HONOR_QUESTION_TYPES and not self.session.answer_revealed:
            raise AnswerNotRevealedError("Reveal the answer before scoring it.")
        if multiplier not in self.allowed_multipliers(question):
            raise InvalidMultiplierError(f"Multiplier {multiplier!r} is not allowed for this question.")

        delta = score_delta(question.point_value, multiplier)
        player = self.current_player
        if player is not None:
            player.score += delta
        question.mark_answered()

        self.session.last_delta = delta
        self.session.current_turn = (self.session.current_turn + 1) % max(len(self.session.players), 1)
        self.session.active_question_id = None
        self.session.question_started_at = None
        self.session.answer_revealed = False
        self.session.phase = GamePhase.BOARD
        if self.is_game_over():
            self.session.phase = GamePhase.GAME_OVER
        return delta

    # ------------------------------------------------------------------ #
    # Timers
    # ------------------------------------------------------------------ #
    def remaining_time(self, now: Optional[float] = None) -> float:
        question = self._require_active()
        started = self.session.question_started_at
        if started is None:
            return float(question.effective_timer)
        now = now if now is not None else time.time()
        return max(0.0, question.effective_timer - (now - started))

    def tick(self, now: Optional[float] = None) -> Optional[int]:
        """Handle timer expiry; returns the score delta if the question resolved."""
        if self.session.phase != GamePhase.QUESTION:
            return None
        if self.remaining_time(now) > 0:
            return None
        question = self._require_active()
        if question.is_multiple_choice:
            return self.submit_answer(NO_CREDIT)
        self.session.answer_revealed = True
        return None

    # ------------------------------------------------------------------ #
    # End of game
    # ------------------------------------------------------------------ #
    def is_game_over(self) -> bool:
        columns = self.session.columns
        return bool(columns) and all(column.is_complete for column in columns)

    def rankings(self) -> List[Player]:
        return sorted(self.session.players, key=lambda player: player.score, reverse=True)

    def restart(self) -> GameSession:
        self.session = GameSession()
        return self.session

    # ------------------------------------------------------------------ #
    # Guards
    # ------------------------------------------------------------------ #
    def _require(self, *phases: GamePhase) -> None:
        if self.session.phase not in phases:
            expected = ", ".join(phase.value for phase in phases)
            raise InvalidTransitionError(f"Expected phase {expected}, game is in {self.session.phase.value}.")

    def _require_active(self) -> ProcessedQuestion:
        self._require(GamePhase.QUESTION)
        question = self.active_question
        if question is None:
            raise InvalidTransitionError("No question is active.")
        return question
