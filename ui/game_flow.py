"""Streamlit implementation of the board, question and podium screens."""

from __future__ import annotations

from typing import List

import streamlit as st
from streamlit_autorefresh import st_autorefresh

from models import GamePhase, MediaType, Player, ProcessedQuestion
from services.game_service import FULL_CREDIT, HALF_CREDIT, GameService, GameStateError
from ui import common

ANSWER_COLOURS = ("Red", "Green", "Yellow", "Blue")
MULTIPLIER_LABELS = {
    FULL_CREDIT: "✅ 100%",
    HALF_CREDIT: "🌓 50%",
}
MEDALS = ("🥇", "🥈", "🥉")


def standings_lines(rankings: List[Player]) -> List[str]:
    lines: List[str] = []
    for index, player in enumerate(rankings):
        medal = MEDALS[index] if index < len(MEDALS) else f"{index + 1}."
        lines.append(f"{medal} {player.avatar} **{player.name}**: {common.format_points(player.score)}")
    return lines


class GameFlow:
    def __init__(self, game_service: GameService) -> None:
        self.game_service = game_service

    def render(self) -> None:
        session = self.game_service.session
        common.show_scoreboard(session.players, session.current_turn)
        if session.last_delta is not None:
            sign = "+" if session.last_delta >= 0 else ""
            st.caption(f"Last tile: {sign}{session.last_delta}")

        if self.game_service.phase == GamePhase.QUESTION:
            self._render_question()
        else:
            self._render_board()

    # ------------------------------------------------------------------ #
    # Board
    # ------------------------------------------------------------------ #
    def _render_board(self) -> None:
        session = self.game_service.session
        player = self.game_service.current_player
        if player:
            st.info(f"**{player.avatar} {player.name}**, pick a tile!")

        columns = st.columns(len(session.columns))
        for col, column in zip(columns, session.columns):
            col.markdown(f"**{column.title}**")
            for question in column.questions:
                clicked = col.button(
                    common.format_points(question.point_value),
                    key=f"tile_{question.id}",
                    disabled=question.is_answered,
                    use_container_width=True,
                )
                if clicked:
                    self._act(lambda q=question: self.game_service.select_question(q.id))

    # ------------------------------------------------------------------ #
    # Question
    # ------------------------------------------------------------------ #
    def _render_question(self) -> None:
        service = self.game_service
        question = service.active_question
        if question is None:
            return

        revealed = service.session.answer_revealed
        if not revealed:
            st_autorefresh(interval=1000, key=f"question_timer_{question.id}")
            service.tick()
            if service.phase != GamePhase.QUESTION:
                st.warning("Time's up!")
                common.rerun()
                return
            revealed = service.session.answer_revealed

        remaining = int(service.remaining_time())
        st.markdown(f"### {question.category} · {common.format_points(question.point_value)}")
        st.progress(remaining / question.effective_timer, text=f"⏱️ {remaining}s")
        st.subheader(question.question)
        self._render_media(question, revealed)

        if question.is_multiple_choice:
            self._render_choices(question)
        else:
            self._render_honor_scoring(question, revealed)

    def _render_media(self, question: ProcessedQuestion, revealed: bool) -> None:
        if question.media_type == MediaType.AUDIO and question.audio_url and not revealed:
            st.audio(question.audio_url, autoplay=True)
        elif question.media_type == MediaType.IMAGE and question.image_url:
            st.image(question.image_url, width=320)
        elif question.media_type == MediaType.IMAGE_SEQUENCE and question.image_urls:
            cells = st.columns(len(question.image_urls))
            for cell, url, club in zip(cells, question.image_urls, question.club_list):
                cell.image(url, caption=club, width=96)
        if question.media_type in (MediaType.TEXT_SEQUENCE, MediaType.IMAGE_SEQUENCE) and question.club_list:
            st.markdown(" ➡️ ".join(question.club_list))
        if question.info_text:
            st.caption(question.info_text)

    def _render_choices(self, question: ProcessedQuestion) -> None:
        columns = st.columns(2)
        for index, answer in enumerate(question.all_answers):
            colour = ANSWER_COLOURS[index % len(ANSWER_COLOURS)]
            if columns[index % 2].button(
                f"{colour} · {answer}", key=f"answer_{question.id}_{index}", use_container_width=True
            ):
                self._act(lambda a=answer: self.game_service.choose_answer(a))

    def _render_honor_scoring(self, question: ProcessedQuestion, revealed: bool) -> None:
        if not revealed:
            if st.button("Reveal answer", key=f"reveal_{question.id}"):
                self._act(self.game_service.reveal_answer)
            return

        reveal = question.answer_reveal
        if reveal:
            line = f"**{reveal.title}**"
            if reveal.artist:
                line += f" by {reveal.artist}"
            if reveal.year:
                line += f" ({reveal.year})"
            st.success(line)

        multipliers = sorted(self.game_service.allowed_multipliers(question), reverse=True)
        columns = st.columns(len(multipliers))
        for col, multiplier in zip(columns, multipliers):
            label = MULTIPLIER_LABELS.get(multiplier, "❌ 0%")
            if col.button(label, key=f"score_{question.id}_{multiplier}", use_container_width=True):
                self._act(lambda m=multiplier: self.game_service.submit_answer(m))

    # ------------------------------------------------------------------ #
    # Podium
    # ------------------------------------------------------------------ #
    def render_game_over(self) -> bool:
        """Show the final standings; returns True once players restart."""
        st.balloons()
        st.subheader("Final standings")
        st.markdown("  \n".join(standings_lines(self.game_service.rankings())))
        if st.button("Play again", key="game_over_restart"):
            self.game_service.restart()
            return True
        return False

    def _act(self, action) -> None:
        try:
            action()
        except GameStateError as exc:
            st.error(str(exc))
            return
        common.rerun()
