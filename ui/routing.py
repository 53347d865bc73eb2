"""Streamlit router: picks the screen for the current game phase."""

from __future__ import annotations

import asyncio
import logging
from textwrap import dedent

import streamlit as st

from config import AppConfig
from models import GamePhase
from services.game_service import GameService, NoPlayableCategoriesError
from services.trivia_service import fetch_game_data
from ui import common
from ui.game_flow import GameFlow
from ui.setup_flow import SetupFlow

logger = logging.getLogger(__name__)


class Router:
    RULES_SUMMARY = dedent(
        """
        ### How to play
        - Pick up to four animals and between four and six categories.
        - Players take turns choosing a tile from the board. Bigger tiles are harder.
        - **Multiple choice**: press the coloured button of your answer before the timer runs out.
        - **Music, movie soundtracks & career paths**: shout your guess, reveal the answer,
          then score yourself honestly: 100%, 50% (half right) or 0%.

        ### Scoring
        - Full credit wins the tile value, half credit wins half of it.
        - A wrong answer or an expired timer costs the full tile value.
        - The game ends once every tile is played. Highest score wins.
        """
    ).strip()

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.history = common.shared_history(str(config.history_path))
        self.game_service: GameService = common.get_game_service()
        self.setup_flow = SetupFlow(self.history)
        self.game_flow = GameFlow(self.game_service)

    def render(self) -> None:
        st.title("Trivia Night 🎲")
        common.style_buttons()
        phase = self.game_service.phase
        if phase == GamePhase.SETUP:
            self.setup_flow.render_players(self.game_service)
            with st.expander(":arrow_down: Game rules", expanded=False):
                st.markdown(self.RULES_SUMMARY)
        elif phase == GamePhase.CATEGORY_SELECT:
            self.setup_flow.render_categories(self.game_service)
        elif phase == GamePhase.LOADING:
            self._render_loading()
        elif phase in (GamePhase.BOARD, GamePhase.QUESTION):
            self.game_flow.render()
        elif phase == GamePhase.GAME_OVER:
            if self.game_flow.render_game_over():
                self.setup_flow.reset()
                common.rerun()
        else:
            st.warning("Unknown screen. Starting over.")
            self.game_service.restart()
            common.rerun()

    def _render_loading(self) -> None:
        categories = self.game_service.session.selected_categories
        with st.spinner("Loading game data, hang tight..."):
            columns = asyncio.run(fetch_game_data(categories, history=self.history, config=self.config))
        try:
            self.game_service.load_board(columns)
        except NoPlayableCategoriesError as exc:
            logger.warning("No playable categories among %s", [category.id for category in categories])
            st.error(str(exc))
            if st.button("Back to categories", key="loading_back"):
                common.rerun()
            return
        common.rerun()


def run(config: AppConfig) -> None:
    Router(config).render()
