"""Streamlit screens before the board: player count and category choice."""

from __future__ import annotations

from typing import Dict, List

import streamlit as st

from models import ANIMAL_PLAYERS, MAX_CATEGORIES, MAX_PLAYERS, MIN_PLAYERS
from services.catalog import AVAILABLE_CATEGORIES, categories_for
from services.game_service import GameService, GameStateError
from services.trivia_service import reset_played_tracks
from storage.history_repository import HistoryStore
from ui import common

# The board looks empty below four columns.
MIN_SELECTION = 4
GRID_COLUMNS = 4


class SetupFlow:
    STATE_KEY = "setup_flow"

    def __init__(self, history: HistoryStore) -> None:
        self.history = history

    @staticmethod
    def _default_state() -> Dict[str, object]:
        return {
            "player_count": 1,
            "selected_ids": [],
        }

    def reset(self) -> None:
        common.reset_flow_state(self.STATE_KEY, defaults=self._default_state())

    @property
    def state(self) -> Dict[str, object]:
        return common.get_flow_state(self.STATE_KEY, defaults=self._default_state())

    def render_players(self, game: GameService) -> None:
        state = self.state
        st.subheader("Select contenders")
        count = st.slider(
            "Number of players",
            min_value=MIN_PLAYERS,
            max_value=MAX_PLAYERS,
            value=int(state["player_count"]),
        )
        state["player_count"] = count
        st.write(" ".join(animal["avatar"] for animal in ANIMAL_PLAYERS[:count]))
        if st.button("Next", key="setup_players_next"):
            try:
                game.setup_players(count)
            except GameStateError as exc:
                st.error(str(exc))
            else:
                common.rerun()

    def render_categories(self, game: GameService) -> None:
        state = self.state
        selected: List[str] = list(state["selected_ids"])
        st.subheader("Choose your categories")
        st.caption(f"{len(selected)} / {MAX_CATEGORIES} selected (minimum {MIN_SELECTION})")

        columns = st.columns(GRID_COLUMNS)
        for index, category in enumerate(AVAILABLE_CATEGORIES):
            is_selected = category.id in selected
            label = f"{'✅ ' if is_selected else ''}{category.emoji} {category.name}"
            if columns[index % GRID_COLUMNS].button(label, key=f"category_{category.id}", use_container_width=True):
                if is_selected:
                    selected.remove(category.id)
                elif len(selected) < MAX_CATEGORIES:
                    selected.append(category.id)
                state["selected_ids"] = selected
                common.rerun()

        is_valid = MIN_SELECTION <= len(selected) <= MAX_CATEGORIES
        col_back, col_reset, col_start = st.columns(3)
        if col_back.button("Back", key="categories_back"):
            game.back_to_setup()
            common.rerun()
        if col_reset.button("Reset played history", key="categories_reset_history"):
            reset_played_tracks(self.history)
            st.success("Played history cleared. Old questions may come back.")
        if col_start.button("Begin game", key="categories_start", disabled=not is_valid):
            # Keep selection order: it is the column order on the board.
            game.begin_loading(categories_for(selected))
            common.rerun()
