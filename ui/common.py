"""Streamlit helpers shared between the setup and game flows."""

from __future__ import annotations

from pathlib import Path
from threading import Lock
from typing import Any, Dict, List

import streamlit as st
from streamlit.components.v1 import html as components_html

from models import Player
from services.game_service import GameService
from storage.history_repository import JsonHistoryStore

GAME_SERVICE_KEY = "game_service"


def get_flow_state(key: str, *, defaults: Dict[str, Any]) -> Dict[str, Any]:
    """Returns a mutable dict stored in session_state under ``key``."""
    if key not in st.session_state:
        st.session_state[key] = defaults.copy()
    return st.session_state[key]


def reset_flow_state(key: str, *, defaults: Dict[str, Any]) -> None:
    st.session_state[key] = defaults.copy()


def rerun() -> None:
    """Trigger a Streamlit rerun while supporting older versions."""
    rerun_fn = getattr(st, "rerun", None)
    if callable(rerun_fn):
        rerun_fn()
    else:
        getattr(st, "experimental_rerun")()


def get_game_service() -> GameService:
    if GAME_SERVICE_KEY not in st.session_state:
        st.session_state[GAME_SERVICE_KEY] = GameService()
    return st.session_state[GAME_SERVICE_KEY]


@st.cache_resource(show_spinner=False)  # type: ignore[arg-type]
def _shared_history_lock() -> Lock:
    return Lock()


@st.cache_resource(show_spinner=False)  # type: ignore[arg-type]
def shared_history(storage_path: str) -> JsonHistoryStore:
    return JsonHistoryStore(Path(storage_path), lock=_shared_history_lock())


def format_points(value: int) -> str:
    """Dollar amount with the sign escaped so markdown never reads it as inline math."""
    sign = "-" if value < 0 else ""
    return f"{sign}\\${abs(value)}"


def show_scoreboard(players: List[Player], current_turn: int) -> None:
    st.markdown("### Scoreboard")
    with st.container(border=True):
        columns = st.columns(max(len(players), 1))
        for index, player in enumerate(players):
            marker = " 👉" if index == current_turn else ""
            columns[index].markdown(f"**{player.avatar} {player.name}**{marker}  \n{format_points(player.score)}")


def style_buttons() -> None:
    """Paint the four answer buttons in the remote-control colours."""
    components_html(
        """
        <script>
        (function() {
          const root = window.parent?.document;
          if (!root) return;
          const colours = {
            'red': '#e53935',
            'green': '#43a047',
            'yellow': '#fdd835',
            'blue': '#1e88e5',
          };
          const paint = () => {
            const buttons = root.querySelectorAll('button');
            buttons.forEach((btn) => {
              const label = btn.innerText.replace(/\\s+/g, ' ').trim().toLowerCase();
              if (!label) return;
              let bg = '';
              for (const [name, colour] of Object.entries(colours)) {
                if (label.startsWith(name + ' ·')) {
                  bg = colour;
                }
              }
              if (!bg && (label.includes('play again') || label.includes('begin game'))) {
                bg = colours.blue;
              } else if (!bg && label.includes('reveal')) {
                bg = '#a73ac9';
              }
              if (bg) {
                btn.style.backgroundColor = bg;
                btn.style.borderColor = bg;
                btn.style.color = bg === colours.yellow ? '#000000' : '#ffffff';
              }
            });
          };
          const key = '__trivia_button_observer';
          if (root[key]) {
            try { root[key].disconnect(); } catch (err) {}
          }
          const observer = new MutationObserver(() => paint());
          observer.observe(root.body, { childList: true, subtree: true });
          root[key] = observer;
          setTimeout(paint, 0);
        })();
        </script>
        """,
        height=0,
    )
