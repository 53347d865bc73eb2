import logging

import streamlit as st
from dotenv import load_dotenv


from config import load_config
from ui import routing

load_dotenv()


def main() -> None:
    config = load_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    st.set_page_config(
        page_title="Trivia Night",
        page_icon="🎲",
        layout="wide",
    )
    routing.run(config)


if __name__ == "__main__":
    main()
