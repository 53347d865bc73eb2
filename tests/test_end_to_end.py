import httpx
import pytest

from config import AppConfig
from models import POINT_VALUES, CategoryKind, GamePhase, MediaType
from services.catalog import categories_for
from services.game_service import FULL_CREDIT, GameService
from services.providers.football import SPORTSDB_SEARCH_URL
from services.providers.geography import REST_COUNTRIES_URL
from services.providers.movie_posters import TMDB_DISCOVER_URL
from services.providers.music import ITUNES_SEARCH_URL
from services.providers.open_trivia import OPEN_TRIVIA_URL
from services.round_assembler import RoundAssembler
from services.trivia_service import GameDataPipeline, build_providers

CATEGORY_IDS = ["otdb_general", "geo_flags", "mov_posters", "football_career"]


def open_trivia_payload(difficulties=("easy", "easy", "medium", "medium", "hard", "hard", "easy")):
    results = []
    for index, difficulty in enumerate(difficulties):
        results.append(
            {
                "type": "multiple",
                "difficulty": difficulty,
                "question": f"Trivia question number {index}?",
                "correct_answer": f"Right {index}",
                "incorrect_answers": ["Wrong A", "Wrong B", "Wrong C"],
            }
        )
    return {"response_code": 0, "results": results}


def countries_payload(populations=(150_000_000, 80_000_000, 9_000_000, 6_000_000, 1_000_000, 300_000)):
    return [
        {
            "name": {"common": f"Country {index}"},
            "flags": {"png": f"https://flags.example/{index}.png"},
            "capital": [f"Capital {index}"],
            "population": population,
        }
        for index, population in enumerate(populations)
    ]


def movies_payload(count=6):
    return {
        "results": [
            {
                "id": 500 + index,
                "title": f"Blockbuster {index}",
                "release_date": f"{1990 + index}-07-04",
                "poster_path": f"/bb{index}.jpg",
                "vote_count": 2000 * (index + 1),
            }
            for index in range(count)
        ]
    }


def badge_handler(request):
    name = request.url.params["t"]
    return httpx.Response(200, json={"teams": [{"strTeam": name, "strBadge": f"https://badges.example/{name}.png"}]})


@pytest.fixture
def fake_world(api):
    api.add_json(OPEN_TRIVIA_URL, open_trivia_payload())
    api.add_json(REST_COUNTRIES_URL, countries_payload())
    api.add_json(TMDB_DISCOVER_URL, movies_payload())
    api.add(SPORTSDB_SEARCH_URL.format(api_key="3"), badge_handler)
    return api


@pytest.mark.asyncio
async def test_four_categories_become_a_playable_board(fake_world, client, history, rng, fake_sleep):
    config = AppConfig(tmdb_api_key="tmdb-key")
    assembler = RoundAssembler(build_providers(client, history, config, rng), history)
    pipeline = GameDataPipeline(assembler, delay_seconds=0.5, sleep=fake_sleep)
    categories = categories_for(CATEGORY_IDS)

    columns = await pipeline.fetch_game_data(categories)

    assert [column.title for column in columns] == [category.name for category in categories]
    for column in columns:
        assert [question.point_value for question in column.questions] == list(POINT_VALUES)
    question_ids = [question.id for column in columns for question in column.questions]
    assert len(set(question_ids)) == 20
    assert len(history.get_played()) == 20
    assert all(question.media_type == MediaType.IMAGE_SEQUENCE for question in columns[3].questions)

    service = GameService()
    service.setup_players(2)
    service.begin_loading(categories)
    service.load_board(columns)

    for played, question_id in enumerate(question_ids, start=1):
        question = service.select_question(question_id, now=0.0)
        if question.is_multiple_choice:
            service.choose_answer(question.correct_answer)
        else:
            service.reveal_answer()
            service.submit_answer(FULL_CREDIT)
        if played < len(question_ids):
            assert service.phase == GamePhase.BOARD
    assert service.phase == GamePhase.GAME_OVER

    total = sum(POINT_VALUES) * 4
    assert sum(player.score for player in service.session.players) == total
    assert service.rankings()[0].score >= service.rankings()[1].score


@pytest.mark.asyncio
async def test_missing_tmdb_key_drops_only_that_category(fake_world, client, history, rng, fake_sleep):
    assembler = RoundAssembler(build_providers(client, history, AppConfig(), rng), history)
    pipeline = GameDataPipeline(assembler, sleep=fake_sleep)

    columns = await pipeline.fetch_game_data(categories_for(CATEGORY_IDS))

    assert [column.title for column in columns] == ["General", "Flags", "Career Paths"]


ARTISTS = ["Madonna", "Prince", "Toto", "Eurythmics", "Blondie"]
CAREERS = [
    {"player": f"Striker {tier}", "tier": tier, "clubs": [f"Club {tier}A", f"Club {tier}B"]} for tier in range(1, 6)
]


def itunes_handler(request):
    artist = request.url.params["term"]
    track_id = 900 + ARTISTS.index(artist)
    result = {
        "trackId": track_id,
        "artistName": artist,
        "trackName": f"{artist} Anthem",
        "collectionName": "Greatest Hits",
        "releaseDate": "1985-05-01T07:00:00Z",
        "kind": "song",
        "previewUrl": f"https://audio.example/{track_id}.m4a",
    }
    return httpx.Response(200, json={"resultCount": 1, "results": [result]})


@pytest.mark.asyncio
async def test_every_provider_fills_a_column_from_exactly_five_candidates(api, client, history, rng, fake_sleep):
    api.add_json(OPEN_TRIVIA_URL, open_trivia_payload(("easy", "easy", "medium", "medium", "hard")))
    api.add_json(REST_COUNTRIES_URL, countries_payload((150_000_000, 80_000_000, 9_000_000, 6_000_000, 1_000_000)))
    api.add_json(TMDB_DISCOVER_URL, movies_payload(count=5))
    api.add(SPORTSDB_SEARCH_URL.format(api_key="3"), badge_handler)
    api.add(ITUNES_SEARCH_URL, itunes_handler)

    providers = build_providers(client, history, AppConfig(tmdb_api_key="tmdb-key"), rng)
    providers[CategoryKind.MUSIC].seeds = {"music_80s": list(ARTISTS)}
    providers[CategoryKind.FOOTBALL_CAREER].careers = CAREERS
    pipeline = GameDataPipeline(RoundAssembler(providers, history), sleep=fake_sleep)
    categories = categories_for(["otdb_general", "music_80s", "geo_flags", "mov_posters", "football_career"])

    columns = await pipeline.fetch_game_data(categories)

    assert [column.title for column in columns] == ["General", "80s Hits", "Flags", "Movie Years", "Career Paths"]
    for column in columns:
        assert [question.point_value for question in column.questions] == list(POINT_VALUES)
    assert {question.answer_reveal.artist for question in columns[1].questions} == set(ARTISTS)
    assert all(question.media_type == MediaType.AUDIO for question in columns[1].questions)
    question_ids = [question.id for column in columns for question in column.questions]
    assert len(set(question_ids)) == 25
    assert len(api.calls_to("itunes.apple.com")) == 5

    service = GameService()
    service.setup_players(2)
    service.begin_loading(categories)
    service.load_board(columns)
    for question_id in question_ids:
        question = service.select_question(question_id, now=0.0)
        if question.is_multiple_choice:
            service.choose_answer(question.correct_answer)
        else:
            service.reveal_answer()
            service.submit_answer(FULL_CREDIT)
    assert service.phase == GamePhase.GAME_OVER
    assert sum(player.score for player in service.session.players) == sum(POINT_VALUES) * 5
