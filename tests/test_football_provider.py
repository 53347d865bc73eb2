import httpx
import pytest

from models import Difficulty, MediaType, QuestionType
from services.catalog import get_category
from services.providers.football import SPORTSDB_SEARCH_URL, FootballCareerProvider, nearest_tiers

CAREERS = get_category("football_career")
SEARCH_URL = SPORTSDB_SEARCH_URL.format(api_key="3")

SAMPLE_CAREERS = [
    {"player": "Tier One A", "tier": 1, "clubs": ["Club A", "Club B"]},
    {"player": "Tier One B", "tier": 1, "clubs": ["Club C"]},
    {"player": "Tier Three A", "tier": 3, "clubs": ["Club D"]},
    {"player": "Tier Three B", "tier": 3, "clubs": ["Club E"]},
    {"player": "Tier Three C", "tier": 3, "clubs": ["Club F"]},
    {"player": "", "tier": 2, "clubs": ["Club G"]},
    {"player": "No Clubs", "tier": 2, "clubs": []},
    {"player": "Bad Tier", "tier": 9, "clubs": ["Club H"]},
]


def serve_badges(api, missing=()):
    def _handler(request: httpx.Request) -> httpx.Response:
        name = request.url.params["t"]
        if name in missing:
            return httpx.Response(200, json={"teams": None})
        return httpx.Response(
            200,
            json={
                "teams": [
                    {"strTeam": f"{name} Reserves", "strBadge": "https://badges.example/wrong.png"},
                    {"strTeam": name, "strBadge": f"https://badges.example/{name}.png"},
                ]
            },
        )

    api.add(SEARCH_URL, _handler)


def make_provider(client, history, rng):
    return FootballCareerProvider(client, history, rng, careers=SAMPLE_CAREERS)


def test_nearest_tiers_prefers_closest_then_easier():
    assert nearest_tiers("2") == ["1", "3", "4", "5"]
    assert nearest_tiers("5") == ["4", "3", "2", "1"]
    assert nearest_tiers("3") == ["2", "4", "1", "5"]


@pytest.mark.asyncio
async def test_fetch_validates_entries(client, history, rng):
    questions = await make_provider(client, history, rng).fetch_candidates(CAREERS)
    assert len(questions) == 5
    first = questions[0]
    assert first.id == "football-Tier One A"
    assert first.type == QuestionType.HONOR_SYSTEM
    assert first.difficulty == Difficulty.HONOR_SYSTEM
    assert first.media_type == MediaType.TEXT_SEQUENCE
    assert first.club_list == ["Club A", "Club B"]
    assert first.answer_reveal.title == "Tier One A"


@pytest.mark.asyncio
async def test_select_backfills_from_nearest_tier(client, history, rng):
    provider = make_provider(client, history, rng)
    picked = provider.select(CAREERS, await provider.fetch_candidates(CAREERS))
    tiers = [question.answer_reveal.title.split()[1] for question in picked]
    assert tiers == ["One", "One", "Three", "Three", "Three"]


@pytest.mark.asyncio
async def test_enrich_attaches_badges_and_caches_lookups(api, client, history, rng):
    serve_badges(api)
    provider = make_provider(client, history, rng)
    questions = await provider.fetch_candidates(CAREERS)
    first = questions[0]

    await provider.enrich(CAREERS, [first])
    await provider.enrich(CAREERS, [first])

    assert first.media_type == MediaType.IMAGE_SEQUENCE
    assert first.image_urls == ["https://badges.example/Club A.png", "https://badges.example/Club B.png"]
    assert len(api.requests) == 2


@pytest.mark.asyncio
async def test_enrich_keeps_text_when_any_badge_is_missing(api, client, history, rng):
    serve_badges(api, missing=("Club B",))
    provider = make_provider(client, history, rng)
    questions = await provider.fetch_candidates(CAREERS)
    first, second = questions[0], questions[1]

    await provider.enrich(CAREERS, [first, second])

    assert first.media_type == MediaType.TEXT_SEQUENCE
    assert first.image_urls == []
    assert second.media_type == MediaType.IMAGE_SEQUENCE


@pytest.mark.asyncio
async def test_enrich_survives_badge_service_errors(api, client, history, rng):
    api.add(SEARCH_URL, lambda request: httpx.Response(500))
    provider = make_provider(client, history, rng)
    questions = await provider.fetch_candidates(CAREERS)
    enriched = await provider.enrich(CAREERS, questions)
    assert all(question.media_type == MediaType.TEXT_SEQUENCE for question in enriched)
