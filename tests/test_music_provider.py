import logging
import re

import httpx
import pytest

from models import Difficulty, MediaType, QuestionType
from services.catalog import get_category
from services.providers.base import ProviderError
from services.providers.music import (
    ITUNES_LOOKUP_URL,
    ITUNES_SEARCH_URL,
    MusicProvider,
    music_key,
    parse_seed,
)

EIGHTIES = get_category("music_80s")
HITS = get_category("music_hits")
SOUNDTRACKS = get_category("music_movies")


def track(track_id, artist, name, year=1984, preview=True, collection="Album", kind="song"):
    payload = {
        "trackId": track_id,
        "artistName": artist,
        "trackName": name,
        "collectionName": collection,
        "releaseDate": f"{year}-05-01T07:00:00Z",
        "kind": kind,
    }
    if preview:
        payload["previewUrl"] = f"https://audio.example/{track_id}.m4a"
    return payload


def serve_by_term(api, tracks_by_term, url=ITUNES_SEARCH_URL):
    def _handler(request: httpx.Request) -> httpx.Response:
        term = request.url.params.get("term") or request.url.params.get("id")
        if term not in tracks_by_term:
            return httpx.Response(500)
        results = tracks_by_term[term]
        return httpx.Response(200, json={"resultCount": len(results), "results": results})

    api.add(url, _handler)


def test_parse_seed_shapes():
    assert parse_seed("Madonna").artist == "Madonna"
    assert parse_seed({"query": "Toto Africa"}).query == "Toto Africa"
    by_id = parse_seed({"id": "42", "title": "Jaws"})
    assert by_id.track_id == 42 and by_id.title == "Jaws"
    assert parse_seed("   ") is None
    assert parse_seed({"id": "nope"}) is None
    assert parse_seed({}) is None


@pytest.mark.asyncio
async def test_track_filters(api, client, history, rng):
    serve_by_term(
        api,
        {
            "Madonna": [
                track(1, "Madonna Tribute Band", "Like a Virgin"),
                track(2, "Someone Else", "Holiday"),
                track(3, "Madonna", "Frozen", year=1998),
                track(4, "Madonna", "Borderline", preview=False),
                track(5, "Madonna", "Music Video", kind="music-video"),
                track(6, "Madonna", "Like a Virgin (Karaoke Version)"),
                track(7, "Madonna", "Material Girl"),
            ]
        },
    )
    provider = MusicProvider(client, history, rng, seeds={"music_80s": ["Madonna"]})
    questions = await provider.fetch_candidates(EIGHTIES)

    assert [question.answer_reveal.title for question in questions] == ["Material Girl"]
    params = api.requests[0].url.params
    assert params["attribute"] == "artistTerm"
    assert params["entity"] == "song"


@pytest.mark.asyncio
async def test_question_shape(api, client, history, rng):
    serve_by_term(api, {"Queen": [track(10, "Queen", "Radio Ga Ga")]})
    provider = MusicProvider(client, history, rng, seeds={"music_80s": ["Queen"]})
    (question,) = await provider.fetch_candidates(EIGHTIES)

    assert question.id == music_key(10) == question.history_key
    assert question.type == QuestionType.MUSIC
    assert question.difficulty == Difficulty.HONOR_SYSTEM
    assert question.media_type == MediaType.AUDIO
    assert question.question == "Listen & Guess!"
    assert question.audio_url == "https://audio.example/10.m4a"
    assert question.timer_duration == 30
    assert question.answer_reveal.artist == "Queen"
    assert question.answer_reveal.year == 1984
    assert question.correct_answer == ""
    assert not question.strict_scoring


@pytest.mark.asyncio
async def test_prefers_unplayed_tracks_per_seed(api, client, history, rng):
    serve_by_term(api, {"Prince": [track(20, "Prince", "Kiss"), track(21, "Prince", "When Doves Cry")]})
    history.mark_played(music_key(20))
    provider = MusicProvider(client, history, rng, seeds={"music_80s": ["Prince"]})
    (question,) = await provider.fetch_candidates(EIGHTIES)
    assert question.id == music_key(21)


@pytest.mark.asyncio
async def test_backfills_with_replays_when_fresh_tracks_run_out(api, client, history, rng, caplog):
    artists = ["A1", "A2", "A3", "A4", "A5"]
    serve_by_term(api, {name: [track(100 + index, name, f"Song {index}")] for index, name in enumerate(artists)})
    history.mark_many([music_key(100), music_key(101), music_key(102)])
    provider = MusicProvider(client, history, rng, seeds={"music_80s": artists})

    with caplog.at_level(logging.WARNING):
        questions = await provider.fetch_candidates(EIGHTIES)

    assert len(questions) == 5
    replays = [question for question in questions if "-replay-" in question.id]
    assert len(replays) == 3
    for question in replays:
        assert re.fullmatch(r"music-10[0-2]-replay-[0-9a-f]{8}", question.id)
        assert question.history_key == question.id.split("-replay-")[0]
    assert "backfilling with replays" in caplog.text


@pytest.mark.asyncio
async def test_failing_seed_is_skipped(api, client, history, rng):
    serve_by_term(api, {"Good": [track(30, "Good", "Fine Song")]})
    provider = MusicProvider(client, history, rng, seeds={"music_80s": ["Broken", "Good"]})
    questions = await provider.fetch_candidates(EIGHTIES)
    assert [question.id for question in questions] == [music_key(30)]


@pytest.mark.asyncio
async def test_exact_query_seed_ignores_artist_match(api, client, history, rng):
    serve_by_term(api, {"Toto Africa": [track(40, "TOTO", "Africa", year=1982)]})
    provider = MusicProvider(client, history, rng, seeds={"music_hits": [{"query": "Toto Africa"}]})
    (question,) = await provider.fetch_candidates(HITS)
    assert question.answer_reveal.title == "Africa"
    assert "attribute" not in api.requests[0].url.params


@pytest.mark.asyncio
async def test_soundtrack_hides_composer_and_scores_strictly(api, client, history, rng):
    serve_by_term(
        api,
        {"Star Wars main title": [track(50, "John Williams", "Main Title", year=1977, collection="Star Wars OST")]},
    )
    provider = MusicProvider(
        client, history, rng, seeds={"music_movies": [{"query": "Star Wars main title", "title": "Star Wars"}]}
    )
    (question,) = await provider.fetch_candidates(SOUNDTRACKS)
    assert question.question == "Name the movie!"
    assert question.answer_reveal.title == "Star Wars"
    assert question.answer_reveal.artist == ""
    assert question.strict_scoring


@pytest.mark.asyncio
async def test_id_seed_uses_lookup_and_skips_banned_words(api, client, history, rng):
    serve_by_term(api, {"77": [track(77, "Orchestra", "Jaws Theme (Cover)", collection="Jaws")]}, ITUNES_LOOKUP_URL)
    provider = MusicProvider(client, history, rng, seeds={"music_movies": [{"id": 77, "title": "Jaws"}]})
    (question,) = await provider.fetch_candidates(SOUNDTRACKS)
    assert question.answer_reveal.title == "Jaws"
    assert api.calls_to("/lookup")


@pytest.mark.asyncio
async def test_category_without_seeds_fails(client, history, rng):
    provider = MusicProvider(client, history, rng, seeds={})
    with pytest.raises(ProviderError):
        await provider.fetch_candidates(EIGHTIES)
