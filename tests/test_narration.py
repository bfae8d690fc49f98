import json

import httpx
import pytest

from promotion.core.exceptions import NarrationError
from promotion.narration.schemas.narration_schema import (
    SegmentNarrationContext, WrestlerContext, SegmentTypeContext, NPCContext, RefereeContext, TitleContext,
)
from promotion.narration.services.narration_service import (
    MockNarrationService, NarrationService, OpenAICompatibleNarrationService, get_narration_service,
)
from promotion.narration.services.prompt_generator import PromptGenerator, truncate_description
from promotion.narration.services.segment_narration_service import SegmentNarrationService
from promotion.npcs.services.npc_service import NpcService
from promotion.referees.services.referee_service import RefereeService
from promotion.segments.services.match_type_service import MatchTypeService
from promotion.segments.services.segment_service import SegmentService
from promotion.segments.services.segment_type_service import SegmentTypeService
from promotion.shows.services.show_service import ShowService
from promotion.shows.services.show_type_service import ShowTypeService


@pytest.fixture
def context():
    return SegmentNarrationContext(
        wrestlers=[
            WrestlerContext(name="Rex Power", description="A powerhouse", manager_name="Slick Jim"),
            WrestlerContext(name="Nova"),
        ],
        segment_type=SegmentTypeContext(segment_type="Ladder Match", stipulation="No DQ",
                                        rules=["Climb the ladder to win"]),
        determined_outcome="Nova wins",
        referee=RefereeContext(name="Earl"),
        npcs=[NPCContext(name="Joe", role="Commentator"), NPCContext(name="Slick Jim", role="Manager")],
        titles=[TitleContext(name="World Title", tier="Main Eventer")],
        show_name="Fight Night",
    )


@pytest.fixture
def booked_segment(db, make_wrestler):
    npcs = NpcService(db)
    npcs.create_npc("Joe Caller", npc_type="Commentator")
    manager = npcs.create_npc("Slick Jim", npc_type="Manager", description="A fast talker")
    rex = make_wrestler("Rex Power", manager_id=manager.npc_id)
    nova = make_wrestler("Nova")

    show_type = ShowTypeService(db).create_show_type("Weekly")
    show = ShowService(db).create_show("Fight Night", show_type.show_type_id)
    segment_type = SegmentTypeService(db).create_segment_type("Match", is_match=True)
    match_type = MatchTypeService(db).create_match_type("Ladder Match", description="Climb the ladder to win")
    referee = RefereeService(db).create_referee("Earl Hebner")

    service = SegmentService(db)
    segment = service.create_segment(show.show_id, segment_type.segment_type_id,
                                     [rex.wrestler_id, nova.wrestler_id],
                                     match_type_id=match_type.match_type_id, referee_id=referee.ref_id)
    return service.set_winners(segment.segment_id, [nova.wrestler_id])


def test_truncate_description_breaks_on_words():
    assert truncate_description(None) == ""
    assert truncate_description("short") == "short"
    assert truncate_description("alpha beta gamma", limit=12) == "alpha beta..."
    assert truncate_description("x" * 30, limit=10) == "x" * 10 + "..."


def test_full_prompt_lists_participants_and_outcome(context):
    prompt = PromptGenerator().generate_prompt(context)
    assert "Rex Power accompanied to the ring by Slick Jim, Nova." in prompt
    assert "MUST end with the following outcome: Nova wins" in prompt
    assert "This is a 'Ladder Match'" in prompt
    assert "Stipulation: No DQ." in prompt
    assert "Rules: Climb the ladder to win." in prompt
    assert '"show_name": "Fight Night"' in prompt
    assert '"audience"' not in prompt


def test_simplified_prompt_sections(context):
    context.wrestlers[0].description = "word " * 60
    prompt = PromptGenerator().generate_simplified_prompt(context)
    assert "- Rex Power (with Slick Jim): " in prompt
    assert "...\n" in prompt
    assert "REFEREE: Earl\n" in prompt
    assert "- Joe (Commentator)\n" in prompt
    assert "TITLES ON THE LINE: World Title" in prompt
    assert "OUTCOME (MUST FOLLOW): Nova wins" in prompt


def test_summary_prompt_wraps_narration():
    prompt = PromptGenerator().generate_summary_prompt("[SPEAKER:Joe]: What a match!")
    assert prompt.startswith("Summarize")
    assert prompt.endswith("[SPEAKER:Joe]: What a match!")


def test_mock_narrator_uses_commentators(context):
    narrator = MockNarrationService()
    narration = narrator.narrate(context)
    lines = narration.splitlines()
    assert all(line.startswith("[SPEAKER:Joe]: ") for line in lines)
    assert "Nova wins" in lines[-1]
    assert narrator.summarize(narration) == "This is a mock summary."


def test_narration_service_needs_a_provider():
    with pytest.raises(TypeError):
        NarrationService()

    class EchoNarrationService(NarrationService):
        def generate_text(self, prompt):
            return prompt

    assert EchoNarrationService().summarize("Great match").endswith("Great match")


def test_openai_compatible_request(context):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": "  [SPEAKER:Joe]: Bell rings!  "}}]})

    narrator = OpenAICompatibleNarrationService("http://llm.local/v1/", api_key="secret", model="test-model",
                                                transport=httpx.MockTransport(handler))
    assert narrator.narrate(context) == "[SPEAKER:Joe]: Bell rings!"

    request = seen[0]
    assert str(request.url) == "http://llm.local/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer secret"
    body = json.loads(request.content)
    assert body["model"] == "test-model"
    assert body["messages"][0]["role"] == "system"
    assert "Nova wins" in body["messages"][1]["content"]


@pytest.mark.parametrize("response", [
    httpx.Response(500, text="boom"),
    httpx.Response(200, json={"choices": []}),
    httpx.Response(200, json={"choices": [{"message": {"content": "   "}}]}),
])
def test_openai_compatible_failures_raise(context, response):
    narrator = OpenAICompatibleNarrationService("http://llm.local/v1",
                                                transport=httpx.MockTransport(lambda request: response))
    with pytest.raises(NarrationError):
        narrator.narrate(context)


def test_unreachable_endpoint_raises(context):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    narrator = OpenAICompatibleNarrationService("http://llm.local/v1", transport=httpx.MockTransport(handler))
    with pytest.raises(NarrationError):
        narrator.summarize("anything")


def test_default_narrator_is_mock_without_endpoint():
    assert get_narration_service().provider_name == "mock"


def test_segment_context_from_booking(db, booked_segment):
    context = SegmentNarrationService(db, MockNarrationService()).build_context(booked_segment)
    managers = {w.name: w.manager_name for w in context.wrestlers}
    assert managers == {"Rex Power": "Slick Jim", "Nova": None}
    assert context.segment_type.segment_type == "Ladder Match"
    assert context.segment_type.rules == ["Climb the ladder to win"]
    assert context.determined_outcome == "Nova wins"
    assert context.referee.name == "Earl Hebner"
    assert [(n.name, n.role) for n in context.npcs] == [("Joe Caller", "Commentator"), ("Slick Jim", "Manager")]
    assert context.show_name == "Fight Night"


def test_narrate_segment_stores_result(db, booked_segment):
    result = SegmentNarrationService(db, MockNarrationService()).narrate_segment(booked_segment.segment_id)
    assert result["provider"] == "mock"
    assert result["summary"] == "This is a mock summary."

    db.refresh(booked_segment)
    assert booked_segment.narration == result["narration"]
    assert booked_segment.narration.startswith("[SPEAKER:Joe Caller]: Welcome to Fight Night!")


def test_narration_endpoints(client, booked_segment, context):
    status = client.get("/api/narration/status").json()
    assert status == {"provider": "mock", "available": True, "model": None}

    preview = client.post("/api/narration/prompt", json={"context": context.model_dump(), "simplified": True})
    assert preview.status_code == 200
    assert preview.json()["prompt"].startswith("Narrate a wrestling match")

    response = client.post(f"/api/narration/segments/{booked_segment.segment_id}")
    assert response.status_code == 200
    assert response.json()["summary"] == "This is a mock summary."
    assert client.post("/api/narration/segments/SG404").status_code == 404
