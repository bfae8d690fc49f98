import pytest

from promotion.core.events import event_bus, HeatChangeEvent, RivalryResolvedEvent
from promotion.core.exceptions import BusinessRuleError
from promotion.rivalries.models import RivalryIntensity
from promotion.rivalries.services.rivalry_service import RivalryService


@pytest.fixture
def rivals(make_wrestler):
    return make_wrestler("Hero"), make_wrestler("Villain")


@pytest.mark.parametrize("heat, expected", [
    (0, RivalryIntensity.SIMMERING),
    (9, RivalryIntensity.SIMMERING),
    (10, RivalryIntensity.HEATED),
    (19, RivalryIntensity.HEATED),
    (20, RivalryIntensity.INTENSE),
    (29, RivalryIntensity.INTENSE),
    (30, RivalryIntensity.EXPLOSIVE),
    (500, RivalryIntensity.EXPLOSIVE),
    (-1, RivalryIntensity.EXPLOSIVE),
])
def test_intensity_from_heat(heat, expected):
    assert RivalryIntensity.from_heat(heat) == expected


def test_create_returns_existing_active_rivalry(db, rivals):
    hero, villain = rivals
    service = RivalryService(db)
    first = service.create_rivalry(hero.wrestler_id, villain.wrestler_id)
    second = service.create_rivalry(villain.wrestler_id, hero.wrestler_id)
    assert first.rivalry_id == second.rivalry_id
    assert service.count() == 1

    with pytest.raises(BusinessRuleError):
        service.create_rivalry(hero.wrestler_id, hero.wrestler_id)


def test_heat_is_recorded_and_published(db, rivals):
    hero, villain = rivals
    received = []

    def listener(session, event):
        received.append(event)

    event_bus.subscribe(HeatChangeEvent)(listener)
    try:
        service = RivalryService(db)
        rivalry = service.add_heat_between_wrestlers(hero.wrestler_id, villain.wrestler_id, 12, "Attack backstage")
    finally:
        event_bus.unsubscribe(HeatChangeEvent, listener)

    assert rivalry.heat == 12
    assert rivalry.storyline_notes == "Auto-generated from heat event"
    assert rivalry.must_wrestle_next_show()
    assert not rivalry.can_attempt_resolution()
    assert [e.heat_after_event for e in rivalry.heat_events] == [12]
    assert len(received) == 1
    assert (received[0].old_heat, received[0].new_heat) == (0, 12)

    rivalry = service.add_heat(rivalry.rivalry_id, -50, "Truce")
    assert rivalry.heat == 0


def test_resolution_needs_intense_heat(db, rivals):
    hero, villain = rivals
    service = RivalryService(db)
    rivalry = service.create_rivalry(hero.wrestler_id, villain.wrestler_id)
    service.add_heat(rivalry.rivalry_id, 15, "Promo")

    result = service.attempt_resolution(rivalry.rivalry_id, 20, 20)
    assert not result.success
    assert result.message == "Rivalry needs at least 20 heat to attempt resolution (current: 15)"


def test_resolution_succeeds_only_above_thirty(db, rivals):
    hero, villain = rivals
    service = RivalryService(db)
    rivalry = service.create_rivalry(hero.wrestler_id, villain.wrestler_id)
    service.add_heat(rivalry.rivalry_id, 25, "Brawl")

    failed = service.attempt_resolution(rivalry.rivalry_id, 15, 15)
    assert not failed.success
    assert failed.total == 30
    assert failed.entity.is_active

    resolved_events = []

    def listener(session, event):
        resolved_events.append(event)

    event_bus.subscribe(RivalryResolvedEvent)(listener)
    try:
        resolved = service.attempt_resolution(rivalry.rivalry_id, 16, 15)
    finally:
        event_bus.unsubscribe(RivalryResolvedEvent, listener)

    assert resolved.success
    assert resolved.total == 31
    assert not resolved.entity.is_active
    assert resolved.entity.ended_date is not None
    assert [e.total_roll for e in resolved_events] == [31]

    with pytest.raises(BusinessRuleError):
        service.add_heat(rivalry.rivalry_id, 5, "Too late")
    assert service.has_rivalry_history(hero.wrestler_id, villain.wrestler_id)
    assert service.get_rivalry_between_wrestlers(hero.wrestler_id, villain.wrestler_id) is None


def test_rivalry_queries(db, make_wrestler):
    a, b, c, d = (make_wrestler(name) for name in ["A", "B", "C", "D"])
    service = RivalryService(db)
    simmering = service.add_heat_between_wrestlers(a.wrestler_id, b.wrestler_id, 5, "Stare down")
    explosive = service.add_heat_between_wrestlers(c.wrestler_id, d.wrestler_id, 35, "Cage match challenge")

    assert [r.rivalry_id for r in service.get_hottest_rivalries(1)] == [explosive.rivalry_id]
    assert [r.rivalry_id for r in service.get_rivalries_requiring_stipulation_matches()] == [explosive.rivalry_id]
    assert [r.rivalry_id for r in service.get_rivalries_by_intensity(RivalryIntensity.SIMMERING)] == [
        simmering.rivalry_id
    ]
    assert [r.rivalry_id for r in service.get_rivalries_for_wrestler(a.wrestler_id)] == [simmering.rivalry_id]


def test_rivalry_endpoints(client):
    hero = client.post("/api/wrestlers/", json={"name": "Face"}).json()["wrestler_id"]
    villain = client.post("/api/wrestlers/", json={"name": "Heel"}).json()["wrestler_id"]

    r = client.post("/api/rivalries/", json={"wrestler1_id": hero, "wrestler2_id": villain})
    assert r.status_code == 201
    rivalry_id = r.json()["rivalry_id"]

    r = client.post(f"/api/rivalries/{rivalry_id}/heat", json={"heat": 22, "reason": "Title shot"})
    assert r.json()["heat"] == 22

    r = client.post(f"/api/rivalries/{rivalry_id}/resolve", json={"roll1": 20, "roll2": 11})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert body["entity"]["is_active"] is False

    assert client.get("/api/rivalries/intensity/lukewarm").status_code == 400
    assert client.get("/api/rivalries/RV404").status_code == 404
