import pytest

from promotion.core.events import event_bus, FactionHeatChangeEvent
from promotion.core.exceptions import BusinessRuleError, DuplicateEntityError
from promotion.factions.models import FactionType, scale_heat_gain
from promotion.factions.services.faction_rivalry_service import FactionRivalryService
from promotion.factions.services.faction_service import FactionService
from promotion.rivalries.models import RivalryIntensity


@pytest.fixture
def stables(db, make_wrestler):
    service = FactionService(db)
    heels = service.create_faction("The Syndicate", leader_id=make_wrestler("Boss", fans=40_000).wrestler_id)
    service.add_member(heels.faction_id, make_wrestler("Enforcer", fans=20_000).wrestler_id)
    service.add_member(heels.faction_id, make_wrestler("Lookout", fans=5_000).wrestler_id)
    faces = service.create_faction("Brothers", leader_id=make_wrestler("Big Bro", fans=15_000).wrestler_id)
    service.add_member(faces.faction_id, make_wrestler("Little Bro", fans=10_000).wrestler_id)
    return heels, faces


@pytest.mark.parametrize("size, expected", [
    (0, FactionType.SINGLES),
    (1, FactionType.SINGLES),
    (2, FactionType.TAG_TEAM),
    (3, FactionType.STABLE),
    (7, FactionType.STABLE),
])
def test_faction_type_follows_size(size, expected):
    assert FactionType.for_size(size) == expected


@pytest.mark.parametrize("intensity, gain, expected", [
    (RivalryIntensity.SIMMERING, 10, 10),
    (RivalryIntensity.HEATED, 5, 6),
    (RivalryIntensity.INTENSE, 10, 12),
    (RivalryIntensity.EXPLOSIVE, 3, 5),
    (RivalryIntensity.EXPLOSIVE, -3, -5),
])
def test_heat_gain_scales_with_intensity(intensity, gain, expected):
    assert scale_heat_gain(intensity, gain) == expected


def test_leader_is_first_member(db, stables):
    heels, faces = stables
    assert heels.leader.name == "Boss"
    assert [m.name for m in heels.members] == ["Boss", "Enforcer", "Lookout"]
    assert heels.faction_type == FactionType.STABLE
    assert faces.faction_type == FactionType.TAG_TEAM
    assert heels.display_name == "The Syndicate (3 members)"
    assert heels.combined_fans == 65_000

    with pytest.raises(DuplicateEntityError):
        FactionService(db).create_faction("Brothers")


def test_wrestler_joins_only_one_faction(db, stables):
    heels, faces = stables
    service = FactionService(db)
    enforcer = next(m for m in heels.members if m.name == "Enforcer")

    with pytest.raises(BusinessRuleError, match="already belongs to The Syndicate"):
        service.add_member(faces.faction_id, enforcer.wrestler_id)

    service.remove_member(heels.faction_id, enforcer.wrestler_id, "Turned face")
    faces = service.add_member(faces.faction_id, enforcer.wrestler_id)
    assert faces.member_count == 3
    assert service.get_faction_for_wrestler(enforcer.wrestler_id).name == "Brothers"

    with pytest.raises(BusinessRuleError, match="is not a member"):
        service.remove_member(heels.faction_id, enforcer.wrestler_id)


def test_leader_changes_and_leaves(db, stables):
    heels, faces = stables
    service = FactionService(db)
    lookout = next(m for m in heels.members if m.name == "Lookout")
    boss = heels.leader

    with pytest.raises(BusinessRuleError, match="must be a member"):
        service.change_leader(faces.faction_id, lookout.wrestler_id)

    heels = service.change_leader(heels.faction_id, lookout.wrestler_id)
    assert heels.leader_id == lookout.wrestler_id

    heels = service.remove_member(heels.faction_id, lookout.wrestler_id)
    assert heels.leader_id is None
    assert heels.member_count == 2
    assert service.get_faction_for_wrestler(boss.wrestler_id).faction_id == heels.faction_id


def test_disbanded_faction_frees_its_members(db, stables):
    heels, _ = stables
    service = FactionService(db)
    boss_id = heels.leader_id

    heels = service.disband_faction(heels.faction_id, "Lost a loser-leaves match")
    assert not heels.is_active
    assert heels.disbanded_date is not None
    assert heels.members == []
    assert heels.display_name == "The Syndicate (Disbanded)"
    assert service.get_faction_for_wrestler(boss_id) is None

    with pytest.raises(BusinessRuleError, match="has disbanded"):
        service.add_member(heels.faction_id, boss_id)
    assert [f.name for f in service.get_active_factions()] == ["Brothers"]


def test_faction_queries(db, stables, make_wrestler):
    heels, faces = stables
    service = FactionService(db)
    solo = service.create_faction("Lone Wolf", leader_id=make_wrestler("Loner").wrestler_id)

    assert [f.name for f in service.get_factions_by_type(FactionType.SINGLES)] == ["Lone Wolf"]
    assert [f.name for f in service.get_largest_factions(2)] == ["The Syndicate", "Brothers"]
    assert service.add_affinity(solo.faction_id, 5).affinity == 5
    assert service.can_have_rivalry(heels.faction_id, faces.faction_id)
    assert not service.can_have_rivalry(heels.faction_id, heels.faction_id)


def test_faction_rivalry_heat_scales_and_resolves(db, stables):
    heels, faces = stables
    service = FactionRivalryService(db)
    received = []

    def listener(session, event):
        received.append(event)

    event_bus.subscribe(FactionHeatChangeEvent)(listener)
    try:
        rivalry = service.add_heat_between_factions(faces.faction_id, heels.faction_id, 10, "Brawl in the parking lot")
        rivalry = service.add_heat(rivalry.faction_rivalry_id, 10, "Jumped during a promo")
    finally:
        event_bus.unsubscribe(FactionHeatChangeEvent, listener)

    assert rivalry.storyline_notes == "Auto-generated from heat event"
    assert [e.heat_change for e in rivalry.heat_events] == [10, 11]
    assert rivalry.heat == 21
    assert rivalry.intensity == RivalryIntensity.INTENSE
    assert rivalry.total_wrestlers_involved == 5
    assert [(e.old_heat, e.new_heat) for e in received] == [(0, 10), (10, 21)]
    assert len(received[0].wrestler_ids) == 5

    assert service.create_faction_rivalry(heels.faction_id, faces.faction_id).faction_rivalry_id == \
        rivalry.faction_rivalry_id
    assert service.get_statistics() == {
        "active_rivalries": 1,
        "requiring_matches": 1,
        "eligible_for_resolution": 1,
        "requiring_stipulation": 0,
        "total_wrestlers": 5,
    }
    assert service.get_rivalries_involving_stables() == [rivalry]
    assert service.get_tag_team_rivalries() == []

    failed = service.attempt_resolution(rivalry.faction_rivalry_id, 10, 10)
    assert not failed.success
    assert failed.entity.heat_events[-1].reason == "Failed faction resolution attempt (20)"

    result = service.attempt_resolution(rivalry.faction_rivalry_id, 15, 16)
    assert result.success
    assert result.total == 31
    assert not result.entity.is_active
    assert result.entity.heat_events[-1].reason == "Faction rivalry ended: Resolved by dice roll"

    with pytest.raises(BusinessRuleError, match="has already ended"):
        service.add_heat(rivalry.faction_rivalry_id, 5, "Too late")


def test_low_heat_faction_rivalry_cannot_be_resolved(db, stables):
    heels, faces = stables
    service = FactionRivalryService(db)
    rivalry = service.create_faction_rivalry(heels.faction_id, faces.faction_id)

    result = service.attempt_resolution(rivalry.faction_rivalry_id, 20, 20)
    assert not result.success
    assert "needs at least 20 heat" in result.message

    with pytest.raises(BusinessRuleError):
        service.create_faction_rivalry(heels.faction_id, heels.faction_id)


def test_empty_faction_cannot_feud(db, stables):
    heels, _ = stables
    empty = FactionService(db).create_faction("Nobody Yet")
    with pytest.raises(BusinessRuleError, match="must both be active and have members"):
        FactionRivalryService(db).create_faction_rivalry(heels.faction_id, empty.faction_id)


def test_faction_endpoints(client, make_wrestler):
    leader = make_wrestler("Captain", fans=12_000)
    second = make_wrestler("Mate", fans=8_000)
    rival = make_wrestler("Pirate", fans=30_000)

    r = client.post("/api/factions/", json={"name": "Crew", "leader_id": leader.wrestler_id})
    assert r.status_code == 201
    crew = r.json()
    assert crew["faction_type"] == "SINGLES"

    crew = client.post(f"/api/factions/{crew['faction_id']}/members", json={"wrestler_id": second.wrestler_id}).json()
    assert crew["faction_type"] == "TAG_TEAM"
    assert [m["name"] for m in crew["members"]] == ["Captain", "Mate"]
    assert client.post("/api/factions/", json={"name": "Crew"}).status_code == 409

    pirates = client.post("/api/factions/", json={"name": "Pirates", "leader_id": rival.wrestler_id}).json()
    assert client.get(f"/api/factions/wrestler/{second.wrestler_id}").json()["name"] == "Crew"
    assert client.get("/api/factions/name/Pirates").json()["faction_id"] == pirates["faction_id"]

    ranking = client.get("/api/rankings/factions").json()
    assert [(f["name"], f["fans"], f["rank"]) for f in ranking] == [("Pirates", 30_000, 1), ("Crew", 20_000, 2)]

    r = client.post("/api/faction-rivalries/", json={
        "faction1_id": crew["faction_id"], "faction2_id": pirates["faction_id"],
    })
    assert r.status_code == 201
    rivalry = r.json()
    assert rivalry["display_name"] == "Crew vs Pirates"

    r = client.post(f"/api/faction-rivalries/{rivalry['faction_rivalry_id']}/heat",
                    json={"heat": 4, "reason": "Stole the flag"})
    assert r.json()["heat"] == 4
    assert client.get("/api/faction-rivalries/statistics").json()["active_rivalries"] == 1
    assert len(client.get(f"/api/faction-rivalries/faction/{pirates['faction_id']}").json()) == 1

    r = client.delete(f"/api/factions/{crew['faction_id']}")
    assert r.status_code == 400
    assert "1 faction rivalries" in r.json()["detail"]

    r = client.post(f"/api/faction-rivalries/{rivalry['faction_rivalry_id']}/end", json={"reason": "Truce"})
    assert r.json()["is_active"] is False

    disbanded = client.post(f"/api/factions/{pirates['faction_id']}/disband", json={"reason": "Sunk"}).json()
    assert disbanded["is_active"] is False
    assert client.get("/api/rankings/factions").json()[0]["name"] == "Crew"
    assert client.get("/api/factions/missing").status_code == 404


def test_deleting_a_faction_leader(client, db, make_wrestler):
    leader = make_wrestler("Founder")
    member = make_wrestler("Follower")
    service = FactionService(db)
    faction = service.create_faction("Founders", leader_id=leader.wrestler_id)
    service.add_member(faction.faction_id, member.wrestler_id)

    assert client.delete(f"/api/wrestlers/{leader.wrestler_id}").status_code == 204
    faction = client.get(f"/api/factions/{faction.faction_id}").json()
    assert faction["leader_id"] is None
    assert [m["name"] for m in faction["members"]] == ["Follower"]

    assert client.delete(f"/api/factions/{faction['faction_id']}").status_code == 204
    assert client.get(f"/api/wrestlers/{member.wrestler_id}").status_code == 200
