import random

import pytest

from promotion.injuries.models import InjurySeverity
from promotion.injuries.services.injury_service import InjuryService, severity_for_roll
from promotion.wrestlers.models import WrestlerTier


@pytest.mark.parametrize("tier, roll, expected", [
    (WrestlerTier.ROOKIE, 1, InjurySeverity.MINOR),
    (WrestlerTier.ROOKIE, 35, InjurySeverity.MINOR),
    (WrestlerTier.ROOKIE, 36, InjurySeverity.MODERATE),
    (WrestlerTier.ROOKIE, 90, InjurySeverity.SEVERE),
    (WrestlerTier.ROOKIE, 91, InjurySeverity.CRITICAL),
    (WrestlerTier.ICON, 65, InjurySeverity.MINOR),
    (WrestlerTier.ICON, 98, InjurySeverity.SEVERE),
    (WrestlerTier.ICON, 99, InjurySeverity.CRITICAL),
    (WrestlerTier.ICON, 100, InjurySeverity.CRITICAL),
])
def test_severity_table(tier, roll, expected):
    assert severity_for_roll(tier, roll) == expected


def test_health_penalty_stays_in_severity_range():
    rng = random.Random(3)
    for severity in InjurySeverity:
        for _ in range(50):
            assert severity.min_penalty <= severity.random_health_penalty(rng) <= severity.max_penalty


def test_healing_costs_fans_even_when_it_fails(db, make_wrestler):
    wrestler = make_wrestler("Patient", fans=20_000)
    service = InjuryService(db, rng=random.Random(5))
    injury = service.create_injury(wrestler.wrestler_id, "Twisted Ankle", None, InjurySeverity.MINOR)
    assert injury.injury_id == "INJ1"
    assert injury.healing_cost == 5_000

    failed = service.attempt_healing(injury.injury_id, dice_roll=2)
    assert not failed.success
    assert failed.fans_spent
    assert failed.message == "Healing attempt failed"
    db.refresh(wrestler)
    assert wrestler.fans == 15_000
    assert injury.is_active

    healed = service.attempt_healing(injury.injury_id, dice_roll=3)
    assert healed.success
    assert healed.message == "Injury healed successfully"
    assert healed.injury.healed_date is not None
    db.refresh(wrestler)
    assert wrestler.fans == 10_000
    assert wrestler.active_injuries == []

    again = service.attempt_healing(injury.injury_id, dice_roll=6)
    assert not again.success
    assert again.message == "Injury cannot be healed (already healed or inactive)"
    assert not again.fans_spent


def test_broke_wrestler_cannot_pay_for_healing(db, make_wrestler):
    wrestler = make_wrestler("Broke Bob")
    service = InjuryService(db)
    injury = service.create_injury(wrestler.wrestler_id, "Torn ACL", None, InjurySeverity.CRITICAL)

    result = service.attempt_healing(injury.injury_id, dice_roll=6)
    assert not result.success
    assert result.message == "Wrestler cannot afford 25,000 fans healing cost"
    assert injury.is_active


def test_injury_endpoints(client):
    wrestler_id = client.post("/api/wrestlers/", json={"name": "Hurt Harry", "fans": 10_000}).json()["wrestler_id"]

    r = client.post("/api/injuries/", json={
        "wrestler_id": wrestler_id, "name": "Sprained Wrist", "severity": "moderate",
    })
    assert r.status_code == 201, r.text
    injury = r.json()
    assert injury["severity"] == "MODERATE"
    assert injury["healing_cost"] == 10_000
    assert 2 <= injury["health_penalty"] <= 3

    assert client.post("/api/injuries/", json={
        "wrestler_id": wrestler_id, "name": "Bad", "severity": "deadly",
    }).status_code == 422

    stats = client.get(f"/api/injuries/wrestler/{wrestler_id}/stats").json()
    assert stats["active_injuries"] == 1

    r = client.post(f"/api/injuries/{injury['injury_id']}/heal", json={"dice_roll": 4})
    assert r.status_code == 200, r.text
    assert r.json()["success"] is True
    assert r.json()["injury"]["is_active"] is False
    assert client.get("/api/injuries/active").json() == []
