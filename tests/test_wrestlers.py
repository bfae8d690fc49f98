import pytest

from promotion.injuries.models import Injury
from promotion.news.models import NewsItem, NewsCategory
from promotion.wrestlers.models import WrestlerTier
from promotion.wrestlers.services.wrestler_service import WrestlerService, scale_fan_gain


class FixedDice:
    def __init__(self, value):
        self.value = value

    def roll(self):
        return self.value


@pytest.mark.parametrize("tier, gain, expected", [
    (WrestlerTier.ROOKIE, 2400, 2000),
    (WrestlerTier.ROOKIE, 2500, 3000),
    (WrestlerTier.MIDCARDER, 10_000, 10_000),
    (WrestlerTier.ICON, 10_000, 9_000),
    (WrestlerTier.ICON, 1_500, 1_000),
    (WrestlerTier.ICON, -5_000, -5_000),
    (WrestlerTier.CONTENDER, 0, 0),
])
def test_scale_fan_gain(tier, gain, expected):
    assert scale_fan_gain(tier, gain) == expected


def test_tier_from_fans():
    assert WrestlerTier.from_fans(0) == WrestlerTier.ROOKIE
    assert WrestlerTier.from_fans(9_999) == WrestlerTier.ROOKIE
    assert WrestlerTier.from_fans(25_000) == WrestlerTier.CONTENDER
    assert WrestlerTier.from_fans(100_000) == WrestlerTier.ICON


def test_create_wrestler_populates_defaults(client):
    r = client.post("/api/wrestlers/", json={"name": "Rookie Rick"})
    assert r.status_code == 201, r.text
    wrestler = r.json()
    assert wrestler["wrestler_id"] == "W1"
    assert wrestler["fans"] == 0
    assert wrestler["tier"] == "ROOKIE"
    assert wrestler["gender"] == "MALE"
    assert wrestler["deck_size"] == 15
    assert wrestler["starting_health"] == 15
    assert wrestler["description"] == "Default Description"
    assert wrestler["active"] is True

    assert client.post("/api/wrestlers/", json={"name": "Rookie Rick"}).status_code == 409


def test_award_and_spend_fans_move_tier(client):
    wrestler_id = client.post("/api/wrestlers/", json={"name": "Climber"}).json()["wrestler_id"]

    r = client.post(f"/api/wrestlers/{wrestler_id}/fans", json={"fans": 30_000})
    assert r.json()["fans"] == 30_000
    assert r.json()["tier"] == "CONTENDER"

    r = client.post(f"/api/wrestlers/{wrestler_id}/spend-fans", json={"fans": 50_000})
    assert r.status_code == 400
    assert r.json()["detail"] == f"Wrestler {wrestler_id} cannot afford to spend 50,000 fans"
    assert client.get(f"/api/wrestlers/{wrestler_id}").json()["fans"] == 30_000
    assert client.post(f"/api/wrestlers/{wrestler_id}/fans", json={"fans": -50_000}).status_code == 400

    r = client.post(f"/api/wrestlers/{wrestler_id}/spend-fans", json={"fans": 25_000})
    assert r.status_code == 200
    assert r.json()["fans"] == 5_000
    assert r.json()["tier"] == "ROOKIE"


def test_third_bump_becomes_an_injury_with_news(client, db):
    wrestler_id = client.post("/api/wrestlers/", json={"name": "Bumpy"}).json()["wrestler_id"]

    for expected_bumps in (1, 2):
        r = client.post(f"/api/wrestlers/{wrestler_id}/bump")
        assert r.json()["bumps"] == expected_bumps

    r = client.post(f"/api/wrestlers/{wrestler_id}/bump")
    assert r.json()["bumps"] == 0

    injuries = db.query(Injury).filter(Injury.wrestler_id == wrestler_id).all()
    assert len(injuries) == 1
    assert injuries[0].is_active
    assert r.json()["effective_starting_health"] == 15 - injuries[0].health_penalty

    news = db.query(NewsItem).filter(NewsItem.category == NewsCategory.INJURY).all()
    assert len(news) == 1
    assert news[0].headline == "Bumpy injured"


def test_heal_chance_sheds_a_bump_on_a_high_roll(db, make_wrestler):
    wrestler = make_wrestler("Sore Steve", bumps=2)
    service = WrestlerService(db)

    assert service.heal_chance(wrestler.wrestler_id, FixedDice(3)).bumps == 2
    assert service.heal_chance(wrestler.wrestler_id, FixedDice(4)).bumps == 1


def test_recalculate_tiers(db, make_wrestler):
    wrestler = make_wrestler("Stale Tier", fans=70_000, tier=WrestlerTier.ROOKIE)
    assert WrestlerService(db).recalculate_tiers() == 1
    db.refresh(wrestler)
    assert wrestler.tier == WrestlerTier.MAIN_EVENTER


def test_roster_csv_upload_creates_then_updates(client):
    csv = (
        "Name,Fans,Gender,Description,Is_Player\n"
        "Stone Cold,120000,male,Texas rattlesnake,yes\n"
        "The Rock,,MALE,,\n"
        ",5,,,\n"
    )
    r = client.post("/api/wrestlers/upload-roster-csv/", files={"file": ("roster.csv", csv, "text/csv")})
    assert r.status_code == 200, r.text
    assert r.json()["created"] == 2
    assert r.json()["skipped"] == 1

    wrestlers = {w["name"]: w for w in client.get("/api/wrestlers/").json()}
    assert wrestlers["Stone Cold"]["tier"] == "ICON"
    assert wrestlers["Stone Cold"]["is_player"] is True
    assert wrestlers["Stone Cold"]["description"] == "Texas rattlesnake"
    assert wrestlers["The Rock"]["fans"] == 0

    r = client.post(
        "/api/wrestlers/upload-roster-csv/",
        files={"file": ("roster.csv", "name,fans\nStone Colde,5000\n", "text/csv")},
    )
    assert r.json()["updated"] == 1
    assert r.json()["created"] == 0
    updated = client.get(f"/api/wrestlers/{wrestlers['Stone Cold']['wrestler_id']}").json()
    assert updated["fans"] == 5000
    assert updated["tier"] == "ROOKIE"


def test_roster_csv_upload_skips_rows_out_of_range(client):
    csv = "name,drive\nGood Guy,3\nBad Guy,9\n"
    r = client.post("/api/wrestlers/upload-roster-csv/", files={"file": ("roster.csv", csv, "text/csv")})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["created"] == 1
    assert body["skipped"] == 1
    assert len(body["errors"]) == 1
    assert body["errors"][0]["row"] == 3
    assert body["errors"][0]["name"] == "Bad Guy"
    assert "drive" in body["errors"][0]["error"]

    names = [w["name"] for w in client.get("/api/wrestlers/").json()]
    assert names == ["Good Guy"]


def test_roster_csv_upload_validates_updates_too(client, make_wrestler):
    wrestler = make_wrestler("Steady Eddie", physical_condition=80)
    csv = "name,physical_condition,fans\nSteady Eddie,150,100\nNewcomer,abc,\n"
    r = client.post("/api/wrestlers/upload-roster-csv/", files={"file": ("roster.csv", csv, "text/csv")})
    assert r.status_code == 200, r.text
    assert r.json()["updated"] == 0
    assert r.json()["created"] == 0
    assert [error["name"] for error in r.json()["errors"]] == ["Steady Eddie", "Newcomer"]
    assert client.get(f"/api/wrestlers/{wrestler.wrestler_id}").json()["physical_condition"] == 80


def test_roster_csv_upload_rejects_unreadable_file(client):
    r = client.post(
        "/api/wrestlers/upload-roster-csv/",
        files={"file": ("roster.csv", "name\nJos\xe9\n".encode("latin-1"), "text/csv")},
    )
    assert r.status_code == 400
    assert r.json()["detail"].startswith("Failed to read roster CSV")
    assert client.get("/api/wrestlers/count").json()["count"] == 0
