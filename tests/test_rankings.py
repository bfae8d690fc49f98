from promotion.teams.services.team_service import TeamService
from promotion.titles.models import ChampionshipType
from promotion.titles.services.title_service import TitleService
from promotion.wrestlers.models import WrestlerTier, Gender


def test_championships_list_uses_slug_image_names(client):
    client.post("/api/titles/", json={"name": "World Heavyweight Title", "tier": "MAIN_EVENTER"})
    client.post("/api/titles/", json={"name": "Hidden Belt", "tier": "ROOKIE", "include_in_rankings": False})

    championships = client.get("/api/rankings/championships").json()
    assert championships == [{
        "id": "TI1",
        "name": "World Heavyweight Title",
        "image_name": "world-heavyweight-title.png",
        "tier": "MAIN_EVENTER",
    }]


def test_single_contenders_order(client, db, make_wrestler):
    make_wrestler("Exact Low", fans=30_000)
    make_wrestler("Exact High", fans=35_000)
    make_wrestler("Icon", fans=150_000)
    make_wrestler("Midcarder", fans=50_000)
    make_wrestler("Too Green", fans=1_000)
    make_wrestler("Other Division", fans=30_000, gender=Gender.FEMALE)
    champion = make_wrestler("Champion", fans=39_000)

    service = TitleService(db)
    title = service.create_title("Contender Title", WrestlerTier.CONTENDER)
    service.award_title(title.title_id, [champion.wrestler_id])

    contenders = client.get(f"/api/rankings/championships/{title.title_id}/contenders").json()
    assert [c["name"] for c in contenders] == ["Exact High", "Exact Low", "Icon", "Midcarder"]
    assert [c["rank"] for c in contenders] == [1, 2, 3, 4]

    champions = client.get(f"/api/rankings/championships/{title.title_id}/champions").json()
    assert champions == [{"id": champion.wrestler_id, "name": "Champion", "fans": 39_000, "reign_days": 0}]


def test_team_contenders_order_by_combined_fans(client, db, make_wrestler):
    a, b, c, d = (make_wrestler(name, fans=fans) for name, fans in
                  [("A", 10_000), ("B", 20_000), ("C", 30_000), ("D", 40_000)])
    queen = make_wrestler("Queen", gender=Gender.FEMALE)
    teams = TeamService(db)
    small = teams.create_team("Small Team", a.wrestler_id, b.wrestler_id)
    big = teams.create_team("Big Team", c.wrestler_id, d.wrestler_id)
    teams.create_team("Mixed Team", a.wrestler_id, queen.wrestler_id)

    title = TitleService(db).create_title("Tag Titles", WrestlerTier.ROOKIE,
                                          championship_type=ChampionshipType.TEAM)
    contenders = client.get(f"/api/rankings/championships/{title.title_id}/contenders").json()
    assert [t["id"] for t in contenders] == [big.team_id, small.team_id]
    assert contenders[0]["fans"] == 70_000
    assert contenders[0]["members"] == ["C", "D"]

    TitleService(db).award_title(title.title_id, [c.wrestler_id, d.wrestler_id])
    contenders = client.get(f"/api/rankings/championships/{title.title_id}/contenders").json()
    assert [t["id"] for t in contenders] == [small.team_id]


def test_unknown_title_is_not_found(client):
    assert client.get("/api/rankings/championships/TI404/contenders").status_code == 404
