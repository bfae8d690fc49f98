import pytest

from promotion.accounts.services.account_service import AccountService
from promotion.cards.services.card_service import CardService, CardSetService
from promotion.decks.services.deck_service import DeckService
from promotion.drafts.services.draft_service import DraftService
from promotion.rivalries.services.rivalry_service import RivalryService
from promotion.teams.services.team_service import TeamService
from promotion.titles.models import ChampionshipType
from promotion.titles.services.title_service import TitleService
from promotion.wrestlers.models import WrestlerTier


@pytest.fixture
def show_setup(client):
    show_type = client.post("/api/show-types/", json={"name": "Weekly"}).json()
    show = client.post("/api/shows/", json={"name": "Fight Night", "show_type_id": show_type["show_type_id"]}).json()
    segment_type = client.post("/api/segment-types/", json={"name": "Match"}).json()
    match_type = client.post("/api/match-types/", json={"name": "Singles"}).json()
    return show_type, show, segment_type, match_type


def test_wrestler_in_a_team_cannot_be_deleted(client, db, make_wrestler):
    one, two = make_wrestler("Tag A", fans=10_000), make_wrestler("Tag B", fans=10_000)
    TeamService(db).create_team("A and B", one.wrestler_id, two.wrestler_id)
    title = TitleService(db).create_title("Tag Belts", WrestlerTier.ROOKIE, championship_type=ChampionshipType.TEAM)

    r = client.delete(f"/api/wrestlers/{one.wrestler_id}")
    assert r.status_code == 400
    assert "1 teams" in r.json()["detail"]

    contenders = client.get(f"/api/rankings/championships/{title.title_id}/contenders")
    assert contenders.status_code == 200
    assert contenders.json()[0]["members"] == ["Tag A", "Tag B"]


def test_wrestler_in_a_rivalry_cannot_be_deleted(client, db, make_wrestler):
    one, two = make_wrestler("Feud A"), make_wrestler("Feud B")
    rivalry = RivalryService(db).create_rivalry(one.wrestler_id, two.wrestler_id)

    r = client.delete(f"/api/wrestlers/{two.wrestler_id}")
    assert r.status_code == 400
    assert "rivalries" in r.json()["detail"]

    stats = client.get(f"/api/rivalries/{rivalry.rivalry_id}/stats")
    assert stats.status_code == 200
    assert stats.json()["wrestler2_name"] == "Feud B"


def test_champion_and_booked_wrestlers_cannot_be_deleted(client, db, make_wrestler, show_setup):
    _, show, segment_type, _ = show_setup
    champion = make_wrestler("Champ")
    booked = make_wrestler("Booked")
    title = TitleService(db).create_title("Any Belt", WrestlerTier.ROOKIE)
    TitleService(db).award_title(title.title_id, [champion.wrestler_id])
    client.post("/api/segments/", json={
        "show_id": show["show_id"],
        "segment_type_id": segment_type["segment_type_id"],
        "participant_ids": [booked.wrestler_id],
    })

    assert "title reigns" in client.delete(f"/api/wrestlers/{champion.wrestler_id}").json()["detail"]
    assert "segments" in client.delete(f"/api/wrestlers/{booked.wrestler_id}").json()["detail"]
    assert client.get("/api/wrestlers/count").json() == {"count": 2}


def test_unreferenced_wrestler_delete_clears_challenges(client, db, make_wrestler):
    contender = make_wrestler("Hopeful", fans=30_000)
    injured = make_wrestler("Hurt")
    for _ in range(3):
        client.post(f"/api/wrestlers/{injured.wrestler_id}/bump")
    assert client.get(f"/api/injuries/wrestler/{injured.wrestler_id}").json()
    title = TitleService(db).create_title("Open Belt", WrestlerTier.ROOKIE)
    assert TitleService(db).add_challenger(title.title_id, contender.wrestler_id).success

    assert client.delete(f"/api/wrestlers/{contender.wrestler_id}").status_code == 204
    assert client.delete(f"/api/wrestlers/{injured.wrestler_id}").status_code == 204
    assert client.get(f"/api/wrestlers/{contender.wrestler_id}").status_code == 404
    assert client.get(f"/api/titles/{title.title_id}").status_code == 200


def test_drafted_wrestler_and_drafting_account_cannot_be_deleted(client, db, make_wrestler):
    account = AccountService(db).create_account("booker")
    wrestler = make_wrestler("Draftee")
    draft = DraftService(db).start_draft("Season Draft", [account.account_id], 1)
    DraftService(db).make_pick(draft.draft_id, account.account_id, wrestler.wrestler_id)

    assert client.delete(f"/api/wrestlers/{wrestler.wrestler_id}").status_code == 400
    r = client.delete(f"/api/accounts/{account.account_id}")
    assert r.status_code == 400
    assert "drafts" in r.json()["detail"]

    idle = AccountService(db).create_account("idle")
    assert client.delete(f"/api/accounts/{idle.account_id}").status_code == 204


def test_show_type_in_use_cannot_be_deleted(client, show_setup):
    show_type, show, _, _ = show_setup
    r = client.delete(f"/api/show-types/{show_type['show_type_id']}")
    assert r.status_code == 400
    assert r.json()["detail"] == f"ShowType {show_type['show_type_id']} is still in use by 1 shows"

    assert client.delete(f"/api/shows/{show['show_id']}").status_code == 204
    assert client.delete(f"/api/show-types/{show_type['show_type_id']}").status_code == 204


def test_segment_and_match_types_in_use_cannot_be_deleted(client, make_wrestler, show_setup):
    _, show, segment_type, match_type = show_setup
    segment = client.post("/api/segments/", json={
        "show_id": show["show_id"],
        "segment_type_id": segment_type["segment_type_id"],
        "match_type_id": match_type["match_type_id"],
    }).json()

    assert client.delete(f"/api/segment-types/{segment_type['segment_type_id']}").status_code == 400
    assert client.delete(f"/api/match-types/{match_type['match_type_id']}").status_code == 400
    assert client.get(f"/api/segments/{segment['segment_id']}").status_code == 200

    assert client.delete(f"/api/segments/{segment['segment_id']}").status_code == 204
    assert client.delete(f"/api/segment-types/{segment_type['segment_type_id']}").status_code == 204
    assert client.delete(f"/api/match-types/{match_type['match_type_id']}").status_code == 204


def test_deleting_a_segment_keeps_the_reign_won_there(client, db, make_wrestler, show_setup):
    _, show, segment_type, _ = show_setup
    winner = make_wrestler("Winner")
    segment = client.post("/api/segments/", json={
        "show_id": show["show_id"],
        "segment_type_id": segment_type["segment_type_id"],
        "participant_ids": [winner.wrestler_id],
    }).json()
    title = TitleService(db).create_title("Won Belt", WrestlerTier.ROOKIE)
    TitleService(db).award_title(title.title_id, [winner.wrestler_id], segment["segment_id"])

    assert client.delete(f"/api/shows/{show['show_id']}").status_code == 204
    reigns = client.get(f"/api/titles/{title.title_id}/reigns").json()
    assert len(reigns) == 1
    assert reigns[0]["won_at_segment_id"] is None


def test_title_defended_in_a_segment_cannot_be_deleted(client, show_setup):
    _, show, segment_type, _ = show_setup
    defended = client.post("/api/titles/", json={"name": "Defended Belt", "tier": "ROOKIE"}).json()
    unused = client.post("/api/titles/", json={"name": "Unused Belt", "tier": "ROOKIE"}).json()
    client.post("/api/segments/", json={
        "show_id": show["show_id"],
        "segment_type_id": segment_type["segment_type_id"],
        "title_ids": [defended["title_id"]],
    })
    for title in (defended, unused):
        client.put(f"/api/titles/{title['title_id']}", json={"is_active": False})

    assert client.delete(f"/api/titles/{defended['title_id']}").status_code == 400
    assert client.delete(f"/api/titles/{unused['title_id']}").status_code == 204


def test_card_in_a_deck_cannot_be_deleted(client, db, make_wrestler):
    CardSetService(db).create_set("Core Set", "CORE")
    suplex = CardService(db).create_card("Suplex")
    spare = CardService(db).create_card("Spare")
    deck = DeckService(db).create_deck(make_wrestler("Deck Owner").wrestler_id)
    DeckService(db).add_card(deck.deck_id, suplex.card_id, 2)

    r = client.delete(f"/api/cards/{suplex.card_id}")
    assert r.status_code == 400
    assert "1 decks" in r.json()["detail"]
    assert client.delete(f"/api/cards/{spare.card_id}").status_code == 204
