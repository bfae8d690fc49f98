import pytest

from promotion.cards.services.card_service import CardService, CardSetService
from promotion.core.exceptions import BusinessRuleError, DuplicateEntityError, EntityNotFoundError
from promotion.decks.services.deck_service import DeckService
from promotion.teams.services.team_service import TeamService


def test_team_rules(db, make_wrestler):
    one = make_wrestler("Tag One", fans=4_000)
    two = make_wrestler("Tag Two", fans=6_000)
    service = TeamService(db)

    with pytest.raises(BusinessRuleError):
        service.create_team("Solo Act", one.wrestler_id, one.wrestler_id)
    with pytest.raises(EntityNotFoundError):
        service.create_team("Ghosts", one.wrestler_id, "W999")

    team = service.create_team("The Duo", one.wrestler_id, two.wrestler_id)
    assert team.combined_fans == 10_000
    assert [t.name for t in service.get_teams_for_wrestler(two.wrestler_id)] == ["The Duo"]
    with pytest.raises(DuplicateEntityError):
        service.create_team("The Duo", two.wrestler_id, one.wrestler_id)

    service.update_team(team.team_id, active=False)
    assert service.get_active_teams() == []


def test_team_endpoints(client, make_wrestler):
    one = make_wrestler("Api Tag One")
    two = make_wrestler("Api Tag Two")
    r = client.post("/api/teams/", json={"name": "Api Duo", "wrestler1_id": one.wrestler_id,
                                         "wrestler2_id": two.wrestler_id})
    assert r.status_code == 201
    team_id = r.json()["team_id"]
    assert client.put(f"/api/teams/{team_id}", json={"name": "Renamed Duo"}).json()["name"] == "Renamed Duo"
    assert client.delete(f"/api/teams/{team_id}").status_code == 204
    assert client.get(f"/api/teams/{team_id}").status_code == 404


@pytest.fixture
def cards(db):
    CardSetService(db).create_set("Core Set", "CORE")
    service = CardService(db)
    return service.create_card("Suplex"), service.create_card("Dropkick")


def test_deck_card_amounts(db, make_wrestler, cards):
    suplex, dropkick = cards
    wrestler = make_wrestler("Deck Owner")
    service = DeckService(db)
    deck = service.create_deck(wrestler.wrestler_id)

    service.add_card(deck.deck_id, suplex.card_id, 2)
    deck = service.add_card(deck.deck_id, suplex.card_id)
    deck = service.add_card(deck.deck_id, dropkick.card_id)
    assert deck.card_count == 4
    assert {e.card_id: e.amount for e in deck.cards} == {suplex.card_id: 3, dropkick.card_id: 1}

    deck = service.remove_card(deck.deck_id, dropkick.card_id, 5)
    assert [e.card_id for e in deck.cards] == [suplex.card_id]
    with pytest.raises(EntityNotFoundError):
        service.remove_card(deck.deck_id, dropkick.card_id)
    with pytest.raises(BusinessRuleError):
        service.add_card(deck.deck_id, suplex.card_id, 0)
    assert [d.deck_id for d in service.find_by_wrestler(wrestler.wrestler_id)] == [deck.deck_id]


def test_deck_endpoints(client, make_wrestler, cards):
    suplex, _ = cards
    wrestler = make_wrestler("Api Deck Owner")
    r = client.post("/api/decks/", json={"wrestler_id": wrestler.wrestler_id})
    assert r.status_code == 201
    deck_id = r.json()["deck_id"]

    r = client.post(f"/api/decks/{deck_id}/cards", json={"card_id": suplex.card_id, "amount": 3})
    assert r.json()["card_count"] == 3
    r = client.delete(f"/api/decks/{deck_id}/cards/{suplex.card_id}?amount=1")
    assert r.json()["cards"] == [{"card_id": suplex.card_id, "amount": 2}]
    assert client.post(f"/api/decks/{deck_id}/cards", json={"card_id": suplex.card_id, "amount": 0}).status_code == 422
    assert client.post("/api/decks/", json={"wrestler_id": "W999"}).status_code == 404


def test_deck_card_amount_is_set_outright(db, client, make_wrestler, cards):
    suplex, dropkick = cards
    service = DeckService(db)
    deck = service.create_deck(make_wrestler("Editor").wrestler_id)
    service.add_card(deck.deck_id, suplex.card_id, 4)

    deck = service.set_card_amount(deck.deck_id, suplex.card_id, 2)
    assert deck.card_count == 2
    with pytest.raises(BusinessRuleError):
        service.set_card_amount(deck.deck_id, suplex.card_id, 0)
    with pytest.raises(EntityNotFoundError):
        service.set_card_amount(deck.deck_id, dropkick.card_id, 1)

    r = client.put(f"/api/decks/{deck.deck_id}/cards/{suplex.card_id}", json={"amount": 5})
    assert r.json()["cards"] == [{"card_id": suplex.card_id, "amount": 5}]
    assert client.put(f"/api/decks/{deck.deck_id}/cards/{suplex.card_id}", json={"amount": 0}).status_code == 422
