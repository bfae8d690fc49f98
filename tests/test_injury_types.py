import pytest

from promotion.core.exceptions import DuplicateEntityError
from promotion.injuries.services.injury_type_service import InjuryTypeService


@pytest.fixture
def catalogue(db):
    service = InjuryTypeService(db)
    service.create_injury_type("Sprained Wrist", card_effect=-1)
    service.create_injury_type("Concussion", health_effect=-3, stamina_effect=-2,
                               special_effects="Cannot use head strikes")
    service.create_injury_type("Bruised Ribs", health_effect=-1, stamina_effect=0, special_effects="   ")
    return service


def test_severity_order_puts_harshest_first(catalogue):
    assert [t.injury_name for t in catalogue.get_ordered_by_severity()] == [
        "Concussion", "Bruised Ribs", "Sprained Wrist",
    ]
    assert catalogue.get_by_name("Concussion").total_effect == -5


def test_effect_queries_ignore_zero_and_blank(catalogue):
    assert [t.injury_name for t in catalogue.get_with_stamina_effects()] == ["Concussion"]
    assert [t.injury_name for t in catalogue.get_with_card_effects()] == ["Sprained Wrist"]
    assert [t.injury_name for t in catalogue.get_with_special_effects()] == ["Concussion"]
    assert catalogue.get_stats() == {
        "health_effect_count": 2,
        "stamina_effect_count": 1,
        "card_effect_count": 1,
        "special_effect_count": 1,
        "total_types": 5,
    }


def test_names_are_unique(catalogue):
    with pytest.raises(DuplicateEntityError):
        catalogue.create_injury_type("Concussion")
    wrist = catalogue.get_by_name("Sprained Wrist")
    with pytest.raises(DuplicateEntityError):
        catalogue.update_injury_type(wrist.injury_type_id, injury_name="Bruised Ribs")


def test_injury_type_endpoints(client):
    r = client.post("/api/injury-types/", json={"injury_name": "Torn ACL", "health_effect": -4})
    assert r.status_code == 201
    acl = r.json()
    assert acl["injury_type_id"] == "IT1"

    r = client.put(f"/api/injury-types/{acl['injury_type_id']}",
                   json={"health_effect": None, "stamina_effect": -3})
    assert r.json()["health_effect"] is None
    assert r.json()["stamina_effect"] == -3

    assert client.get("/api/injury-types/by-name/Torn ACL").json()["injury_type_id"] == "IT1"
    assert client.get("/api/injury-types/count").json() == {"count": 1}
    assert client.get("/api/injury-types/stats").json()["stamina_effect_count"] == 1
    assert client.post("/api/injury-types/", json={"injury_name": "Torn ACL"}).status_code == 409

    assert client.delete(f"/api/injury-types/{acl['injury_type_id']}").status_code == 204
    assert client.get(f"/api/injury-types/{acl['injury_type_id']}").status_code == 404
