def test_referee_round_trip(client):
    r = client.post("/api/referees/", json={"ref_name": "Earl Hebner", "description": "Veteran official"})
    assert r.status_code == 201, r.text
    referee = r.json()
    assert referee["ref_id"] == "R1"
    assert referee["creation_date"]

    r = client.get(f"/api/referees/{referee['ref_id']}")
    assert r.status_code == 200
    assert r.json()["ref_name"] == "Earl Hebner"

    r = client.put(f"/api/referees/{referee['ref_id']}", json={"description": "Senior official"})
    assert r.json()["description"] == "Senior official"

    assert client.get("/api/referees/count").json() == {"count": 1}
    assert client.delete(f"/api/referees/{referee['ref_id']}").status_code == 204
    assert client.get(f"/api/referees/{referee['ref_id']}").status_code == 404


def test_duplicate_referee_is_a_conflict(client):
    client.post("/api/referees/", json={"ref_name": "Charles Robinson"})
    r = client.post("/api/referees/", json={"ref_name": "Charles Robinson"})
    assert r.status_code == 409
    assert "already exists" in r.json()["detail"]


def test_referee_list_is_paged(client):
    for name in ["Alpha", "Bravo", "Charlie"]:
        client.post("/api/referees/", json={"ref_name": name})
    page = client.get("/api/referees/?page=1&size=2").json()
    assert [r["ref_name"] for r in page] == ["Charlie"]
    assert len(client.get("/api/referees/").json()) == 3


def test_npc_defaults_and_type_filter(client):
    r = client.post("/api/npcs/", json={"name": "Jim Ross", "npc_type": "Commentator"})
    assert r.status_code == 201
    r = client.post("/api/npcs/", json={"name": "Paul Heyman", "npc_type": "Manager"})
    assert r.status_code == 201
    r = client.post("/api/npcs/", json={"name": "Mystery Man"})
    assert r.json()["npc_type"] == "Other"

    commentators = client.get("/api/npcs/?npc_type=Commentator").json()
    assert [n["name"] for n in commentators] == ["Jim Ross"]
    assert client.post("/api/npcs/", json={"name": "Jim Ross"}).status_code == 409


def test_task_validation_and_ordering(client):
    assert client.post("/api/tasks/", json={"description": "x" * 256}).status_code == 422

    client.post("/api/tasks/", json={"description": "Someday"})
    client.post("/api/tasks/", json={"description": "Later", "due_date": "2026-12-01"})
    client.post("/api/tasks/", json={"description": "Soon", "due_date": "2026-11-01"})

    tasks = client.get("/api/tasks/").json()
    assert [t["description"] for t in tasks] == ["Soon", "Later", "Someday"]


def test_show_requires_existing_type_and_unique_name(client):
    r = client.post("/api/shows/", json={"name": "Monday Night", "show_type_id": "ST99"})
    assert r.status_code == 404

    show_type = client.post("/api/show-types/", json={"name": "Weekly", "expected_matches": 5}).json()
    payload = {"name": "Monday Night", "show_type_id": show_type["show_type_id"], "show_date": "2026-11-02"}
    r = client.post("/api/shows/", json=payload)
    assert r.status_code == 201, r.text
    assert r.json()["show_type_id"] == show_type["show_type_id"]
    assert client.post("/api/shows/", json=payload).status_code == 409

    between = client.get("/api/shows/between?start=2026-11-01&end=2026-11-30").json()
    assert [s["name"] for s in between] == ["Monday Night"]


def test_news_importance_is_validated(client):
    r = client.post("/api/news/", json={"headline": "Big news", "content": "Something happened", "importance": 6})
    assert r.status_code == 422

    r = client.post("/api/news/", json={"headline": "Big news", "content": "Something happened"})
    assert r.status_code == 201
    item = r.json()
    assert item["importance"] == 3
    assert item["category"] == "GENERAL"
    assert item["is_rumor"] is False

    r = client.put(f"/api/news/{item['news_id']}", json={"importance": 5})
    assert r.json()["importance"] == 5
    assert len(client.get("/api/news/?category=GENERAL").json()) == 1
    assert client.get("/api/news/?category=INJURY").json() == []


def test_cards_need_a_set_and_number_automatically(client):
    r = client.post("/api/cards/", json={"name": "Suplex"})
    assert r.status_code == 400

    r = client.post("/api/cards/sets", json={"name": "Core Set", "code": "core"})
    assert r.status_code == 201
    assert r.json()["code"] == "CORE"

    first = client.post("/api/cards/", json={"name": "Suplex", "set_code": "CORE", "damage": 2}).json()
    second = client.post("/api/cards/", json={"name": "Clothesline", "set_code": "core"}).json()
    assert (first["number"], second["number"]) == (1, 2)
    assert first["damage"] == 2

    r = client.post("/api/cards/", json={"name": "Copy", "set_code": "CORE", "number": 1})
    assert r.status_code == 409

    r = client.get("/api/cards/sets/core/2")
    assert r.json()["name"] == "Clothesline"
    assert client.get("/api/cards/sets/CORE/9").status_code == 404


def test_home_route(client):
    assert "Welcome" in client.get("/").json()["message"]
