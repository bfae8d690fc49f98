import pytest


@pytest.fixture
def booking(client, make_wrestler):
    show_type = client.post("/api/show-types/", json={"name": "Weekly"}).json()
    show = client.post("/api/shows/", json={"name": "Fight Night", "show_type_id": show_type["show_type_id"]}).json()
    match = client.post("/api/segment-types/", json={"name": "Match"}).json()
    promo = client.post("/api/segment-types/", json={"name": "Promo", "is_match": False}).json()
    wrestlers = [make_wrestler("Seg One"), make_wrestler("Seg Two"), make_wrestler("Seg Three")]
    return show, match, promo, wrestlers


def test_segments_are_ordered_on_the_show(client, booking):
    show, match, promo, wrestlers = booking
    first = client.post("/api/segments/", json={
        "show_id": show["show_id"],
        "segment_type_id": promo["segment_type_id"],
        "participant_ids": [wrestlers[0].wrestler_id],
    })
    assert first.status_code == 201
    second = client.post("/api/segments/", json={
        "show_id": show["show_id"],
        "segment_type_id": match["segment_type_id"],
        "participant_ids": [wrestlers[0].wrestler_id, wrestlers[1].wrestler_id],
        "stipulation": "No DQ",
    }).json()
    assert (first.json()["segment_order"], second["segment_order"]) == (1, 2)
    assert second["is_title_segment"] is False


def test_winners_must_be_participants(client, booking):
    show, match, _, wrestlers = booking
    segment = client.post("/api/segments/", json={
        "show_id": show["show_id"],
        "segment_type_id": match["segment_type_id"],
        "participant_ids": [wrestlers[0].wrestler_id, wrestlers[1].wrestler_id],
    }).json()

    r = client.put(f"/api/segments/{segment['segment_id']}/winners", json={"winner_ids": [wrestlers[2].wrestler_id]})
    assert r.status_code == 400

    r = client.put(f"/api/segments/{segment['segment_id']}/winners", json={"winner_ids": [wrestlers[1].wrestler_id]})
    assert r.status_code == 200
    assert [w["name"] for w in r.json()["winners"]] == ["Seg Two"]

    r = client.put(f"/api/segments/{segment['segment_id']}/narration", json={"narration": "[SPEAKER:Joe]: Wow"})
    assert r.json()["narration"] == "[SPEAKER:Joe]: Wow"


def test_segment_with_unknown_references(client, booking):
    show, match, _, _ = booking
    r = client.post("/api/segments/", json={
        "show_id": show["show_id"],
        "segment_type_id": match["segment_type_id"],
        "participant_ids": ["W999"],
    })
    assert r.status_code == 404
    r = client.post("/api/segments/", json={"show_id": "SH999", "segment_type_id": match["segment_type_id"]})
    assert r.status_code == 404
