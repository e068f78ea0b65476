"""Tests for discovery and blocking endpoints."""

from fastapi import status


def test_location_and_nearby(client, make_user, auth_headers) -> None:
    me = make_user("Me")
    other = make_user("Other", latitude=52.52, longitude=13.40)
    me_id, other_id = me.id, other.id
    headers = auth_headers(me_id)

    updated = client.put(
        "/api/v1/discovery/location",
        json={"latitude": 52.5200, "longitude": 13.4050},
        headers=headers,
    )
    assert updated.status_code == status.HTTP_204_NO_CONTENT

    nearby = client.get(
        "/api/v1/discovery/nearby",
        params={"latitude": 52.52, "longitude": 13.405, "maxDistanceKm": 5},
        headers=headers,
    ).json()

    assert [item["id"] for item in nearby] == [other_id]
    assert nearby[0]["distanceKm"] < 1
    assert me_id not in {item["id"] for item in nearby}


def test_out_of_range_location_is_rejected(client, alice_headers) -> None:
    response = client.put(
        "/api/v1/discovery/location",
        json={"latitude": 123, "longitude": 0},
        headers=alice_headers,
    )

    assert response.status_code == 422


def test_block_list_and_unblock(client, matched, alice_headers) -> None:
    _, bob = matched
    bob_id = bob.id

    created = client.post(
        "/api/v1/moderation/blocks",
        json={"blockedUserId": bob_id, "reason": "spam"},
        headers=alice_headers,
    )
    assert created.status_code == status.HTTP_201_CREATED
    block_id = created.json()["blockId"]

    duplicate = client.post(
        "/api/v1/moderation/blocks",
        json={"blockedUserId": bob_id},
        headers=alice_headers,
    )
    assert duplicate.status_code == status.HTTP_400_BAD_REQUEST

    blocks = client.get("/api/v1/moderation/blocks", headers=alice_headers).json()
    assert [(b["blockId"], b["blockedUser"]["id"], b["reason"]) for b in blocks] == [
        (block_id, bob_id, "spam")
    ]
    assert client.get("/api/v1/matches", headers=alice_headers).json() == []

    removed = client.delete(f"/api/v1/moderation/blocks/{bob_id}", headers=alice_headers)
    assert removed.status_code == status.HTTP_204_NO_CONTENT
    missing = client.delete(f"/api/v1/moderation/blocks/{bob_id}", headers=alice_headers)
    assert missing.status_code == status.HTTP_404_NOT_FOUND


def test_block_status_is_directed(client, alice, bob, alice_headers, bob_headers) -> None:
    bob_id, alice_id = bob.id, alice.id
    client.post(
        "/api/v1/moderation/blocks",
        json={"blockedUserId": bob_id},
        headers=alice_headers,
    )

    mine = client.get(f"/api/v1/moderation/blocks/{bob_id}/status", headers=alice_headers)
    theirs = client.get(f"/api/v1/moderation/blocks/{alice_id}/status", headers=bob_headers)

    assert mine.status_code == status.HTTP_200_OK
    assert mine.json() == {"userId": bob_id, "isBlocked": True}
    assert theirs.json() == {"userId": alice_id, "isBlocked": False}


def test_report_and_list_reports(client, alice, bob, alice_headers) -> None:
    bob_id = bob.id

    created = client.post(
        "/api/v1/moderation/reports",
        json={"reportedUserId": bob_id, "reason": "fake_profile", "description": "stock photos"},
        headers=alice_headers,
    )
    assert created.status_code == status.HTTP_201_CREATED
    report_id = created.json()["reportId"]

    again = client.post(
        "/api/v1/moderation/reports",
        json={"reportedUserId": bob_id, "reason": "spam"},
        headers=alice_headers,
    )
    assert again.status_code == status.HTTP_400_BAD_REQUEST
    assert again.json()["code"] == "invalid_input"

    unknown_reason = client.post(
        "/api/v1/moderation/reports",
        json={"reportedUserId": bob_id, "reason": "boring"},
        headers=alice_headers,
    )
    assert unknown_reason.status_code == status.HTTP_400_BAD_REQUEST

    reports = client.get("/api/v1/moderation/reports", headers=alice_headers).json()
    assert len(reports) == 1
    assert reports[0]["reportId"] == report_id
    assert reports[0]["reportedUser"]["id"] == bob_id
    assert reports[0]["reason"] == "fake_profile"
    assert reports[0]["description"] == "stock photos"
    assert reports[0]["status"] == "pending"
