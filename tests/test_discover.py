"""Tests for public club discovery."""

from datetime import datetime, timedelta

import pytest

from app.models.club import Club


def names(page):
    return [club["name"] for club in page["clubs"]]


def test_only_public_clubs_are_listed(client, member_headers, create_club):
    create_club(name="Open Court")
    create_club(name="Hidden Court", privacy="private")
    create_club(name="Invite Only", privacy="restricted")

    page = client.get("/api/v1/discover", headers=member_headers).json()

    assert names(page) == ["Open Court"]
    assert page["total"] == 1
    assert "invite_code" not in page["clubs"][0]


def test_listing_shape(client, member_headers, create_club):
    create_club()

    club = client.get("/api/v1/discover", headers=member_headers).json()["clubs"][0]

    assert club["owner"] == "Olivia Owner"
    assert club["members"] == 1
    assert club["meeting_days"] == ["Tuesday", "Saturday"]
    assert club["created"].endswith("ago")


def test_pagination(client, member_headers, create_club):
    for i in range(5):
        create_club(name=f"Club {i:02d}")

    first = client.get("/api/v1/discover", params={"per_page": 2}, headers=member_headers).json()
    last = client.get("/api/v1/discover", params={"per_page": 2, "page": 3}, headers=member_headers).json()

    assert names(first) == ["Club 04", "Club 03"]
    assert first["has_more"] is True
    assert first["next_page"] == 2
    assert first["total"] == 5
    assert names(last) == ["Club 00"]
    assert last["has_more"] is False
    assert last["next_page"] is None


def test_filters_and_all(client, member_headers, create_club):
    create_club(name="Morning Tennis", sport="tennis", skill_level="advanced")
    create_club(name="Evening Tennis", sport="tennis", skill_level="beginner")
    create_club(name="Sunday Football", sport="football", skill_level="beginner")

    def discover(**params):
        return client.get("/api/v1/discover", params=params, headers=member_headers).json()

    assert sorted(names(discover(sport="tennis"))) == ["Evening Tennis", "Morning Tennis"]
    assert names(discover(sport="tennis", skill="advanced")) == ["Morning Tennis"]
    assert len(discover(sport="all", skill="all")["clubs"]) == 3


def test_search_is_case_insensitive_and_counted(client, member_headers, create_club):
    create_club(name="Lakeside Rowing", location="North Lake")
    create_club(name="City Cyclists", description="Weekend rides around the LAKE shore.")
    create_club(name="Chess Masters", sport="chess")

    page = client.get("/api/v1/discover", params={"search": "lake"}, headers=member_headers).json()

    assert sorted(names(page)) == ["City Cyclists", "Lakeside Rowing"]
    assert page["total"] == 2


@pytest.mark.parametrize("term", ["%", "_"])
def test_search_wildcard_characters_match_literally(client, member_headers, create_club, term):
    create_club(name="Lakeside Rowing")
    create_club(name="Chess Masters", sport="chess")

    page = client.get("/api/v1/discover", params={"search": term}, headers=member_headers).json()

    assert page["clubs"] == []
    assert page["total"] == 0


def test_search_finds_literal_percent(client, member_headers, create_club):
    create_club(name="Hundred % Hoops")
    create_club(name="Chess Masters", sport="chess")

    page = client.get("/api/v1/discover", params={"search": "100%"}, headers=member_headers).json()
    assert page["total"] == 0

    page = client.get("/api/v1/discover", params={"search": "d % h"}, headers=member_headers).json()
    assert names(page) == ["Hundred % Hoops"]


def test_sort_by_members(client, member_headers, create_club):
    create_club(name="Small Club")
    popular = create_club(name="Popular Club")
    client.post("/api/v1/clubs/join", json={"invite_code": popular["invite_code"]}, headers=member_headers)

    page = client.get("/api/v1/discover", params={"sort": "members"}, headers=member_headers).json()

    assert names(page) == ["Popular Club", "Small Club"]
    assert page["clubs"][0]["members"] == 2


def test_created_is_humanized(client, member_headers, create_club, db_session):
    club = create_club()
    db_session.get(Club, club["id"]).created_at = datetime.utcnow() - timedelta(days=3, minutes=1)
    db_session.commit()

    listed = client.get("/api/v1/discover", headers=member_headers).json()["clubs"][0]

    assert listed["created"] == "3 days ago"


def test_get_public_club(client, member_headers, create_club):
    public = create_club(name="Open Court")
    private = create_club(name="Hidden Court", privacy="private")

    response = client.get(f"/api/v1/discover/{public['id']}", headers=member_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Open Court"

    assert client.get(f"/api/v1/discover/{private['id']}", headers=member_headers).status_code == 404
    assert client.get("/api/v1/discover/9999", headers=member_headers).status_code == 404


def test_discover_requires_auth(client):
    assert client.get("/api/v1/discover").status_code == 401
