def _request(client, sender, email):
    return client.post("/api/friends/request", json={"email": email}, headers=sender.headers)


def _befriend(client, a, b):
    r = _request(client, a, b.email)
    assert r.status_code == 201, r.text
    r = client.patch(f"/api/friends/requests/{r.json()['id']}", json={"status": "accepted"}, headers=b.headers)
    assert r.status_code == 200, r.text


def _earn_track(client, user, select_week, complete_categories):
    complete_categories(user, select_week(user), 2)
    return client.get("/api/user/achievements", headers=user.headers).json()[0]


def test_friend_request_rules(client, make_user):
    alice = make_user()
    bob = make_user()

    assert _request(client, alice, "nobody@example.com").status_code == 404
    r = _request(client, alice, alice.email)
    assert r.status_code == 400
    assert r.json()["message"] == "Cannot send friend request to yourself"

    r = _request(client, alice, bob.email.upper())
    assert r.status_code == 201
    assert r.json()["status"] == "pending"

    # either direction counts as a duplicate while pending
    assert _request(client, alice, bob.email).status_code == 400
    r = _request(client, bob, alice.email)
    assert r.status_code == 400
    assert r.json()["message"] == "Friend request already exists or you are already friends"


def test_accept_request(client, make_user):
    alice = make_user(first_name="Alice")
    bob = make_user(first_name="Bob")
    friendship = _request(client, alice, bob.email).json()

    pending = client.get("/api/friends/requests", headers=bob.headers).json()
    assert len(pending) == 1
    assert pending[0]["requester"]["email"] == alice.email
    assert pending[0]["addressee"]["email"] == bob.email
    assert client.get("/api/friends/requests", headers=alice.headers).json() == []

    # only the addressee can answer
    r = client.patch(f"/api/friends/requests/{friendship['id']}", json={"status": "accepted"}, headers=alice.headers)
    assert r.status_code == 404

    r = client.patch(f"/api/friends/requests/{friendship['id']}", json={"status": "accepted"}, headers=bob.headers)
    assert r.status_code == 200
    assert r.json()["status"] == "accepted"

    assert [f["id"] for f in client.get("/api/friends", headers=alice.headers).json()] == [bob.id]
    assert [f["id"] for f in client.get("/api/friends", headers=bob.headers).json()] == [alice.id]
    assert client.get("/api/friends/requests", headers=bob.headers).json() == []

    feed = client.get("/api/activity-feed", headers=bob.headers).json()
    assert any(a["activityType"] == "friend_added" and "Alice" in a["message"] for a in feed)

    # already friends
    assert _request(client, bob, alice.email).status_code == 400


def test_bad_status_is_rejected(client, make_user):
    alice = make_user()
    bob = make_user()
    friendship = _request(client, alice, bob.email).json()
    r = client.patch(f"/api/friends/requests/{friendship['id']}", json={"status": "blocked"}, headers=bob.headers)
    assert r.status_code == 400


def test_declined_request_can_be_resent(client, make_user):
    alice = make_user()
    bob = make_user()
    friendship = _request(client, alice, bob.email).json()
    r = client.patch(f"/api/friends/requests/{friendship['id']}", json={"status": "declined"}, headers=bob.headers)
    assert r.json()["status"] == "declined"

    # answering twice is not possible
    r = client.patch(f"/api/friends/requests/{friendship['id']}", json={"status": "accepted"}, headers=bob.headers)
    assert r.status_code == 404

    assert client.get("/api/friends", headers=alice.headers).json() == []
    assert _request(client, alice, bob.email).status_code == 201


def test_remove_friend(client, make_user):
    alice = make_user()
    bob = make_user()
    _befriend(client, alice, bob)

    r = client.delete(f"/api/friends/{alice.id}", headers=bob.headers)
    assert r.status_code == 204
    assert client.get("/api/friends", headers=alice.headers).json() == []
    assert client.get("/api/friends", headers=bob.headers).json() == []


def test_activity_feed_visibility(client, make_user, select_week, complete_categories):
    alice = make_user()
    bob = make_user()
    carol = make_user()
    _befriend(client, alice, bob)
    _earn_track(client, alice, select_week, complete_categories)

    def types(user, owner):
        feed = client.get("/api/activity-feed", headers=user.headers).json()
        return {a["activityType"] for a in feed if a["userId"] == owner.id}

    assert "achievement_earned" in types(alice, alice)
    assert "achievement_earned" in types(bob, alice)
    assert types(carol, alice) == set()


def test_share_achievement(client, make_user, select_week, complete_categories):
    alice = make_user()
    bob = make_user()
    carol = make_user()
    _befriend(client, alice, bob)
    achievement = _earn_track(client, alice, select_week, complete_categories)

    # only the owner can share
    r = client.post(f"/api/achievements/{achievement['id']}/share", json={}, headers=bob.headers)
    assert r.status_code == 404

    r = client.post(
        f"/api/achievements/{achievement['id']}/share",
        json={"message": "On track!"},
        headers=alice.headers,
    )
    assert r.status_code == 201
    share = r.json()
    assert share["sharedWith"] == "friends"
    assert share["achievement"]["level"] == "track"
    assert share["user"]["id"] == alice.id

    def visible(user):
        return [s["id"] for s in client.get("/api/shared-achievements", headers=user.headers).json()]

    assert visible(alice) == [share["id"]]
    assert visible(bob) == [share["id"]]
    assert visible(carol) == []

    public = client.post(
        f"/api/achievements/{achievement['id']}/share",
        json={"sharedWith": "public"},
        headers=alice.headers,
    ).json()
    assert visible(carol) == [public["id"]]
    assert visible(bob) == [public["id"], share["id"]]

    feed = client.get("/api/activity-feed", headers=bob.headers).json()
    shared = [a for a in feed if a["activityType"] == "achievement_shared"]
    assert shared[0]["message"] in ("On track!", "Shared a 'track' week")
    assert {a["message"] for a in shared} == {"On track!", "Shared a 'track' week"}
