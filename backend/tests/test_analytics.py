def test_views_chart_counts_own_listings(client, make_user, make_property, make_vehicle):
    _, owner = make_user()
    _, other = make_user()
    prop = make_property(owner)
    vehicle = make_vehicle(owner)
    foreign = make_property(other)

    client.get(f"/api/properties/{prop['id']}")
    client.get(f"/api/properties/{prop['id']}")
    client.get(f"/api/vehicles/{vehicle['id']}")
    client.get(f"/api/properties/{foreign['id']}")

    r = client.get("/api/analytics/views", headers=owner)
    assert r.status_code == 200
    chart = r.json()["data"]
    assert len(chart["labels"]) == 7
    assert len(chart["data"]) == 7
    assert chart["data"][-1] == 3
    assert chart["total"] == 3


def test_activity_chart_and_received_total(client, make_user, make_property):
    seller_id, seller = make_user()
    _, buyer = make_user()
    prop = make_property(seller)
    r = client.post(
        "/api/messages/conversations",
        json={"sellerId": seller_id, "propertyId": prop["id"], "message": "Hello there"},
        headers=buyer,
    )
    conv_id = r.json()["data"]["id"]
    client.post(f"/api/messages/conversations/{conv_id}/messages", json={"content": "Hi!"}, headers=seller)

    chart = client.get("/api/analytics/activity", headers=seller).json()["data"]
    assert chart["data"][-1] == 2
    assert chart["total"] == 1

    buyer_chart = client.get("/api/analytics/activity", headers=buyer).json()["data"]
    assert buyer_chart["data"][-1] == 2
    assert buyer_chart["total"] == 0


def test_analytics_requires_auth(client):
    assert client.get("/api/analytics/views").status_code == 401
