def test_search_spans_both_kinds_and_skips_drafts(client, make_user, make_property, make_vehicle):
    _, headers = make_user()
    make_property(headers, title="Renovated loft near the canal")
    make_property(headers, status=None, title="Draft loft not yet published")
    make_vehicle(headers, title="Loft-friendly cargo van", brand="Ford", model="Transit", type="VAN")

    r = client.get("/api/search", params={"query": "loft"})
    assert r.status_code == 200
    data = r.json()["data"]
    assert [p["title"] for p in data["properties"]] == ["Renovated loft near the canal"]
    assert [v["brand"] for v in data["vehicles"]] == ["Ford"]


def test_short_query_returns_nothing(client, make_user, make_property):
    _, headers = make_user()
    make_property(headers)
    r = client.get("/api/search", params={"query": "a"})
    assert r.json()["data"] == {"properties": [], "vehicles": []}
    assert client.get("/api/search/suggestions", params={"query": " "}).json()["data"] == []


def test_suggestions_mix_titles_vehicles_and_cities(client, make_user, make_property, make_vehicle):
    _, headers = make_user()
    make_property(headers, title="Parisian studio", city="Paris")
    make_property(headers, title="Another flat", city="Paris")
    make_vehicle(headers, brand="Parisienne", model="Roadster")

    r = client.get("/api/search/suggestions", params={"query": "paris"})
    items = r.json()["data"]
    assert [i["type"] for i in items] == ["property", "vehicle", "city"]
    assert items[1]["label"] == "Parisienne Roadster"
    assert items[2] == {"type": "city", "id": None, "label": "Paris"}


def test_wildcards_in_query_match_literally(client, make_user, make_property, make_vehicle):
    _, headers = make_user()
    make_property(headers, title="Flat with 100% renovated kitchen")
    make_property(headers, title="Plain family house")
    make_vehicle(headers)

    r = client.get("/api/search", params={"query": "%%"})
    assert r.json()["data"] == {"properties": [], "vehicles": []}
    r = client.get("/api/search", params={"query": "0%"})
    assert [p["title"] for p in r.json()["data"]["properties"]] == ["Flat with 100% renovated kitchen"]
    r = client.get("/api/search", params={"query": "__"})
    assert r.json()["data"]["properties"] == []
    assert client.get("/api/search/suggestions", params={"query": "%_"}).json()["data"] == []
    assert client.get("/api/properties", params={"city": "%"}).json()["total"] == 0


def test_admin_user_search_escapes_wildcards(client, make_admin, make_user):
    _, admin = make_admin()
    make_user("Jane Doe")
    r = client.get("/api/admin/users", params={"search": "%"}, headers=admin)
    assert r.json()["total"] == 0
