def test_only_active_listings_are_public(client, make_user, make_property):
    _, headers = make_user()
    make_property(headers, title="Active loft in Paris")
    make_property(headers, status=None, title="Draft house in Paris")

    r = client.get("/api/properties")
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 1
    assert body["data"][0]["title"] == "Active loft in Paris"
    assert body["data"][0]["owner"]["id"]


def test_property_filters_and_pagination(client, make_user, make_property):
    _, headers = make_user()
    make_property(headers, price=100000, city="Paris", features=["Garden"])
    make_property(headers, price=300000, city="Paris", listingType="RENT")
    make_property(headers, price=500000, city="Nice", rooms=6)

    r = client.get("/api/properties", params={"city": "paris"})
    assert r.json()["total"] == 2
    r = client.get("/api/properties", params={"minPrice": 200000})
    assert r.json()["total"] == 2
    r = client.get("/api/properties", params={"listingType": "RENT"})
    assert [p["price"] for p in r.json()["data"]] == [300000]
    r = client.get("/api/properties", params={"rooms": 5})
    assert [p["city"] for p in r.json()["data"]] == ["Nice"]
    r = client.get("/api/properties", params={"features": "Garden"})
    assert r.json()["total"] == 1

    r = client.get("/api/properties", params={"sortBy": "price", "sortOrder": "asc", "limit": 2})
    body = r.json()
    assert [p["price"] for p in body["data"]] == [100000, 300000]
    assert body["total"] == 3
    assert body["totalPages"] == 2
    r = client.get("/api/properties", params={"sortBy": "price", "sortOrder": "asc", "limit": 2, "page": 2})
    assert [p["price"] for p in r.json()["data"]] == [500000]


def test_vehicle_filters(client, make_user, make_vehicle):
    _, headers = make_user()
    make_vehicle(headers, brand="Peugeot", model="208", mileage=90000, fuelType="DIESEL")
    make_vehicle(headers, brand="Tesla", model="Model 3", year=2022, mileage=10000, fuelType="ELECTRIC")

    r = client.get("/api/vehicles", params={"fuelType": "ELECTRIC"})
    assert [v["brand"] for v in r.json()["data"]] == ["Tesla"]
    r = client.get("/api/vehicles", params={"maxMileage": 50000})
    assert [v["brand"] for v in r.json()["data"]] == ["Tesla"]
    r = client.get("/api/vehicles", params={"search": "peug"})
    assert [v["model"] for v in r.json()["data"]] == ["208"]
    r = client.get("/api/vehicles", params={"sortBy": "year", "sortOrder": "desc"})
    assert [v["year"] for v in r.json()["data"]] == [2022, 2020]


def test_create_requires_auth_and_valid_body(client, make_user, property_payload):
    assert client.post("/api/properties", json=property_payload).status_code == 401
    _, headers = make_user()
    r = client.post("/api/properties", json={**property_payload, "title": "abc"}, headers=headers)
    assert r.status_code == 400


def test_update_and_delete_are_owner_only(client, make_user, make_vehicle):
    _, owner = make_user()
    _, other = make_user()
    vehicle = make_vehicle(owner)

    assert client.put(f"/api/vehicles/{vehicle['id']}", json={"price": 1}, headers=other).status_code == 403
    assert client.delete(f"/api/vehicles/{vehicle['id']}", headers=other).status_code == 403

    r = client.put(f"/api/vehicles/{vehicle['id']}", json={"price": 11000, "color": "Blue"}, headers=owner)
    assert r.status_code == 200
    assert r.json()["data"]["color"] == "Blue"

    assert client.delete(f"/api/vehicles/{vehicle['id']}", headers=owner).status_code == 200
    assert client.get(f"/api/vehicles/{vehicle['id']}").status_code == 404


def test_images_on_create_and_replace_on_update(client, make_user, make_property, png_b64):
    _, headers = make_user()
    prop = make_property(headers, images=[png_b64, f"data:image/png;base64,{png_b64}"])
    assert [img["mimeType"] for img in prop["images"]] == ["image/png", "image/png"]

    r = client.put(f"/api/properties/{prop['id']}", json={"images": [png_b64]}, headers=headers)
    assert r.status_code == 200
    images = r.json()["data"]["images"]
    assert len(images) == 1
