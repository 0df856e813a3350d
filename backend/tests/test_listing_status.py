import pytest

from immoauto.core.errors import ForbiddenError
from immoauto.models.listing import ListingStatus
from immoauto.services.listing_status import TRANSITIONS, can_transition, ensure_transition

S = ListingStatus

ALLOWED = {
    (S.draft, S.active),
    (S.draft, S.inactive),
    (S.active, S.draft),
    (S.active, S.sold),
    (S.active, S.rented),
    (S.active, S.inactive),
    (S.sold, S.inactive),
    (S.rented, S.inactive),
    (S.inactive, S.active),
    (S.inactive, S.draft),
}


@pytest.mark.parametrize("current", list(S))
@pytest.mark.parametrize("requested", list(S))
def test_transition_table(current, requested):
    assert can_transition(current, requested) == ((current, requested) in ALLOWED)


def test_every_status_has_an_entry():
    assert set(TRANSITIONS) == set(S)


def test_rejection_names_both_states():
    with pytest.raises(ForbiddenError) as exc:
        ensure_transition(S.sold, S.active)
    assert "SOLD" in exc.value.message
    assert "ACTIVE" in exc.value.message


def test_new_listing_starts_as_draft(client, make_user, make_property):
    _, headers = make_user()
    prop = make_property(headers, status=None)
    assert prop["status"] == "DRAFT"
    assert prop["version"] == 1


def test_sold_listing_cannot_go_back_to_active(client, make_user, make_property):
    _, headers = make_user()
    prop = make_property(headers)
    r = client.patch(f"/api/properties/{prop['id']}/status", json={"status": "SOLD"}, headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["data"]["status"] == "SOLD"

    r = client.patch(f"/api/properties/{prop['id']}/status", json={"status": "ACTIVE"}, headers=headers)
    assert r.status_code == 403
    body = r.json()
    assert body["success"] is False
    assert "SOLD" in body["message"] and "ACTIVE" in body["message"]

    r = client.patch(f"/api/properties/{prop['id']}/status", json={"status": "INACTIVE"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["data"]["status"] == "INACTIVE"


def test_vehicle_uses_same_table(client, make_user, make_vehicle):
    _, headers = make_user()
    vehicle = make_vehicle(headers)
    r = client.patch(f"/api/vehicles/{vehicle['id']}/status", json={"status": "RENTED"}, headers=headers)
    assert r.status_code == 200
    r = client.patch(f"/api/vehicles/{vehicle['id']}/status", json={"status": "DRAFT"}, headers=headers)
    assert r.status_code == 403


def test_only_owner_may_change_status(client, make_user, make_property):
    _, owner = make_user()
    _, other = make_user()
    prop = make_property(owner, status=None)
    # DRAFT -> ACTIVE is a valid edge, but ownership is checked first.
    r = client.patch(f"/api/properties/{prop['id']}/status", json={"status": "ACTIVE"}, headers=other)
    assert r.status_code == 403
    r = client.get(f"/api/properties/{prop['id']}")
    assert r.json()["data"]["status"] == "DRAFT"


def test_missing_listing_is_404(client, make_user):
    _, headers = make_user()
    r = client.patch("/api/properties/999/status", json={"status": "ACTIVE"}, headers=headers)
    assert r.status_code == 404
    r = client.patch("/api/vehicles/999/status", json={"status": "ACTIVE"}, headers=headers)
    assert r.status_code == 404


def test_stale_version_is_a_conflict(client, make_user, make_property):
    _, headers = make_user()
    prop = make_property(headers, status=None)
    seen = prop["version"]

    r = client.patch(
        f"/api/properties/{prop['id']}/status", json={"status": "ACTIVE", "version": seen}, headers=headers
    )
    assert r.status_code == 200
    assert r.json()["data"]["version"] == seen + 1

    r = client.patch(
        f"/api/properties/{prop['id']}/status", json={"status": "INACTIVE", "version": seen}, headers=headers
    )
    assert r.status_code == 409
    r = client.get(f"/api/properties/{prop['id']}")
    assert r.json()["data"]["status"] == "ACTIVE"


def test_status_change_through_update_is_checked(client, make_user, make_property):
    _, headers = make_user()
    prop = make_property(headers, status=None)
    r = client.put(f"/api/properties/{prop['id']}", json={"status": "SOLD"}, headers=headers)
    assert r.status_code == 403
    r = client.put(f"/api/properties/{prop['id']}", json={"status": "ACTIVE", "price": 240000}, headers=headers)
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["status"] == "ACTIVE"
    assert data["price"] == 240000
