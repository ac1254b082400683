import asyncio

import pytest

from carbon_tracker.db.tables import Activity, User
from carbon_tracker.errors import CarbonTrackerError, ErrorKind
from carbon_tracker.repositories import activity_repository
from carbon_tracker.services.activity_service import ActivityService


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def users(db_session):
    alice = User(username="alice", password_hash="x", email="alice@example.com")
    bob = User(username="bob", password_hash="x", email="bob@example.com")
    db_session.add_all([alice, bob])
    db_session.commit()
    return alice.id, bob.id


@pytest.fixture
def service(db_session, provider_stub):
    return ActivityService(db_session, provider_stub.climatiq())


def test_create_then_get_round_trips_details(service, users):
    alice, _ = users
    details = {"distance": 12.5, "vehicle": "car", "notes": {"route": ["home", "office"]}}

    created = run(service.create_activity(alice, "transport", details, 2.5))
    fetched = service.get_activity_by_id(created.id, alice)

    assert fetched.details == details
    assert fetched.carbon_kg == 2.5
    assert fetched.activity_type == "transport"


def test_create_estimates_when_carbon_is_missing(service, users, provider_stub):
    alice, _ = users
    provider_stub.body = {"co2e": 4.2}

    created = run(service.create_activity(alice, "transport", {"distance": 20, "vehicle": "train"}))

    assert created.carbon_kg == 4.2
    assert len(provider_stub.requests) == 1


def test_create_rejects_invalid_details(service, users):
    alice, _ = users
    with pytest.raises(CarbonTrackerError) as exc_info:
        run(service.create_activity(alice, "food", {"food_type": "beef"}, 1.0))
    assert exc_info.value.kind is ErrorKind.INVALID_INPUT


def test_other_users_activity_is_not_found(service, users):
    alice, bob = users
    created = run(service.create_activity(alice, "electricity", {"energy": 50, "country": "VN"}, 20.0))

    with pytest.raises(CarbonTrackerError) as exc_info:
        service.get_activity_by_id(created.id, bob)
    assert exc_info.value.kind is ErrorKind.NOT_FOUND

    with pytest.raises(CarbonTrackerError):
        service.delete_activity(created.id, bob)
    with pytest.raises(CarbonTrackerError):
        run(service.update_activity(created.id, bob, "electricity", {"energy": 1, "country": "VN"}, 1.0))

    assert service.get_activity_by_id(created.id, alice).carbon_kg == 20.0


def test_get_all_is_scoped_to_owner(service, users):
    alice, bob = users
    run(service.create_activity(alice, "food", {"food_type": "rice", "quantity": 1}, 1.0))
    run(service.create_activity(alice, "food", {"food_type": "beef", "quantity": 1}, 27.0))
    run(service.create_activity(bob, "food", {"food_type": "fish", "quantity": 1}, 3.0))

    activities = service.get_all_activities(alice)

    assert [a.details["food_type"] for a in activities] == ["beef", "rice"]


def test_update_replaces_fields(service, users):
    alice, _ = users
    created = run(service.create_activity(alice, "transport", {"distance": 5, "vehicle": "bus"}, 0.5))

    updated = run(service.update_activity(created.id, alice, "transport", {"distance": 8, "vehicle": "train"}, 0.3))

    assert updated.details == {"distance": 8, "vehicle": "train"}
    assert updated.carbon_kg == 0.3


def test_delete_then_missing(service, users):
    alice, _ = users
    created = run(service.create_activity(alice, "transport", {"distance": 5, "vehicle": "bus"}, 0.5))

    service.delete_activity(created.id, alice)

    with pytest.raises(CarbonTrackerError) as exc_info:
        service.delete_activity(created.id, alice)
    assert exc_info.value.kind is ErrorKind.NOT_FOUND


@pytest.mark.parametrize("stored", ["{not json", "[1, 2, 3]", "null"])
def test_malformed_stored_details_read_as_empty(db_session, users, stored, caplog):
    alice, _ = users
    row = Activity(user_id=alice, activity_type="transport", details=stored, carbon_kg=1.0)
    db_session.add(row)
    db_session.commit()

    activity = activity_repository.find_activity_by_id(db_session, row.id, alice)

    assert activity.details == {}
    assert "defaulting to empty object" in caplog.text


def test_estimate_wraps_activity(service, provider_stub):
    provider_stub.body = {"co2e": 12.0}

    response = run(service.estimate_emissions("food", {"food_type": "lamb", "quantity": 0.4}))

    assert response.activity.carbon_kg == 12.0
    assert response.activity.details == {"food_type": "lamb", "quantity": 0.4}
    assert "red meat" in response.tip
