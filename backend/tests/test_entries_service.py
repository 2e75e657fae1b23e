"""
Tests for the entry workflows and their geocoding behaviour.
"""
from datetime import date

import pytest

from domain.models import Coordinates
from services.entries import EntriesService, EntryDraft, EntryNotFoundError
from services.geocoding import InvalidLocationError, LocationNotFoundError


class StubResolver:
    def __init__(self, coords=None, error=None):
        self.coords = coords or Coordinates(latitude=40.7128, longitude=-74.006)
        self.error = error
        self.calls = []

    def resolve(self, place, country):
        self.calls.append((place, country))
        if self.error is not None:
            raise self.error
        return self.coords


def _draft(**overrides):
    data = dict(
        user_id="test-user",
        title="NYC Test",
        hobby="Photography",
        place="New York",
        country="United States",
        date=date(2025, 6, 1),
    )
    data.update(overrides)
    return EntryDraft(**data)


def test_create_entry_geocodes_place_and_country(session_factory):
    resolver = StubResolver()
    service = EntriesService(resolver=resolver)

    with session_factory() as session:
        entry = service.create_entry(session, _draft())

    assert resolver.calls == [("New York", "United States")]
    assert entry.latitude == 40.7128
    assert entry.longitude == -74.006
    assert entry.created_at is not None


def test_create_entry_with_picked_point_skips_geocoding(session_factory):
    resolver = StubResolver()
    service = EntriesService(resolver=resolver)

    with session_factory() as session:
        entry = service.create_entry(session, _draft(latitude=27.9, longitude=34.3))

    assert resolver.calls == []
    assert (entry.latitude, entry.longitude) == (27.9, 34.3)


def test_create_entry_rejects_out_of_range_point(session_factory):
    service = EntriesService(resolver=StubResolver())

    with session_factory() as session:
        with pytest.raises(ValueError):
            service.create_entry(session, _draft(latitude=120.0, longitude=0.0))


def test_create_entry_propagates_geocoding_failure(session_factory):
    service = EntriesService(resolver=StubResolver(error=LocationNotFoundError("no results")))

    with session_factory() as session:
        with pytest.raises(LocationNotFoundError):
            service.create_entry(session, _draft(place="NowhereLand", country="Narnia"))
        assert service.list_entries(session, "test-user") == []


def test_create_entry_requires_user(session_factory):
    service = EntriesService(resolver=StubResolver())

    with session_factory() as session:
        with pytest.raises(ValueError):
            service.create_entry(session, _draft(user_id=""))


def test_list_entries_scoped_to_user_newest_first(session_factory):
    service = EntriesService(resolver=StubResolver())

    with session_factory() as session:
        service.create_entry(session, _draft(title="Old", date=date(2024, 1, 1)))
        service.create_entry(session, _draft(title="New", date=date(2025, 1, 1)))
        service.create_entry(session, _draft(title="Other", user_id="someone-else"))

        titles = [e.title for e in service.list_entries(session, "test-user")]

    assert titles == ["New", "Old"]


def test_list_entries_requires_user(session_factory):
    service = EntriesService(resolver=StubResolver())
    with session_factory() as session:
        with pytest.raises(ValueError):
            service.list_entries(session, "")


def test_update_entry_regeocodes_when_place_changes(session_factory):
    resolver = StubResolver()
    service = EntriesService(resolver=resolver)

    with session_factory() as session:
        entry = service.create_entry(session, _draft())
        resolver.coords = Coordinates(latitude=34.05, longitude=-118.24)

        updated = service.update_entry(session, entry.id, "test-user", {"place": "Los Angeles"})

    assert resolver.calls[-1] == ("Los Angeles", "United States")
    assert (updated.latitude, updated.longitude) == (34.05, -118.24)
    assert updated.place == "Los Angeles"
    assert updated.updated_at >= entry.updated_at


def test_update_entry_keeps_coordinates_when_location_unchanged(session_factory):
    resolver = StubResolver()
    service = EntriesService(resolver=resolver)

    with session_factory() as session:
        entry = service.create_entry(session, _draft())
        updated = service.update_entry(
            session,
            entry.id,
            "test-user",
            {"notes": "Great day", "place": "New York", "country": "United States"},
        )

    assert len(resolver.calls) == 1
    assert updated.notes == "Great day"
    assert (updated.latitude, updated.longitude) == (entry.latitude, entry.longitude)


def test_update_entry_with_picked_point_skips_geocoding(session_factory):
    resolver = StubResolver()
    service = EntriesService(resolver=resolver)

    with session_factory() as session:
        entry = service.create_entry(session, _draft())
        updated = service.update_entry(
            session,
            entry.id,
            "test-user",
            {"place": "Somewhere offshore", "latitude": 10.5, "longitude": -20.25},
        )

    assert len(resolver.calls) == 1
    assert (updated.latitude, updated.longitude) == (10.5, -20.25)


def test_update_entry_surfaces_invalid_location(session_factory):
    resolver = StubResolver()
    service = EntriesService(resolver=resolver)

    with session_factory() as session:
        entry = service.create_entry(session, _draft())
        resolver.error = InvalidLocationError("A place or a country is required")
        with pytest.raises(InvalidLocationError):
            service.update_entry(session, entry.id, "test-user", {"place": None, "country": None})

        unchanged = service.get_entry(session, entry.id, "test-user")

    assert unchanged.place == "New York"


def test_update_entry_of_other_user_is_not_found(session_factory):
    service = EntriesService(resolver=StubResolver())

    with session_factory() as session:
        entry = service.create_entry(session, _draft())
        with pytest.raises(EntryNotFoundError):
            service.update_entry(session, entry.id, "intruder", {"title": "Mine now"})


def test_delete_entry(session_factory):
    service = EntriesService(resolver=StubResolver())

    with session_factory() as session:
        entry = service.create_entry(session, _draft())
        service.delete_entry(session, entry.id, "test-user")

        with pytest.raises(EntryNotFoundError):
            service.get_entry(session, entry.id, "test-user")
        with pytest.raises(EntryNotFoundError):
            service.delete_entry(session, entry.id, "test-user")


@pytest.mark.parametrize("point", [{"latitude": 27.9}, {"longitude": 34.3}])
def test_create_entry_rejects_half_picked_point(session_factory, point):
    resolver = StubResolver()
    service = EntriesService(resolver=resolver)

    with session_factory() as session:
        with pytest.raises(ValueError):
            service.create_entry(session, _draft(place="Paris", country=None, **point))
        assert service.list_entries(session, "test-user") == []

    assert resolver.calls == []


def test_update_entry_rejects_half_picked_point(session_factory):
    resolver = StubResolver()
    service = EntriesService(resolver=resolver)

    with session_factory() as session:
        entry = service.create_entry(session, _draft())
        with pytest.raises(ValueError):
            service.update_entry(session, entry.id, "test-user", {"place": "Boston", "latitude": 42.36})
        unchanged = service.get_entry(session, entry.id, "test-user")

    assert len(resolver.calls) == 1
    assert unchanged.place == "New York"
