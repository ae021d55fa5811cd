from tests.test_main import FakeBackend, TestingSessionLocal, make_booking, make_seat, make_user, test_db, \
    local_store, backend
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from db.database import Base
from db.models import StoredBlob
from store.base import Collection, RemoteUnavailableError
from store.fallback_store import FallbackStore
from store.local_store import LocalStore
from store.remote_store import RemoteStore


class TestLocalStore:
    def test_first_read_should_seed_admin_and_demo_student(self, local_store):
        users = local_store.get_users()

        assert [user['email'] for user in users] == ['admin@library.edu', 'john@student.edu']
        assert users[0]['role'] == 'ADMIN'
        assert users[1]['studentId'] == 'CS2024001'
        assert all(user['isBlocked'] is False for user in users)

    def test_first_read_should_seed_seat_layout(self, local_store):
        seats = local_store.get_seats()

        assert len(seats) == 27
        assert seats[0] == {'id': 's-l1', 'label': 'L1', 'type': 'Standard', 'isMaintenance': False,
                            'x': 1, 'y': 1, 'rotation': 180}

    def test_bookings_should_start_empty(self, local_store):
        assert local_store.get_bookings() == []

    def test_collection_should_be_stored_as_one_blob(self, local_store):
        local_store.save_seats([make_seat('seat-1', 0, 0)])

        with TestingSessionLocal() as session:
            blob = session.get(StoredBlob, Collection.SEATS)

        assert blob.value == '[{"id": "seat-1", "label": "A1", "type": "Standard", "isMaintenance": false, ' \
                             '"x": 0, "y": 0, "rotation": 0}]'

    def test_save_seats_should_replace_whole_collection(self, local_store):
        local_store.get_seats()

        local_store.save_seats([make_seat('seat-1', 0, 0)])

        assert [seat['id'] for seat in local_store.get_seats()] == ['seat-1']

    def test_create_booking_should_refuse_taken_slot(self, local_store):
        assert local_store.create_booking(make_booking('bk-1', 's-c1', 'student-1')) is True
        assert local_store.create_booking(make_booking('bk-2', 's-c1', 'student-2')) is False

        assert [booking['id'] for booking in local_store.get_bookings()] == ['bk-1']

    def test_create_booking_should_allow_slot_of_cancelled_booking(self, local_store):
        local_store.create_booking(make_booking('bk-1', 's-c1', 'student-1', status='CANCELLED'))

        assert local_store.create_booking(make_booking('bk-2', 's-c1', 'student-2')) is True

    def test_update_and_toggle_and_cancel_should_ignore_unknown_ids(self, local_store):
        local_store.update_user(make_user('nobody'))
        local_store.toggle_seat_maintenance('nothing')
        local_store.cancel_booking('nothing')

        assert len(local_store.get_users()) == 2
        assert not any(seat['isMaintenance'] for seat in local_store.get_seats())
        assert local_store.get_bookings() == []

    def test_toggle_seat_maintenance(self, local_store):
        local_store.toggle_seat_maintenance('s-c1')
        assert next(s for s in local_store.get_seats() if s['id'] == 's-c1')['isMaintenance'] is True

        local_store.toggle_seat_maintenance('s-c1')
        assert next(s for s in local_store.get_seats() if s['id'] == 's-c1')['isMaintenance'] is False

    def test_session_round_trip(self, local_store):
        assert local_store.get_session() is None

        local_store.set_session(make_user())
        assert local_store.get_session()['id'] == 'student-9'

        local_store.clear_session()
        assert local_store.get_session() is None

    @pytest.fixture()
    def file_store(self, tmp_path):
        file_engine = create_engine(f"sqlite:///{tmp_path / 'libbook.db'}", connect_args={"check_same_thread": False})
        Base.metadata.create_all(bind=file_engine)
        yield LocalStore(sessionmaker(autocommit=False, autoflush=False, bind=file_engine))
        file_engine.dispose()

    def test_concurrent_bookings_of_one_slot_should_accept_only_one(self, file_store):
        bookings = [make_booking(f'bk-{i}', 's-c1', f'user-{i}') for i in range(16)]

        with ThreadPoolExecutor(max_workers=16) as executor:
            results = list(executor.map(file_store.create_booking, bookings))

        assert results.count(True) == 1
        assert len(file_store.get_bookings()) == 1

    def test_concurrent_registrations_should_all_be_kept(self, file_store):
        users = [make_user(f'user-{i}', f'user{i}@student.edu') for i in range(16)]

        with ThreadPoolExecutor(max_workers=16) as executor:
            list(executor.map(file_store.save_user, users))

        assert len(file_store.get_users()) == 18


class TestRemoteStore:
    def test_create_booking_should_return_false_when_backend_refuses(self, backend):
        remote = backend.store()

        assert remote.create_booking(make_booking('bk-1', 'seat-a1', 'student-1')) is True
        assert remote.create_booking(make_booking('bk-2', 'seat-a1', 'admin-1')) is False

    @pytest.mark.parametrize('failure', ['connect', 'timeout', 'server_error', 'bad_body', 'client_error', 'wrong_shape'])
    def test_failures_should_raise_remote_unavailable(self, backend, failure):
        backend.failure = failure

        with pytest.raises(RemoteUnavailableError):
            backend.store().get_users()

    def test_client_error_should_be_trusted(self, backend):
        remote = backend.store()
        backend.failure = 'client_error'

        remote.cancel_booking('unknown')

        assert remote.create_booking(make_booking('bk-1', 'seat-a1', 'student-1')) is False
        assert backend.requests == [('PUT', '/bookings/unknown/cancel'), ('POST', '/bookings')]

    def test_should_use_configured_timeout(self):
        remote = RemoteStore('http://backend.test/api', timeout_ms=1500)

        assert remote.client.timeout.read == 1.5
        remote.close()


class TestFallbackStore:
    def test_should_use_remote_while_online(self, local_store, backend):
        store = FallbackStore(backend.store(), local_store)

        assert [user['id'] for user in store.get_users()] == ['admin-1', 'student-1']
        assert store.is_offline is False

    @pytest.mark.parametrize('failure', ['connect', 'timeout', 'server_error', 'client_error', 'wrong_shape'])
    def test_failed_call_should_be_applied_to_local_store(self, local_store, backend, failure):
        store = FallbackStore(backend.store(), local_store)
        backend.failure = failure

        users = store.get_users()

        assert store.is_offline is True
        assert [user['email'] for user in users] == ['admin@library.edu', 'john@student.edu']

    def test_failed_mutation_should_be_applied_to_local_store(self, local_store, backend):
        store = FallbackStore(backend.store(), local_store)
        backend.failure = 'connect'

        assert store.create_booking(make_booking('bk-1', 's-c1', 'student-1')) is True

        assert [booking['id'] for booking in local_store.get_bookings()] == ['bk-1']

    def test_should_never_try_remote_again_once_offline(self, local_store, backend):
        store = FallbackStore(backend.store(), local_store)
        backend.failure = 'timeout'
        store.get_seats()
        request_count = len(backend.requests)

        backend.failure = None
        store.get_users()
        store.save_seats([make_seat('seat-1', 0, 0)])
        store.create_booking(make_booking('bk-1', 'seat-1', 'student-1'))
        store.cancel_booking('bk-1')

        assert len(backend.requests) == request_count
        assert store.is_offline is True

    def test_offline_flag_should_not_leak_between_instances(self, local_store):
        failing = FakeBackend()
        failing.failure = 'connect'
        healthy = FakeBackend(users=[make_user()])

        offline = FallbackStore(failing.store(), local_store)
        online = FallbackStore(healthy.store(), local_store)
        offline.get_users()

        assert offline.is_offline is True
        assert online.get_users() == [make_user()]
        assert online.is_offline is False

    def test_should_start_offline_without_remote(self, local_store):
        store = FallbackStore(None, local_store)

        assert store.is_offline is True
        assert len(store.get_users()) == 2

    def test_should_start_offline_when_forced(self, local_store, backend):
        store = FallbackStore(backend.store(), local_store, offline=True)

        store.get_users()

        assert backend.requests == []

    def test_session_should_always_be_local(self, local_store, backend):
        store = FallbackStore(backend.store(), local_store)

        store.set_session(make_user())

        assert store.get_session()['id'] == 'student-9'
        assert backend.requests == []
        assert store.is_offline is False

    def test_local_store_should_persist_across_instances(self, test_db):
        first = LocalStore(TestingSessionLocal)
        second = LocalStore(TestingSessionLocal)

        first.save_seats([make_seat('seat-1', 0, 0)])

        assert second.get_seats() == [make_seat('seat-1', 0, 0)]
