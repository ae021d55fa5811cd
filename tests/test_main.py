"""
테스트에서 공통으로 사용하는 DB, 저장소, 가짜 원격 백엔드와 client 입니다.
"""

import os

os.environ.setdefault('environment', 'test')

import datetime
import json
import re

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db.database import Base
from db import models  # noqa: F401
from main import app
from store.fallback_store import FallbackStore
from store.local_store import LocalStore
from store.provider import get_store
from store.remote_store import RemoteStore

SQLALCHEMY_DATABASE_URL = 'sqlite://'

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

REMOTE_API_URL = 'http://backend.test/api'

TODAY = datetime.date.today()
TOMORROW = TODAY + datetime.timedelta(days=1)


class FakeBackend:
    """
    원격 백엔드를 흉내 내는 메모리 저장소입니다. `httpx.MockTransport`로 `RemoteStore`에 연결됩니다.
    `failure`를 설정하면 이후 모든 요청이 해당 방식으로 실패합니다. ('connect', 'timeout', 'server_error', 'bad_body', 'client_error', 'wrong_shape')
    """

    def __init__(self, users=None, seats=None, bookings=None):
        self.users = users if users is not None else []
        self.seats = seats if seats is not None else []
        self.bookings = bookings if bookings is not None else []
        self.failure = None
        self.requests = []

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def store(self) -> RemoteStore:
        return RemoteStore(REMOTE_API_URL, transport=self.transport())

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix('/api')
        self.requests.append((request.method, path))

        if self.failure == 'connect':
            raise httpx.ConnectError('connection refused', request=request)
        if self.failure == 'timeout':
            raise httpx.ReadTimeout('timed out', request=request)
        if self.failure == 'server_error':
            return httpx.Response(503, json={'error': 'unavailable'})
        if self.failure == 'bad_body':
            return httpx.Response(200, text='<html>maintenance</html>')
        if self.failure == 'client_error':
            return httpx.Response(404, json={'error': 'not found'})
        if self.failure == 'wrong_shape':
            return httpx.Response(200, json={'error': 'unexpected'})

        body = json.loads(request.content) if request.content else None

        if path == '/users':
            if request.method == 'GET':
                return httpx.Response(200, json=self.users)
            self.users.append(body)
            return httpx.Response(201, json=body)

        if match := re.fullmatch(r'/users/([^/]+)', path):
            self.users = [body if user['id'] == match.group(1) else user for user in self.users]
            return httpx.Response(200, json=body)

        if path == '/seats':
            if request.method == 'GET':
                return httpx.Response(200, json=self.seats)
            self.seats = body
            return httpx.Response(200, json=body)

        if match := re.fullmatch(r'/seats/toggle-maintenance/([^/]+)', path):
            for seat in self.seats:
                if seat['id'] == match.group(1):
                    seat['isMaintenance'] = not seat['isMaintenance']
            return httpx.Response(200, json={})

        if path == '/bookings':
            if request.method == 'GET':
                return httpx.Response(200, json=self.bookings)
            if any(b['seatId'] == body['seatId'] and b['date'] == body['date']
                   and b['startTime'] == body['startTime'] and b['status'] == 'ACTIVE' for b in self.bookings):
                return httpx.Response(409, json={'error': 'Seat already booked'})
            self.bookings.append(body)
            return httpx.Response(201, json=body)

        if match := re.fullmatch(r'/bookings/([^/]+)/cancel', path):
            for booking in self.bookings:
                if booking['id'] == match.group(1):
                    booking['status'] = 'CANCELLED'
            return httpx.Response(200, json={})

        return httpx.Response(404, json={'error': 'not found'})


def make_user(_id='student-9', email='jane@student.edu', password='secret', role='STUDENT', is_blocked=False):
    return {
        'id': _id,
        'name': f'User {_id}',
        'email': email,
        'password': password,
        'role': role,
        'studentId': 'CS2024009' if role == 'STUDENT' else None,
        'department': 'CS' if role == 'STUDENT' else None,
        'yearSection': None,
        'mobile': '5550000000' if role == 'STUDENT' else None,
        'isBlocked': is_blocked
    }


def make_seat(_id, x, y, label=None, is_maintenance=False, rotation=0):
    return {
        'id': _id,
        'label': label or f'{chr(ord("A") + y)}{x + 1}',
        'type': 'Standard',
        'isMaintenance': is_maintenance,
        'x': x,
        'y': y,
        'rotation': rotation
    }


def make_booking(_id, seat_id, user_id, date=TOMORROW, start_time='10:00', status='ACTIVE', timestamp=1):
    hour = int(start_time[:2])
    return {
        'id': _id,
        'seatId': seat_id,
        'userId': user_id,
        'userName': f'User {user_id}',
        'date': date.isoformat(),
        'startTime': start_time,
        'endTime': f'{hour + 1:02d}:00',
        'timestamp': timestamp,
        'status': status
    }


@pytest.fixture()
def test_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def local_store(test_db):
    return LocalStore(TestingSessionLocal)


@pytest.fixture()
def offline_store(local_store):
    """
    원격 백엔드 없이 로컬 저장소만 사용하는 저장소입니다. 초기 데이터(어드민, 데모 학생, 기본 좌석 배치)가 들어 있습니다.
    """
    store = FallbackStore(None, local_store)
    app.dependency_overrides[get_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_store, None)


@pytest.fixture()
def backend():
    return FakeBackend(
        users=[make_user('admin-1', 'admin@library.edu', 'admin', role='ADMIN'),
               make_user('student-1', 'john@student.edu', 'pass')],
        seats=[make_seat('seat-a1', 0, 0), make_seat('seat-c5', 4, 2)]
    )


@pytest.fixture()
def online_store(local_store, backend):
    store = FallbackStore(backend.store(), local_store)
    app.dependency_overrides[get_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_store, None)


client = TestClient(app)
