from typing import List, Optional

import httpx
from starlette import status

from store.base import DataStore, RemoteUnavailableError


class RemoteStore(DataStore):
    """
    원격 백엔드의 JSON API를 사용하는 저장소입니다.
    연결 실패, 시간 초과, 5xx 응답은 모두 `RemoteUnavailableError`로 바뀝니다. 쓰기 요청의 4xx 응답은 백엔드의 응답으로 그대로 신뢰합니다.
    컬렉션 조회는 200 응답에 JSON 배열이 올 때만 성공으로 보고, 그 밖의 응답은 `RemoteUnavailableError`로 바뀝니다.
    """

    def __init__(self, api_url: str, timeout_ms: int = 3000, transport: Optional[httpx.BaseTransport] = None):
        self.client = httpx.Client(base_url=api_url.rstrip('/'), timeout=timeout_ms / 1000, transport=transport)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise RemoteUnavailableError(f'{method} {path} failed: {e!r}') from e

        if response.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            raise RemoteUnavailableError(f'{method} {path} returned {response.status_code}')

        return response

    def _get_list(self, path: str) -> List[dict]:
        response = self._request('GET', path)
        if response.status_code != status.HTTP_200_OK:
            raise RemoteUnavailableError(f'GET {path} returned {response.status_code}')

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteUnavailableError(f'GET {path} returned an invalid body') from e

        if not isinstance(body, list):
            raise RemoteUnavailableError(f'GET {path} did not return a list')
        return body

    def get_users(self) -> List[dict]:
        return self._get_list('/users')

    def save_user(self, user: dict) -> None:
        self._request('POST', '/users', json=user)

    def update_user(self, user: dict) -> None:
        self._request('PUT', f'/users/{user["id"]}', json=user)

    def get_seats(self) -> List[dict]:
        return self._get_list('/seats')

    def save_seats(self, seats: List[dict]) -> None:
        self._request('POST', '/seats', json=seats)

    def toggle_seat_maintenance(self, seat_id: str) -> None:
        self._request('POST', f'/seats/toggle-maintenance/{seat_id}')

    def get_bookings(self) -> List[dict]:
        return self._get_list('/bookings')

    def create_booking(self, booking: dict) -> bool:
        response = self._request('POST', '/bookings', json=booking)
        return response.status_code == status.HTTP_201_CREATED

    def cancel_booking(self, booking_id: str) -> None:
        self._request('PUT', f'/bookings/{booking_id}/cancel')

    # 세션은 항상 로컬에서만 관리합니다
    def get_session(self) -> Optional[dict]:
        raise NotImplementedError('sessions are not stored remotely')

    def set_session(self, user: dict) -> None:
        raise NotImplementedError('sessions are not stored remotely')

    def clear_session(self) -> None:
        raise NotImplementedError('sessions are not stored remotely')

    def close(self) -> None:
        self.client.close()
