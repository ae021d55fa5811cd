from functools import lru_cache

from config import API_URL, OFFLINE_MODE, REMOTE_TIMEOUT_MS
from db.database import SessionLocal
from store.fallback_store import FallbackStore
from store.local_store import LocalStore
from store.remote_store import RemoteStore


@lru_cache
def get_store() -> FallbackStore:
    """
    프로세스 전체에서 공유하는 저장소를 반환합니다. 오프라인 플래그는 이 인스턴스에 저장됩니다.
    """
    remote = RemoteStore(API_URL, REMOTE_TIMEOUT_MS) if API_URL else None
    return FallbackStore(remote, LocalStore(SessionLocal), offline=OFFLINE_MODE)
