import datetime
import time
import uuid


def generate_id(prefix: str) -> str:
    return f'{prefix}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}'


def now_millis() -> int:
    return int(time.time() * 1000)


def local_now() -> datetime.datetime:
    return datetime.datetime.now()
