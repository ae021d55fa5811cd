from dotenv import load_dotenv
import os

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


ENVIRONMENT = os.environ.get('environment', 'dev')

API_URL = os.environ.get('API_URL', 'http://localhost:3001/api')
REMOTE_TIMEOUT_MS = int(os.environ.get('REMOTE_TIMEOUT_MS', '3000'))
OFFLINE_MODE = _as_bool(os.environ.get('OFFLINE_MODE', 'false'))

SQLALCHEMY_DATABASE_URL = os.environ.get('SQLALCHEMY_DATABASE_URL', 'sqlite:///./libbook.db')

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
