""""
로컬 저장소가 비어 있을 때 넣을 초기 데이터를 만드는 데 사용됩니다. `data/users.csv`와 `data/seats.csv`에서 데이터를 가져옵니다.
"""

import csv
from pathlib import Path
from typing import List

DATA_DIR = Path(__file__).resolve().parent.parent / 'data'


def _optional(value: str):
    return value if value else None


def load_seed_users() -> List[dict]:
    users = []
    with open(DATA_DIR / 'users.csv', 'r', encoding='utf-8') as data:
        for line in csv.reader(data):
            users.append({
                'id': line[0],
                'name': line[1],
                'email': line[2],
                'password': line[3],
                'role': line[4],
                'studentId': _optional(line[5]),
                'department': _optional(line[6]),
                'yearSection': _optional(line[7]),
                'mobile': _optional(line[8]),
                'isBlocked': line[9] == 'true'
            })

    return users


def load_seed_seats() -> List[dict]:
    seats = []
    with open(DATA_DIR / 'seats.csv', 'r', encoding='utf-8') as data:
        for line in csv.reader(data):
            seats.append({
                'id': line[0],
                'label': line[1],
                'type': line[2],
                'isMaintenance': False,
                'x': int(line[3]),
                'y': int(line[4]),
                'rotation': int(line[5])
            })

    return seats
