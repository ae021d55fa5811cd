from fastapi import Depends, FastAPI

from config import ENVIRONMENT
from db import models
from db.database import engine
from logger_config import logger
from routers import api
from schemas.report import StoreStatus
from store.fallback_store import FallbackStore
from store.provider import get_store
import uvicorn

# 테스트 실행 시에는 테스트용 DB에서 테이블을 만듭니다
if ENVIRONMENT != 'test':
    models.Base.metadata.create_all(bind=engine)

description = """
도서관 좌석 예약 시스템 API
학생과 어드민이 각각의 필요에 맞게 좌석 예약과 좌석 배치를 관리합니다.

원격 백엔드에 연결할 수 없으면 그 이후로는 로컬 저장소를 사용합니다.

아래와 같은 ENDPOINT를 지원합니다
## 유저

* **로그인 / 로그아웃 / 회원가입**
* **현재 세션 조회**
* **유저 목록 조회**
* **계정 차단/해제**

## 좌석
* **좌석 목록 / 배치도 조회**
* **좌석 추가 / 이동 / 회전 / 종류 변경 / 점검 상태 전환 / 삭제**

## 예약
* **예약 가능 날짜 / 슬롯 조회**
* **좌석 예약**
* **예약 취소**
* **예약 조회**

## 통계
* **이용 현황 조회**
* **최근 예약 활동 조회**
* **예약 내역 CSV 내보내기**
"""
tags_metadata = [
    {
        'name': '유저',
        'description': '유저와 관련된 API. **로그인**, **회원가입** API도 여기에 있습니다'
    },
    {
        'name': '좌석',
        'description': '좌석 배치도와 관련된 API. 좌석 편집은 좌석 컬렉션 전체를 다시 저장합니다'
    },
    {
        'name': '예약',
        'description': '좌석 예약과 관련된 API'
    },
    {
        'name': '통계',
        'description': '어드민 화면에서 사용하는 통계와 내보내기 API'
    }
]

app = FastAPI(
    title='LibBook 좌석 예약 API 문서',
    description=description,
    summary='도서관 좌석 예약 시스템',
    openapi_tags=tags_metadata
)

app.include_router(api.router)


@app.get('/status', response_model=StoreStatus, name='저장소 상태')
def read_status(store: FallbackStore = Depends(get_store)):
    """
    현재 원격 백엔드를 사용 중인지(`online`), 로컬 저장소를 사용 중인지(`offline`) 반환합니다.
    """
    return StoreStatus(mode='offline' if store.is_offline else 'online')


if __name__ == '__main__':
    logger.info('Starting LibBook API')
    uvicorn.run('main:app')
