from sqlalchemy import Column, String, Text

from db.database import Base


class StoredBlob(Base):
    """
    로컬 저장소의 한 항목을 나타내는 클래스입니다. `key`는 컬렉션 이름이고, `value`에는 컬렉션 전체가 JSON 문자열로 저장됩니다.
    """
    __tablename__ = 'local_storage'

    key = Column(String, primary_key=True, nullable=False)
    value = Column(Text, nullable=False)
