from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    원격 백엔드와 로컬 저장소가 사용하는 camelCase JSON 형식과 매핑되는 기본 모델입니다.
    """
    model_config = ConfigDict(extra='ignore', alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict:
        return self.model_dump(mode='json', by_alias=True)


class MessageOutputBase(BaseModel):
    model_config = ConfigDict(extra='ignore')

    message: str
