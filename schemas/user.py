import re
from enum import Enum
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

from schemas.base import CamelModel

EMAIL_PATTERN = re.compile(r'[^\s@]+@[^\s@]+\.[^\s@]+')
MOBILE_PATTERN = re.compile(r'[0-9]{10}')
MIN_PASSWORD_LENGTH = 4


def _validate_email(value: str) -> str:
    if not EMAIL_PATTERN.fullmatch(value):
        raise ValueError('Please enter a valid email address.')
    return value


def _validate_password(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters long.')
    return value


EmailText = Annotated[str, AfterValidator(_validate_email)]
PasswordText = Annotated[str, AfterValidator(_validate_password)]


class UserRole(str, Enum):
    STUDENT = 'STUDENT'
    ADMIN = 'ADMIN'


class UserBase(CamelModel):
    """
    저장소에 저장되는 유저 레코드입니다. 데모 목적상 비밀번호는 평문으로 저장됩니다.
    """
    id: str
    name: str
    email: str
    password: Optional[str] = None
    role: UserRole
    student_id: Optional[str] = None
    department: Optional[str] = None
    year_section: Optional[str] = None
    mobile: Optional[str] = None
    is_blocked: bool = False


class UserOutput(CamelModel):
    id: str
    name: str
    email: str
    role: UserRole
    student_id: Optional[str] = None
    department: Optional[str] = None
    year_section: Optional[str] = None
    mobile: Optional[str] = None
    is_blocked: bool = False


class LoginUser(BaseModel):
    model_config = ConfigDict(extra='ignore')

    email: EmailText = Field(description='로그인 이메일', examples=['john@student.edu'])
    password: PasswordText = Field(description='비밀번호', examples=['pass'])


class RegisterUser(CamelModel):
    name: str = Field(description='이름', examples=['Jane Roe'])
    email: EmailText = Field(description='로그인 이메일', examples=['jane@student.edu'])
    password: PasswordText = Field(description='비밀번호', examples=['secret'])
    student_id: str = Field(description='학번', examples=['CS2024002'])
    department: str = Field(description='학과', examples=['CS'])
    year_section: Optional[str] = Field(default=None, description='학년/반', examples=['2-B'])
    mobile: str = Field(description='휴대폰 번호 (숫자 10자리)', examples=['5550987654'])

    @field_validator('name', 'student_id', 'department')
    @classmethod
    def validate_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError('This field is required.')
        return value

    @field_validator('mobile')
    @classmethod
    def validate_mobile(cls, value: str) -> str:
        if not MOBILE_PATTERN.fullmatch(value):
            raise ValueError('Mobile number must be exactly 10 digits.')
        return value


class BlockUserInput(BaseModel):
    model_config = ConfigDict(extra='ignore')

    blocked: bool = Field(description='차단 여부')
