from datetime import datetime
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from utils.passport import parse_passport, check_passport_serie, check_passport_number
from utils.timeutil import as_utc


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserCreate(CamelModel):
    passport_number: str = Field(..., description="Серия и номер паспорта: '1234 567890'")

    @field_validator("passport_number")
    @classmethod
    def validate_passport(cls, v: str) -> str:
        parse_passport(v)
        return v

    def passport(self) -> Tuple[int, int]:
        return parse_passport(self.passport_number)


class UserUpdate(CamelModel):
    """Частичное обновление: меняются только переданные поля"""
    name: Optional[str] = Field(None, max_length=100)
    surname: Optional[str] = Field(None, max_length=100)
    patronymic: Optional[str] = Field(None, max_length=100)
    passport_serie: Optional[int] = None
    passport_number: Optional[int] = None
    address: Optional[str] = Field(None, max_length=255)

    @field_validator("name", "surname", "address")
    @classmethod
    def required_not_blank(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError("cannot be blank")
        return v

    @field_validator("patronymic")
    @classmethod
    def patronymic_not_blank(cls, v: Optional[str]) -> Optional[str]:
        # null убирает отчество, пустая строка запрещена
        if v is not None and not v.strip():
            raise ValueError("cannot be blank")
        return v

    @field_validator("passport_serie")
    @classmethod
    def validate_serie(cls, v: Optional[int]) -> int:
        if v is None:
            raise ValueError("cannot be null")
        return check_passport_serie(v)

    @field_validator("passport_number")
    @classmethod
    def validate_number(cls, v: Optional[int]) -> int:
        if v is None:
            raise ValueError("cannot be null")
        return check_passport_number(v)

    def values(self) -> dict:
        return self.model_dump(exclude_unset=True)


class User(CamelModel):
    id: int
    name: str
    surname: str
    patronymic: Optional[str] = None
    passport_serie: int
    passport_number: int
    address: str
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def to_utc(cls, v: datetime) -> datetime:
        return as_utc(v)
