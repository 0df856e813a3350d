from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    # JSON bodies use camelCase; Python code keeps snake_case field names.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    message: str | None = None
    data: T | None = None


class Page(CamelModel, Generic[T]):
    success: bool = True
    data: list[T]
    total: int
    page: int
    limit: int
    total_pages: int


class MessageResponse(CamelModel):
    success: bool = True
    message: str
