"""Response envelope shared by every API endpoint."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Paging(BaseModel):
    current_page: int
    size: int
    total_page: int


class WebResponse(BaseModel, Generic[T]):
    """Exactly one of ``data`` and ``errors`` is set."""

    data: Optional[T] = None
    errors: Optional[str] = None
    paging: Optional[Paging] = None
