from __future__ import annotations

from datetime import datetime
from typing import Annotated, Generic, TypeVar

from pydantic import AfterValidator, BaseModel

from app.core.clock import ensure_utc


DataT = TypeVar("DataT")

UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


class Envelope(BaseModel, Generic[DataT]):
    success: bool = True
    data: DataT
    message: str | None = None
