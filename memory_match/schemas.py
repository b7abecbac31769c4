from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class CardDTO(BaseModel):
    id: int
    pair_id: int
    matched: bool


class EventRecord(BaseModel):
    event_id: int
    event_type: str
    timestamp: Optional[datetime] = None
    caller: Optional[str] = None
    payload: Dict[str, Any] = Field(default_factory=dict)
