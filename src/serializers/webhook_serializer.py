from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class StatusPush(BaseModel):
    """Status update pushed by PIKNDEL.

    {
      "AWBNo": "PKD123456",
      "short_code": "PCK",
      "activity": "Parcel picked up from sender",
      "timestamp": 1708800000,
      ... other fields
    }
    """

    model_config = ConfigDict(extra="allow")

    AWBNo: Optional[Any] = None
    short_code: Optional[Any] = None
    activity: Optional[Any] = None
    timestamp: Optional[Any] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "StatusPush":
        # Unrecognised bodies are still stored raw, just without extracted fields
        if not isinstance(payload, dict):
            return cls()
        return cls.model_validate(payload)
