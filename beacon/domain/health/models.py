from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from beacon.domain.common.utils import DateTimeUtils

LIVENESS_STATUS = 'OK'


class LivenessReport(BaseModel):
    """Point-in-time answer to "is this process serving requests?"."""

    model_config = ConfigDict(frozen=True)

    status: Literal['OK'] = Field(LIVENESS_STATUS, description='Always "OK"')
    timestamp: datetime = Field(..., description='When the check was handled')
    environment: str = Field(..., description='Active deployment configuration')

    @field_serializer('timestamp')
    def serialize_timestamp(self, value: datetime) -> str:
        return DateTimeUtils.isoformat(value)
