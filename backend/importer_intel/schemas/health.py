from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    anthropic: str
    data_dir: str
    timestamp: datetime
    environment: str
    version: str
