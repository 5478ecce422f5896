from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    environment: str
    storage: str
    timestamp: float
