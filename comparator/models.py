# comparator/models.py
from pydantic import BaseModel, ConfigDict
from typing import List, Literal, Optional

class DeviceSpecs(BaseModel):
    model_config = ConfigDict(frozen=True)

    display: str
    camera: str
    processor: str
    battery: str
    ram: str
    storage: str
    price: str

class DeviceData(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    specs: DeviceSpecs
    pros: List[str]
    cons: List[str]

class ComparisonResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    device1: DeviceData
    device2: DeviceData
    summary: str

class ChatMessage(BaseModel):
    role: Literal["user", "model"]
    content: str

class ComparatorRequest(BaseModel):
    # Every field is optional here so the handler can answer 400 with a
    # readable error instead of FastAPI's 422 validation payload.
    action: Optional[str] = None
    device1Name: Optional[str] = None
    device2Name: Optional[str] = None
    chatContext: Optional[ComparisonResult] = None
    chatHistory: Optional[List[ChatMessage]] = None

class ChatResponse(BaseModel):
    response: str

class ErrorResponse(BaseModel):
    error: str
