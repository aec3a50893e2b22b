from pydantic import BaseModel
from typing import Optional

class Subscription(BaseModel):
    id: str
    name: str
    path: str

class Ruleset(BaseModel):
    id: str
    name: str
    path: str
    behavior: str = "classical"
    interval: Optional[int] = 86400
    format: str = "yaml"
