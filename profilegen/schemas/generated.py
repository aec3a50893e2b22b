from enum import Enum
from pydantic import BaseModel
from typing import List, Dict, Any

class RulesetCategory(str, Enum):
    DIRECT = "direct"
    REJECT = "reject"
    PROXY = "proxy"

class GenerationResult(BaseModel):
    config: Dict[str, Any]
    warnings: List[str] = []

class ConfigFileResult(BaseModel):
    path: str
    warnings: List[str] = []

class RulesetUpdateResult(BaseModel):
    category: RulesetCategory
    payload: List[str]
