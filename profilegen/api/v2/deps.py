# profilegen/api/v2/deps.py

import logging
from typing import Optional
from fastapi import Query, HTTPException

from profilegen.core.config import settings

logger = logging.getLogger(__name__)

def verify_api_key(api_key: Optional[str] = Query(None)) -> None:
    if not settings.USE_API_KEY:
        return
    if api_key != settings.API_KEY:
        logger.warning(f"Unauthorized access attempt with API key: {api_key}")
        raise HTTPException(status_code=401, detail="Unauthorized access")
