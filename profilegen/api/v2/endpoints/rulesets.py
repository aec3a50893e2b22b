# profilegen/api/v2/endpoints/rulesets.py

import logging
from fastapi import APIRouter, Depends, Query, HTTPException

from profilegen.api.v2.deps import verify_api_key
from profilegen.schemas.generated import RulesetCategory, RulesetUpdateResult
from profilegen.services.ruleset_service import RulesetService, get_ruleset_service

router = APIRouter(dependencies=[Depends(verify_api_key)])

logger = logging.getLogger(__name__)

@router.put("/{category}", response_model=RulesetUpdateResult)
async def add_to_ruleset(
    category: RulesetCategory,
    payload: str = Query(..., min_length=1),
    service: RulesetService = Depends(get_ruleset_service),
):
    try:
        entries = await service.add_to_ruleset(category, payload)
    except ValueError as e:
        logger.error(f"Refusing to update {category.value} rule-set: {e}")
        raise HTTPException(status_code=409, detail=str(e))
    except OSError as e:
        logger.error(f"Error updating {category.value} rule-set: {e}")
        raise HTTPException(status_code=500, detail=f"Error updating rule-set: {e}")
    return RulesetUpdateResult(category=category, payload=entries)
