# profilegen/api/v2/api.py

from fastapi import APIRouter
from profilegen.api.v2.endpoints import config, rulesets

router = APIRouter()

router.include_router(config.router, prefix="/config")
router.include_router(rulesets.router, prefix="/rulesets")
