# profilegen/api/v2/endpoints/config.py

import logging
from fastapi import APIRouter, Depends, HTTPException

from profilegen.api.v2.deps import verify_api_key
from profilegen.schemas.generated import GenerationResult, ConfigFileResult
from profilegen.schemas.profile import Profile
from profilegen.services.config_generator_service import ConfigGeneratorService, get_config_generator_service

router = APIRouter(dependencies=[Depends(verify_api_key)])

logger = logging.getLogger(__name__)

@router.post("/", response_model=GenerationResult)
async def generate_config(
    profile: Profile,
    service: ConfigGeneratorService = Depends(get_config_generator_service),
):
    result = await service.generate(profile)
    logger.debug(f"Generated config for profile '{profile.name}' with {len(result.warnings)} warnings")
    return result

@router.post("/file", response_model=ConfigFileResult)
async def write_config_file(
    profile: Profile,
    service: ConfigGeneratorService = Depends(get_config_generator_service),
):
    warnings = []
    try:
        path = await service.generate_config_file(profile, warnings)
    except OSError as e:
        logger.error(f"Error writing kernel config for profile '{profile.name}': {e}")
        raise HTTPException(status_code=500, detail=f"Error writing kernel config: {e}")
    return ConfigFileResult(path=path, warnings=warnings)
