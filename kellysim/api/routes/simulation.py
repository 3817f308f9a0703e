"""API routes for simulation endpoints."""

import logging

from fastapi import APIRouter, HTTPException

from kellysim.api.schemas.simulation import SimulationDefaults, SimulationRequest, SimulationResponse
from kellysim.core.exceptions import InvalidConfiguration
from kellysim.services.simulation_service import SimulationService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/simulation", response_model=SimulationResponse)
def run_simulation(request: SimulationRequest):
    """
    Run a fresh flat vs. Kelly/3 vs. HalfKelly/3 simulation.

    Every call builds its own state and random source, so repeated or
    overlapping requests never affect each other. Pass `seed` to replay a run.
    """
    service = SimulationService()
    try:
        config = request.to_config()
        result = service.run(config, seed=request.seed)
    except InvalidConfiguration as e:
        logger.info(f"Rejected simulation request: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return SimulationResponse(**service.serialize_result(result))


@router.get("/simulation/defaults", response_model=SimulationDefaults)
def get_simulation_defaults():
    """Default form values, plus the input limits enforced by the server."""
    return SimulationDefaults(**SimulationService().get_defaults())
