"""
FastAPI server for the airline pricing engine.
"""

import sys
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

# Add parent directory to path to ensure imports work
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import PricingConfig, setup_logging
from core.errors import PricingEngineError, InvalidArgumentError
from api.service import PricingService
from examples.sample_catalog import create_sample_catalog

logger = logging.getLogger("api.server")

STATUS_CODES = {
    "invalid_argument": 400,
    "not_found": 404,
    "internal": 500,
}

app = FastAPI(title="Airline Pricing API", version="1.0.0")

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_service: Optional[PricingService] = None


def get_service() -> PricingService:
    """Process-wide service over the sample catalog, created on first use."""
    global _service
    if _service is None:
        _service = PricingService(create_sample_catalog(), config=PricingConfig.from_env())
    return _service


# --- Pydantic Models ---

class BatchPricingRequest(BaseModel):
    # Left untyped so a malformed value reaches the engine's own validation
    flight_ids: Optional[Any] = Field(default=None, description="Flight ids to price")


# --- Error handling ---

@app.exception_handler(PricingEngineError)
async def engine_error_handler(request: Request, exc: PricingEngineError):
    status_code = STATUS_CODES.get(exc.code, 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# --- Endpoints ---

@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/pricing/real-time")
def get_real_time_pricing(
    flight_id: Optional[str] = None,
    service: PricingService = Depends(get_service)
) -> Dict[str, Any]:
    """Price one flight, or every flight when no id is given."""
    if flight_id is None:
        return service.get_batch_prices()
    return service.get_flight_price(flight_id)


@app.post("/pricing/real-time")
def post_batch_pricing(
    request: BatchPricingRequest,
    service: PricingService = Depends(get_service)
) -> Dict[str, Any]:
    if request.flight_ids is None:
        raise InvalidArgumentError("Invalid flight IDs")
    return service.get_batch_prices(request.flight_ids)


@app.get("/pricing/history")
def get_price_history(
    flight_id: Optional[str] = None,
    service: PricingService = Depends(get_service)
) -> Dict[str, Any]:
    return service.get_price_history(flight_id)


@app.get("/optimization/scenarios")
def get_optimization_scenarios(service: PricingService = Depends(get_service)) -> Dict[str, Any]:
    return service.get_optimization_overview()


@app.get("/optimization/routes")
def get_route_analysis(service: PricingService = Depends(get_service)) -> Dict[str, Any]:
    return service.get_route_analysis()


@app.get("/analytics/dashboard")
def get_dashboard(service: PricingService = Depends(get_service)) -> Dict[str, Any]:
    return service.get_dashboard_analytics()


@app.get("/analytics/community-deals")
def get_community_deals(service: PricingService = Depends(get_service)) -> Dict[str, Any]:
    return service.get_community_deals()


@app.get("/analytics/flights/{flight_id}")
def get_flight_analysis(flight_id: str, service: PricingService = Depends(get_service)) -> Dict[str, Any]:
    return service.analyze_flight(flight_id)


def main():
    import uvicorn

    config = PricingConfig.from_env()
    setup_logging(config)
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
