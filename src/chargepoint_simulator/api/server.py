"""FastAPI server — HTTP access to the chargepoint demand simulator.

Run with:
    uvicorn chargepoint_simulator.api.server:app --reload --port 8000

Or:
    python -m chargepoint_simulator.api.server

Endpoints:
    GET  /health                 — liveness probe
    GET  /                       — welcome + pointers
    GET  /api/simulation         — one run from query parameters (chart front-end contract)
    POST /simulate               — one run from a partial Scenario, plus chart roll-ups
    POST /simulate/monte-carlo   — N seeded runs → P10/P50/P90 sizing summary
    GET  /scenario/defaults      — complete default Scenario as JSON
    GET  /schema                 — JSON Schema for Scenario inputs
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from chargepoint_simulator import __version__
from chargepoint_simulator.config.scenario import MAX_MONTE_CARLO_RUNS, Scenario, build_scenario
from chargepoint_simulator.config.simulation import build_config
from chargepoint_simulator.engine.orchestrator import run_engine, run_monte_carlo, run_simulation
from chargepoint_simulator.errors import InvalidConfiguration
from chargepoint_simulator.reporting.rollups import build_charts

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Chargepoint Demand Simulator API",
    version=__version__,
    description=(
        "Simulates one year of EV charging at 15-minute resolution for a set of "
        "chargepoints and reports total energy, peak power and the concurrency "
        "factor used to size grid connections."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidConfiguration)
def invalid_configuration_handler(request: Request, exc: InvalidConfiguration) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class SimulateRequest(BaseModel):
    """Request body for /simulate.  All fields optional — defaults used for missing."""
    scenario: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial or full Scenario JSON. Missing fields use defaults. "
                    "Example: {'simulation': {'chargepoints': 40}, 'random_seed': 7}",
    )
    include_series: bool = Field(
        default=True,
        description="Include kWhPerTick / kWhPerChargepoint in the response.",
    )


class MonteCarloRequest(BaseModel):
    """Request body for /simulate/monte-carlo."""
    scenario: dict[str, Any] = Field(default_factory=dict)
    runs: int | None = Field(
        default=None,
        ge=1,
        le=MAX_MONTE_CARLO_RUNS,
        description="Overrides scenario.monte_carlo_runs when given.",
    )


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

_SERIES_KEYS = ("kWhPerTick", "kWhPerChargepoint")


def _headline(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if k not in _SERIES_KEYS}


def get_default_scenario() -> dict[str, Any]:
    """Default Scenario as JSON-ready dict (external field names)."""
    return Scenario().model_dump(mode="json", by_alias=True)


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    """API root — returns a welcome message and pointers."""
    return {
        "name": "Chargepoint Demand Simulator API",
        "version": __version__,
        "start_here": "GET /api/simulation?chargepoints=20",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/api/simulation")
def simulation(
    chargepoints: int = Query(default=20, description="Number of chargepoints"),
    arrivalProbabilityMultiplierPercentage: float = Query(
        default=100.0, description="Arrival probability multiplier (%)",
    ),
    evConsumptionPer100kmKWh: float = Query(default=18.0, description="EV consumption (kWh/100 km)"),
    chargingPowerPerChargepointKW: float = Query(default=11.0, description="Charging power per chargepoint (kW)"),
    seed: int | None = Query(default=None, description="RNG seed; omitted = fixed default seed"),
):
    """Run one simulation and return ``{"data": <result>}``.

    Fractional percentages and consumptions are kept as given.
    """
    config = build_config(
        chargepoints=chargepoints,
        arrivalProbabilityMultiplierPercentage=arrivalProbabilityMultiplierPercentage,
        evConsumptionPer100kmKWh=evConsumptionPer100kmKWh,
        chargingPowerPerChargepointKW=chargingPowerPerChargepointKW,
    )
    result = run_simulation(config, seed=seed)
    return {"data": result.to_response()}


@app.post("/simulate")
def simulate(req: SimulateRequest):
    """Run one simulation from a partial Scenario and attach the chart roll-ups."""
    scenario = build_scenario(req.scenario)
    result = run_engine(scenario)
    data = result.to_response()
    if not req.include_series:
        data = _headline(data)
    charts = {
        name: [p.model_dump() for p in points]
        for name, points in build_charts(result).items()
    }
    return {
        "data": data,
        "sessions_started": result.sessions_started,
        "peak_concurrent_chargepoints": result.peak_concurrent_chargepoints,
        "charts": charts,
    }


@app.post("/simulate/monte-carlo")
def simulate_monte_carlo(req: MonteCarloRequest):
    """Run N independently seeded simulations and return the percentile summary."""
    overrides = dict(req.scenario)
    if req.runs is not None:
        overrides["monte_carlo_runs"] = req.runs
    scenario = build_scenario(overrides)
    mc = run_monte_carlo(scenario)
    return {
        "summary": mc.summary.model_dump(),
        "representative": _headline(mc.representative.to_response()),
    }


@app.get("/scenario/defaults")
def get_defaults():
    """Complete default Scenario as JSON.  Use as a starting point for modifications."""
    return get_default_scenario()


@app.get("/schema")
def get_schema():
    """Full JSON Schema for Scenario — all input parameters with types, defaults, constraints."""
    return Scenario.model_json_schema()


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(
        "chargepoint_simulator.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
