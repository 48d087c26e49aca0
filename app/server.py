"""
HTTP front end for the DC path solver.

    uvicorn server:app --reload

POST /api/simulate takes a circuit snapshot and returns the solver result.
Each request is simulated in isolation; the server keeps no circuit state.
"""

import logging
from typing import Any, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import AliasChoices, BaseModel, Field

from models.component import ComponentData
from models.connection import ConnectionData
from simulation import simulate

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Circuit Sim DC Solver",
    version="1.0.0",
    description="Single-path DC solver for battery / resistor / LED / switch loops.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class SimulateRequest(BaseModel):
    components: List[dict] = Field(
        default_factory=list, validation_alias=AliasChoices("components", "nodes")
    )
    connections: List[dict] = Field(
        default_factory=list, validation_alias=AliasChoices("connections", "edges")
    )


def _error(status: int, error: str, details: Any = None) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": error, "details": details})


@app.exception_handler(RequestValidationError)
async def _invalid_body(request: Request, exc: RequestValidationError):
    return _error(400, "Invalid request body", str(exc.errors()))


@app.get("/api/health")
def health():
    return {"status": "ok"}


@app.post("/api/simulate")
def simulate_circuit(body: SimulateRequest):
    if not body.components:
        return _error(400, "Invalid circuit data", "No components provided")

    try:
        components = [ComponentData.from_dict(c) for c in body.components]
        connections = [ConnectionData.from_dict(c) for c in body.connections]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        return _error(400, "Invalid circuit data", str(e))

    try:
        result = simulate(components, connections)
    except Exception as e:
        logger.exception("Simulation failed")
        return _error(500, "Simulation failed", str(e))

    return result.to_dict()
