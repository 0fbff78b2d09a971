# api/main.py
"""
FastAPI backend for Trussworks - exposes the plane truss solver as a REST API.
"""

import csv
import io
import logging
from dataclasses import replace
from typing import Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ConfigDict, Field

from trussworks import __version__
from trussworks.config import CONFIG, DEFAULT_UNITS, UNIT_SYSTEMS
from trussworks.elements import element_geometry
from trussworks.errors import ValidationError
from trussworks.kernel.solve import SingularSystemError
from trussworks.model import Element, Load, Node
from trussworks.post import solution_summary
from trussworks.presets import PRESETS, build_preset
from trussworks.solve import SINGULAR_MESSAGE, FullyRestrained, solve_structure

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Trussworks API",
    description="2D Truss Solver (direct stiffness method)",
    version=__version__,
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000",
                   "http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

NodeId = Union[int, str]


# =============================================================================
# Request/Response Models
# =============================================================================

class NodeData(BaseModel):
    """Joint with restraint flags (1 = restrained)."""
    id: NodeId
    x: float
    y: float
    rx: int = Field(0, ge=0, le=1)
    ry: int = Field(0, ge=0, le=1)


class ElementData(BaseModel):
    """Axial member between n1 and n2."""
    id: NodeId
    n1: NodeId
    n2: NodeId
    E: float
    A: float


class LoadData(BaseModel):
    """Point load in global axes."""
    model_config = ConfigDict(populate_by_name=True)

    node_id: NodeId = Field(alias="nodeId")
    fx: float = 0.0
    fy: float = 0.0


class SolveRequest(BaseModel):
    nodes: List[NodeData]
    elements: List[ElementData]
    loads: List[LoadData] = []
    strict: bool = Field(False, description="Reject invalid elements/loads instead of skipping them")


class VectorData(BaseModel):
    x: float
    y: float


class ElementResultData(BaseModel):
    id: NodeId
    force: float
    stress: float


class MetricsData(BaseModel):
    """Headline results."""
    max_displacement: float
    max_displacement_node: Optional[NodeId] = None
    max_tension: float
    max_compression: float
    max_abs_stress: float
    n_skipped_elements: int
    n_skipped_loads: int


class SolveResponse(BaseModel):
    """
    status is one of: ok, fully_restrained, unstable.
    Only 'ok' carries results.
    """
    model_config = ConfigDict(populate_by_name=True)

    status: str
    message: Optional[str] = None
    error: Optional[str] = None
    detail: Optional[str] = None
    displacements: Optional[Dict[str, VectorData]] = None
    reactions: Optional[Dict[str, VectorData]] = None
    element_results: Optional[List[ElementResultData]] = Field(None, alias="elementResults")
    metrics: Optional[MetricsData] = None


class PresetInfo(BaseModel):
    key: str
    name: str
    description: str
    n_nodes: int
    n_elements: int


class PresetModel(BaseModel):
    key: str
    units: str
    nodes: List[NodeData]
    elements: List[ElementData]
    loads: List[LoadData]


class UnitSystemData(BaseModel):
    key: str
    name: str
    force: str
    length: str
    E: float


# =============================================================================
# Solve
# =============================================================================

def to_model(request: SolveRequest):
    nodes = [Node(n.id, n.x, n.y, bool(n.rx), bool(n.ry)) for n in request.nodes]
    elements = [Element(e.id, e.n1, e.n2, e.E, e.A) for e in request.elements]
    loads = [Load(l.node_id, l.fx, l.fy) for l in request.loads]
    return nodes, elements, loads


def run_solve(nodes, elements, loads, strict: bool = False) -> SolveResponse:
    """Solve and map the outcome onto a SolveResponse. ValidationError -> HTTP 422."""
    config = replace(CONFIG, strict=strict)
    try:
        result = solve_structure(nodes, elements, loads, config)
    except ValidationError as e:
        logger.info("Rejected model: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    except SingularSystemError as e:
        logger.info("Unstable structure: %s", e)
        return SolveResponse(status="unstable", error=SINGULAR_MESSAGE, detail=str(e))

    if isinstance(result, FullyRestrained):
        return SolveResponse(status="fully_restrained", message=result.message)

    metrics = solution_summary(result.displacements, result.element_results)
    return SolveResponse(
        status="ok",
        displacements={str(k): VectorData(**v.to_dict()) for k, v in result.displacements.items()},
        reactions={str(k): VectorData(**v.to_dict()) for k, v in result.reactions.items()},
        element_results=[ElementResultData(**r.to_dict()) for r in result.element_results],
        metrics=MetricsData(
            **metrics,
            n_skipped_elements=len(result.skipped_elements),
            n_skipped_loads=len(result.skipped_loads),
        ),
    )


def preset_model(key: str, units: str):
    if key not in PRESETS:
        raise HTTPException(status_code=404, detail=f"Unknown preset '{key}'")
    if units not in UNIT_SYSTEMS:
        raise HTTPException(status_code=404, detail=f"Unknown unit system '{units}'")
    return build_preset(key, units)


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "Trussworks API"}


@app.post("/api/solve", response_model=SolveResponse, response_model_exclude_none=True,
          response_model_by_alias=True)
async def solve(request: SolveRequest):
    """Solve a truss."""
    logger.info("Solve request: %d nodes, %d elements, %d loads",
                len(request.nodes), len(request.elements), len(request.loads))
    return run_solve(*to_model(request), strict=request.strict)


@app.get("/api/units", response_model=List[UnitSystemData])
async def list_units():
    return [UnitSystemData(key=u.key, name=u.name, force=u.force, length=u.length, E=u.E)
            for u in UNIT_SYSTEMS.values()]


@app.get("/api/presets", response_model=List[PresetInfo])
async def list_presets():
    return [
        PresetInfo(key=p.key, name=p.name, description=p.description,
                   n_nodes=len(p.nodes), n_elements=len(p.elements))
        for p in PRESETS.values()
    ]


@app.get("/api/presets/{key}", response_model=PresetModel, response_model_by_alias=True)
async def get_preset(key: str, units: str = Query(DEFAULT_UNITS)):
    nodes, elements, loads = preset_model(key, units)
    return PresetModel(
        key=key,
        units=units,
        nodes=[NodeData(**n.to_dict()) for n in nodes],
        elements=[ElementData(**e.to_dict()) for e in elements],
        loads=[LoadData(**l.to_dict()) for l in loads],
    )


@app.post("/api/presets/{key}/solve", response_model=SolveResponse,
          response_model_exclude_none=True, response_model_by_alias=True)
async def solve_preset(key: str, units: str = Query(DEFAULT_UNITS)):
    """Solve a preset structure."""
    return run_solve(*preset_model(key, units))


@app.post("/api/export/csv")
async def export_csv(request: SolveRequest):
    """Export the member table as CSV."""
    nodes, elements, loads = to_model(request)
    result = run_solve(nodes, elements, loads, strict=request.strict)

    if result.status != "ok":
        raise HTTPException(status_code=400, detail=result.error or result.message)

    by_id = {n.id: n for n in nodes}
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(['element_id', 'node_1', 'node_2', 'length', 'force', 'force_type', 'stress'])

    for element, r in zip(elements, result.element_results):
        try:
            L, _, _ = element_geometry(by_id, element)
        except (KeyError, ValueError):
            L = 0.0
        force_type = "T" if r.force > 0 else "C" if r.force < 0 else "0"
        writer.writerow([
            element.id, element.n1, element.n2,
            round(L, 4), round(r.force, 4), force_type, round(r.stress, 4)
        ])

    output.seek(0)
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=truss_members.csv"}
    )


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8000)
