"""Calculator routes."""

from fastapi import APIRouter, HTTPException

from propcalc.api.schemas import CalculateRequest, CalculateResponse, CalculatorInfo, plain
from propcalc.engine.registry import (
    CalculatorDefinition,
    UnknownCalculatorError,
    connections,
    get_calculator,
    list_calculators,
)

router = APIRouter(prefix="/api/v1/calculators", tags=["calculators"])


def _info(definition: CalculatorDefinition) -> CalculatorInfo:
    linked = {kind: [d.slug for d in defs] for kind, defs in connections(definition.slug).items()}
    return CalculatorInfo(
        slug=definition.slug,
        category=definition.category,
        title=definition.title,
        description=definition.description,
        inputs=plain(definition.input_cls.field_defaults()),
        **linked,
    )


def _lookup(slug: str) -> CalculatorDefinition:
    try:
        return get_calculator(slug)
    except UnknownCalculatorError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("", response_model=list[CalculatorInfo])
async def list_all(category: str | None = None):
    """List calculators, optionally for one category."""
    return [_info(definition) for definition in list_calculators(category)]


@router.get("/{slug}", response_model=CalculatorInfo)
async def describe(slug: str):
    return _info(_lookup(slug))


@router.post("/{slug}", response_model=CalculateResponse)
async def calculate(slug: str, req: CalculateRequest):
    """Parse the raw form values and run the calculator."""
    definition = _lookup(slug)
    inputs = definition.parse(req.inputs)
    return CalculateResponse(
        slug=definition.slug,
        category=definition.category,
        inputs=plain(inputs),
        metrics=plain(definition.evaluate(inputs)),
    )
