"""FastAPI route definitions for the vehicle fitment engine.

Every request carries the catalog data it needs; nothing is stored between calls.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from vehicle_fitment.api.deps import get_parser
from vehicle_fitment.models.catalog import CatalogItem, CompatibilityGroup, ImportPreview
from vehicle_fitment.models.vehicle import SelectedVehicle, VehicleModel, VehicleSignature
from vehicle_fitment.services.compatibility import group_compatibility, preview_import
from vehicle_fitment.services.fitment_matcher import filter_catalog, matches_vehicle
from vehicle_fitment.services.signature_parser import SignatureParser, format_descriptor
from vehicle_fitment.services.vehicle_tree import RejectionCollector, build_vehicle_tree

router = APIRouter()

ParserDep = Annotated[SignatureParser, Depends(get_parser)]


# ---------------------------------------------------------------------------
# Request / Response Models
# ---------------------------------------------------------------------------


class ParseRequest(BaseModel):
    raw: str


class FormatRequest(BaseModel):
    model: str
    years: str
    modification: str


class FormatResponse(BaseModel):
    descriptor: str
    signature: VehicleSignature


class TreeRequest(BaseModel):
    # Accept bare descriptors, whole catalog items, or both
    descriptors: list[str] = Field(default_factory=list)
    items: list[CatalogItem] = Field(default_factory=list)

    @property
    def all_descriptors(self) -> list[str]:
        return self.descriptors + [raw for item in self.items for raw in item.descriptors]


class TreeResponse(BaseModel):
    models: list[VehicleModel]
    rejected: list[VehicleSignature]


class MatchRequest(BaseModel):
    selected: SelectedVehicle
    descriptors: list[str] = Field(default_factory=list)
    engine_codes: list[str] = Field(default_factory=list)


class MatchResponse(BaseModel):
    matches: bool


class FilterRequest(BaseModel):
    selected: SelectedVehicle
    items: list[CatalogItem] = Field(default_factory=list)


class FilterResponse(BaseModel):
    items: list[CatalogItem]
    total: int


class CompatibilityRequest(BaseModel):
    descriptors: list[str] = Field(default_factory=list)


class CompatibilityResponse(BaseModel):
    groups: list[CompatibilityGroup]


class PreviewRequest(BaseModel):
    rows: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------


@router.post("/parse", response_model=VehicleSignature)
def parse(req: ParseRequest, parser: ParserDep):
    """Parse one raw descriptor into a vehicle signature."""
    return parser.parse(req.raw)


@router.post("/format", response_model=FormatResponse)
def format_(req: FormatRequest, parser: ParserDep):
    """Build a canonical descriptor from manually entered fields."""
    descriptor = format_descriptor(req.model, req.years, req.modification)
    return FormatResponse(descriptor=descriptor, signature=parser.parse(descriptor))


# ---------------------------------------------------------------------------
# Vehicle tree & matching
# ---------------------------------------------------------------------------


@router.post("/tree", response_model=TreeResponse)
def tree(req: TreeRequest, parser: ParserDep):
    """Build the model → year group → modification tree for selection dropdowns."""
    collector = RejectionCollector()
    models = build_vehicle_tree(req.all_descriptors, on_rejected=collector, parser=parser)
    return TreeResponse(models=models, rejected=collector.signatures)


@router.post("/match", response_model=MatchResponse)
def match(req: MatchRequest, parser: ParserDep):
    """Check one item's compatibility data against a selected vehicle."""
    result = matches_vehicle(req.selected, req.descriptors, req.engine_codes, parser=parser)
    return MatchResponse(matches=result)


@router.post("/filter", response_model=FilterResponse)
def filter_items(req: FilterRequest, parser: ParserDep):
    """Keep only the catalog items that fit the selected vehicle."""
    matched = filter_catalog(req.selected, req.items, parser=parser)
    return FilterResponse(items=matched, total=len(matched))


# ---------------------------------------------------------------------------
# Product page & import tooling
# ---------------------------------------------------------------------------


@router.post("/compatibility", response_model=CompatibilityResponse)
def compatibility(req: CompatibilityRequest, parser: ParserDep):
    """Group one item's descriptors for display on its product page."""
    return CompatibilityResponse(groups=group_compatibility(req.descriptors, parser=parser))


@router.post("/preview", response_model=ImportPreview)
def preview(req: PreviewRequest, parser: ParserDep):
    """Report missing fields per row before a bulk upload is accepted."""
    return preview_import(req.rows, parser=parser)
