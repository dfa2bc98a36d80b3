from pydantic import BaseModel, Field

from vehicle_fitment.core.enums import MissingField
from vehicle_fitment.models.vehicle import VehicleSignature


class CatalogItem(BaseModel):
    """Compatibility data for one part as supplied by the catalog store."""

    id: str
    name: str = ""
    descriptors: list[str] = Field(default_factory=list)  # raw free-text strings
    engine_codes: list[str] = Field(default_factory=list)  # ["K4M", "F4R"] fits ANY car with this engine


class YearGroup(BaseModel):
    years: str
    modifications: list[str] = Field(default_factory=list)


class CompatibilityGroup(BaseModel):
    """Descriptors of one part grouped under a model label for display."""

    model: str
    year_groups: list[YearGroup] = Field(default_factory=list)


class PreviewRow(BaseModel):
    row_number: int
    raw: str
    signature: VehicleSignature
    missing_fields: list[MissingField] = Field(default_factory=list)
    is_complete: bool


class ImportPreview(BaseModel):
    rows: list[PreviewRow] = Field(default_factory=list)
    complete_count: int = 0
    incomplete_count: int = 0
