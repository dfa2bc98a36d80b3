from vehicle_fitment.models.catalog import (
    CatalogItem,
    CompatibilityGroup,
    ImportPreview,
    PreviewRow,
    YearGroup,
)
from vehicle_fitment.models.vehicle import (
    SelectedVehicle,
    VehicleGeneration,
    VehicleModel,
    VehicleModification,
    VehicleSignature,
)

__all__ = [
    "CatalogItem",
    "CompatibilityGroup",
    "ImportPreview",
    "PreviewRow",
    "YearGroup",
    "SelectedVehicle",
    "VehicleGeneration",
    "VehicleModel",
    "VehicleModification",
    "VehicleSignature",
]
