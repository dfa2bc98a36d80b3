"""Fitment matcher: does a catalog item fit the vehicle a user selected?

Two independent tests, either one is enough:

1. Strict: some descriptor parses to exactly the selected model, year group
   and modification.
2. Fallback: the selected modification's engine code is listed among the
   item's bare engine codes (parts registered against a whole engine family).

No compatibility data means no match. Showing a part for every vehicle
when nothing is known about it would risk selling an incompatible part.
"""

import logging
from typing import Iterable, Optional, Sequence

from vehicle_fitment.models.catalog import CatalogItem
from vehicle_fitment.models.vehicle import SelectedVehicle, VehicleSignature
from vehicle_fitment.services.signature_parser import SignatureParser, get_default_parser

logger = logging.getLogger(__name__)


def signature_matches(selected: SelectedVehicle, signature: VehicleSignature) -> bool:
    """Exact-name comparison of one complete signature against the selection."""
    if not signature.is_complete:
        return False
    return (
        signature.model_name == selected.model
        and signature.year_range == selected.generation
        and signature.modification_name == selected.modification
    )


def matches_vehicle(
    selected: SelectedVehicle,
    descriptors: Sequence[str],
    engine_codes: Sequence[str] = (),
    parser: Optional[SignatureParser] = None,
) -> bool:
    """Decide whether an item with these descriptors fits ``selected``.

    Args:
        selected: Vehicle built from vehicle-tree nodes.
        descriptors: The item's raw compatibility descriptors.
        engine_codes: The item's bare engine codes.
        parser: Parser to use; defaults to the shared default-table parser.

    Returns:
        True if any descriptor matches strictly or the engine code is listed.
    """
    parser = parser or get_default_parser()

    for raw in descriptors:
        if signature_matches(selected, parser.parse(raw)):
            return True

    # An empty selected engine code never matches a blank list entry
    return bool(selected.engine_code) and selected.engine_code in engine_codes


def item_matches(
    selected: SelectedVehicle,
    item: CatalogItem,
    parser: Optional[SignatureParser] = None,
) -> bool:
    return matches_vehicle(selected, item.descriptors, item.engine_codes, parser=parser)


def filter_catalog(
    selected: SelectedVehicle,
    items: Iterable[CatalogItem],
    parser: Optional[SignatureParser] = None,
) -> list[CatalogItem]:
    """Items that fit ``selected``, in their original order."""
    matched = [item for item in items if item_matches(selected, item, parser=parser)]
    logger.debug(
        "Filtered catalog for %s | %s | %s: %d matched",
        selected.model,
        selected.generation,
        selected.modification,
        len(matched),
    )
    return matched
