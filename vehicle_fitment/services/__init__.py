from vehicle_fitment.services.compatibility import group_compatibility, preview_import
from vehicle_fitment.services.fitment_matcher import (
    filter_catalog,
    item_matches,
    matches_vehicle,
)
from vehicle_fitment.services.signature_parser import (
    ParserTables,
    SignatureParser,
    format_descriptor,
    parse_descriptor,
)
from vehicle_fitment.services.vehicle_tree import (
    RejectionCollector,
    build_vehicle_tree,
    build_vehicle_tree_from_items,
)

__all__ = [
    "group_compatibility",
    "preview_import",
    "filter_catalog",
    "item_matches",
    "matches_vehicle",
    "ParserTables",
    "SignatureParser",
    "format_descriptor",
    "parse_descriptor",
    "RejectionCollector",
    "build_vehicle_tree",
    "build_vehicle_tree_from_items",
]
