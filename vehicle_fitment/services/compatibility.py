"""Per-item compatibility views: product-page grouping and import preview.

Unlike the vehicle tree, these views keep incomplete descriptors. Grouping
falls back to placeholder labels, and the import preview exists precisely to
show a human which fields are missing before a bulk upload is accepted.
"""

from typing import Iterable, Optional

from vehicle_fitment.core.enums import (
    ALL_MODIFICATIONS_LABEL,
    ALL_YEARS_LABEL,
    UNKNOWN_MODEL_LABEL,
)
from vehicle_fitment.models.catalog import (
    CompatibilityGroup,
    ImportPreview,
    PreviewRow,
    YearGroup,
)
from vehicle_fitment.models.vehicle import VehicleSignature
from vehicle_fitment.services.signature_parser import SignatureParser, get_default_parser


def modification_badge(raw: str, signature: VehicleSignature) -> str:
    """Short modification label for one descriptor.

    Parsed parts are used when the signature is complete or at least has a
    displacement; otherwise whatever remains of the raw text once the model
    and years are removed.
    """
    if signature.is_complete or signature.volume:
        parts = [signature.volume, signature.valves, signature.engine_code]
        if signature.power:
            parts.append(f"({signature.power})")
        return " ".join(p for p in parts if p)

    model_label = signature.model_name or UNKNOWN_MODEL_LABEL
    years_label = signature.year_range or ALL_YEARS_LABEL
    badge = raw.replace(model_label, "", 1).replace(years_label, "", 1)
    badge = badge.replace("(", "").replace(")", "").strip()
    return badge if len(badge) >= 2 else ALL_MODIFICATIONS_LABEL


def group_compatibility(
    descriptors: Iterable[str],
    parser: Optional[SignatureParser] = None,
) -> list[CompatibilityGroup]:
    """Group one item's descriptors by model, then by year group.

    Groups and badges keep first-seen order; a badge appears once per year group.
    """
    parser = parser or get_default_parser()
    groups: dict[str, dict[str, list[str]]] = {}

    for raw in descriptors:
        signature = parser.parse(raw)
        model_label = signature.model_name or UNKNOWN_MODEL_LABEL
        years_label = signature.year_range or ALL_YEARS_LABEL

        badges = groups.setdefault(model_label, {}).setdefault(years_label, [])
        badge = modification_badge(raw or "", signature)
        if badge not in badges:
            badges.append(badge)

    return [
        CompatibilityGroup(
            model=model,
            year_groups=[
                YearGroup(years=years, modifications=badges)
                for years, badges in year_groups.items()
            ],
        )
        for model, year_groups in groups.items()
    ]


def preview_import(
    rows: Iterable[str],
    parser: Optional[SignatureParser] = None,
) -> ImportPreview:
    """Parse bulk-import rows and report what each one is missing."""
    parser = parser or get_default_parser()
    preview_rows: list[PreviewRow] = []

    for row_number, raw in enumerate(rows, start=1):
        signature = parser.parse(raw)
        preview_rows.append(
            PreviewRow(
                row_number=row_number,
                raw=raw or "",
                signature=signature,
                missing_fields=list(signature.missing_fields),
                is_complete=signature.is_complete,
            )
        )

    complete = sum(1 for row in preview_rows if row.is_complete)
    return ImportPreview(
        rows=preview_rows,
        complete_count=complete,
        incomplete_count=len(preview_rows) - complete,
    )
