"""Vehicle tree builder: folds catalog descriptors into model → years → modification.

The tree is rebuilt from scratch on every call. Node identity is name-based,
so consumers needing stable references across rebuilds should key on node
``id``/name tuples rather than object identity.

Incomplete descriptors never reach the tree. They are handed to the optional
``on_rejected`` callback so callers can audit what was dropped.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from vehicle_fitment.core.logging import log_rejected
from vehicle_fitment.models.catalog import CatalogItem
from vehicle_fitment.models.vehicle import (
    VehicleGeneration,
    VehicleModel,
    VehicleModification,
    VehicleSignature,
)
from vehicle_fitment.services.signature_parser import SignatureParser, get_default_parser
from vehicle_fitment.utils.converters import leading_number, safe_int

logger = logging.getLogger(__name__)

RejectionCallback = Callable[[str, VehicleSignature], None]

_LEADING_YEAR_RE = re.compile(r"^(\d{4})")
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


def _ignore_rejected(raw: str, signature: VehicleSignature) -> None:
    return None


@dataclass
class RejectionCollector:
    """``on_rejected`` callback that records every dropped descriptor."""

    rejected: list[tuple[str, VehicleSignature]] = field(default_factory=list)

    def __call__(self, raw: str, signature: VehicleSignature) -> None:
        self.rejected.append((raw, signature))

    @property
    def signatures(self) -> list[VehicleSignature]:
        return [signature for _, signature in self.rejected]


def node_id(*parts: str) -> str:
    """Name-based node id with everything but ASCII letters and digits stripped.

    Examples:
        >>> node_id("Logan 2", "2014-2022")
        'Logan220142022'
    """
    return _NON_ALNUM_RE.sub("", "_".join(parts))


def generation_start_year(name: str) -> int:
    """Leading four-digit year of a year-group name, 0 when absent."""
    match = _LEADING_YEAR_RE.match(name)
    return int(match.group(1)) if match else 0


def _power_hp(power: str) -> Optional[int]:
    hp = safe_int(power.split()[0]) if power else 0
    return hp or None


def build_vehicle_tree(
    descriptors: Iterable[str],
    on_rejected: Optional[RejectionCallback] = None,
    parser: Optional[SignatureParser] = None,
) -> list[VehicleModel]:
    """Build the sorted model → year group → modification tree.

    Args:
        descriptors: Raw descriptors from every catalog item.
        on_rejected: Called with ``(raw, signature)`` for each incomplete descriptor.
        parser: Parser to use; defaults to the shared default-table parser.

    Returns:
        Models sorted by name; year groups newest first; modifications by
        displacement, largest first.
    """
    parser = parser or get_default_parser()
    on_rejected = on_rejected or _ignore_rejected

    models: dict[str, VehicleModel] = {}
    seen_keys: set[str] = set()
    total = 0
    rejected = 0

    for raw in descriptors:
        total += 1
        signature = parser.parse(raw)

        if not signature.is_complete:
            rejected += 1
            log_rejected(raw, [f.value for f in signature.missing_fields])
            on_rejected(raw, signature)
            continue

        if signature.canonical_key in seen_keys:
            continue
        seen_keys.add(signature.canonical_key)

        _insert(models, signature)

    tree = sorted(models.values(), key=lambda m: m.name)
    for model in tree:
        model.generations.sort(key=lambda g: generation_start_year(g.name), reverse=True)
        for generation in model.generations:
            generation.modifications.sort(
                key=lambda m: leading_number(m.name), reverse=True
            )

    logger.info(
        "Built vehicle tree: descriptors=%d rejected=%d unique=%d models=%d",
        total,
        rejected,
        len(seen_keys),
        len(tree),
    )
    return tree


def _insert(models: dict[str, VehicleModel], signature: VehicleSignature) -> None:
    # 1. Model
    model = models.get(signature.model_name)
    if model is None:
        model = VehicleModel(id=signature.model_name, name=signature.model_name)
        models[signature.model_name] = model

    # 2. Year group
    generation = next(
        (g for g in model.generations if g.name == signature.year_range), None
    )
    if generation is None:
        generation = VehicleGeneration(
            id=node_id(signature.model_name, signature.year_range),
            name=signature.year_range,
        )
        model.generations.append(generation)

    # 3. Modification
    mod_name = signature.modification_name
    if not any(m.name == mod_name for m in generation.modifications):
        generation.modifications.append(
            VehicleModification(
                id=node_id(signature.model_name, signature.year_range, mod_name),
                name=mod_name,
                engine_code=signature.engine_code,
                power_hp=_power_hp(signature.power),
            )
        )


def build_vehicle_tree_from_items(
    items: Iterable[CatalogItem],
    on_rejected: Optional[RejectionCallback] = None,
    parser: Optional[SignatureParser] = None,
) -> list[VehicleModel]:
    """Build the tree from the descriptors of every catalog item."""
    descriptors = (raw for item in items for raw in item.descriptors)
    return build_vehicle_tree(descriptors, on_rejected=on_rejected, parser=parser)
