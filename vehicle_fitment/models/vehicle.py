from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from vehicle_fitment.core.enums import MissingField


class VehicleSignature(BaseModel):
    """Structured fields extracted from one raw compatibility descriptor.

    Empty strings mark fields the parser could not find. A signature with any
    required field missing is still a valid value; it simply cannot take part
    in the vehicle tree or in strict matching.
    """

    model_config = ConfigDict(protected_namespaces=())

    raw: str = ""
    model_name: str = ""
    year_range: str = ""
    volume: str = ""
    valves: str = ""
    engine_code: str = ""
    power: str = ""  # e.g. "102 л.с." (never required)
    missing_fields: list[MissingField] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_complete(self) -> bool:
        return not self.missing_fields

    @computed_field  # type: ignore[prop-decorator]
    @property
    def canonical_key(self) -> str:
        """Deduplication key: ``"<model> | <years> | <volume> <valves> <engine>"``."""
        return (
            f"{self.model_name} | {self.year_range} | "
            f"{self.volume} {self.valves} {self.engine_code}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def modification_name(self) -> str:
        """Volume, valves and engine code with empty parts left out."""
        parts = [self.volume, self.valves, self.engine_code]
        return " ".join(p for p in parts if p)


class VehicleModification(BaseModel):
    id: str
    name: str  # e.g. "1.6 16V K4M"
    engine_code: str  # e.g. "K4M"
    power_hp: Optional[int] = None


class VehicleGeneration(BaseModel):
    id: str
    name: str  # year group, e.g. "2010-2015" or "2014-н.в."
    modifications: list[VehicleModification] = Field(default_factory=list)


class VehicleModel(BaseModel):
    id: str
    name: str  # e.g. "Duster", "Logan 2"
    generations: list[VehicleGeneration] = Field(default_factory=list)


class SelectedVehicle(BaseModel):
    """A (model, year group, modification) choice made from the vehicle tree.

    Names must be taken verbatim from tree nodes: strict matching compares
    them by exact string equality. When ``engine_code`` is not given it is
    read from the modification name, whose last part is the engine code.
    """

    model: str
    generation: str
    modification: str
    engine_code: str = ""

    @model_validator(mode="after")
    def _engine_code_from_modification(self) -> "SelectedVehicle":
        # Tree modification names are "<volume> <valves> <engine>"
        parts = self.modification.split()
        if not self.engine_code and len(parts) == 3:
            self.engine_code = parts[-1]
        return self

    @classmethod
    def from_nodes(
        cls,
        model: VehicleModel,
        generation: VehicleGeneration,
        modification: VehicleModification,
    ) -> "SelectedVehicle":
        return cls(
            model=model.name,
            generation=generation.name,
            modification=modification.name,
            engine_code=modification.engine_code,
        )
