"""Signature parser for free-text vehicle compatibility descriptors.

This module is the single source of truth for turning a raw descriptor such as
``"Аркана (двигатель H4M) 1.6 16V"`` or ``"Logan 2014-2022 1.6 8V K7M"`` into a
``VehicleSignature``. The vehicle tree and the fitment matcher both go through
here, so they can never disagree on what a descriptor means.

Parsing never fails: anything unrecognised is left empty and reported in
``missing_fields``.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Mapping, Optional

from vehicle_fitment.core.enums import OPEN_ENDED_YEAR, MissingField
from vehicle_fitment.models.vehicle import VehicleSignature

# =============================================================================
# LOOKUP TABLES
# =============================================================================

# Scanned in declaration order; the first substring hit wins.
MODEL_ALIASES: dict[str, str] = {
    "АРКАНА": "Arkana", "ARKANA": "Arkana",
    "ЛОГАН": "Logan", "LOGAN": "Logan",
    "ДАСТЕР": "Duster", "DUSTER": "Duster",
    "САНДЕРО": "Sandero", "SANDERO": "Sandero",
    "КАПТЮР": "Kaptur", "КАПТУР": "Kaptur", "KAPTUR": "Kaptur",
    "МЕГАН": "Megane", "MEGANE": "Megane",
    "КЛИО": "Clio", "CLIO": "Clio",
    "ФЛЮЕНС": "Fluence", "FLUENCE": "Fluence",
    "СИМБОЛ": "Symbol", "SYMBOL": "Symbol",
    "КАНГУ": "Kangoo", "KANGOO": "Kangoo",
    "МАСТЕР": "Master", "MASTER": "Master",
    "ТРАФИК": "Trafic", "TRAFIC": "Trafic",
    "ДОККЕР": "Dokker", "DOKKER": "Dokker",
    "ЛАРГУС": "Largus", "LARGUS": "Largus",
    "СЦЕНИК": "Scenic", "SCENIC": "Scenic",
    "ЭСПЕЙС": "Espace", "ESPACE": "Espace",
    "КОЛЕОС": "Koleos", "KOLEOS": "Koleos",
    "ЛАГУНА": "Laguna", "LAGUNA": "Laguna",
    "ЛАТИТЮД": "Latitude", "LATITUDE": "Latitude",
    "ТАЛИЯ": "Thalia", "THALIA": "Thalia",
}

ROMAN_TO_ARABIC: dict[str, str] = {
    "I": "1", "II": "2", "III": "3", "IV": "4", "V": "5", "VI": "6",
}

# Families whose model name never carries a generation number
UNNUMBERED_MODELS: frozenset[str] = frozenset({"Duster", "Arkana", "Kaptur", "Kangoo"})

# Generation markers that mean "no suffix" for a given model ("Logan 1" is just "Logan")
COLLAPSED_GENERATIONS: dict[str, str] = {"Logan": "1"}

# First letters of real engine families (K4M, F4R, H4M, ...)
ENGINE_PREFIXES: frozenset[str] = frozenset({"K", "F", "H", "M", "D", "E", "R", "V"})

# Drivetrain / transmission / equipment tokens never taken as an engine code
ENGINE_BLACKLIST: frozenset[str] = frozenset({
    "4X4", "4X2", "2WD", "4WD", "AWD", "FWD", "CVT", "ABS", "ESP", "GTE",
    "DCI", "16V", "MT", "AT", "AUTOMAT", "VARIATOR",
})


@dataclass(frozen=True)
class ParserTables:
    """Business knowledge the parser relies on, kept out of its control flow.

    Pass an extended copy to ``SignatureParser`` to teach it new models or
    engine families without touching parsing logic.
    """

    model_aliases: Mapping[str, str] = field(default_factory=lambda: dict(MODEL_ALIASES))
    roman_numerals: Mapping[str, str] = field(default_factory=lambda: dict(ROMAN_TO_ARABIC))
    unnumbered_models: frozenset[str] = UNNUMBERED_MODELS
    collapsed_generations: Mapping[str, str] = field(
        default_factory=lambda: dict(COLLAPSED_GENERATIONS)
    )
    engine_prefixes: frozenset[str] = ENGINE_PREFIXES
    engine_blacklist: frozenset[str] = ENGINE_BLACKLIST


# =============================================================================
# PATTERNS
# =============================================================================

_DECIMAL_COMMA_RE = re.compile(r"(\d),(\d)")
_SEPARATOR_RE = re.compile(r"[()\[\]/,;]")
_WHITESPACE_RE = re.compile(r"\s+")

_ROMAN_RE = re.compile(r"\b(VI|V|IV|III|II|I)\b")
_GENERATION_DIGIT_RE = re.compile(r"\s*(\d)(?!\S)")
_VOLUME_RE = re.compile(r"\b(\d\.\d)\b")
_VALVES_RE = re.compile(r"\b(8|16)\s*(?:V|КЛ|KL|VALVE)")
_ENGINE_SHAPE_RE = re.compile(r"^[A-Z]\d[A-Z]")
_YEAR_RANGE_RE = re.compile(
    r"(19\d{2}|20\d{2})\s*[-–]\s*(19\d{2}|20\d{2}|Н\.?\s?В|НАСТ|\.\.\.)"
)
_POWER_RE = re.compile(r"\b(\d{2,3})\s*(?:HP|LS|Л\.?\s?С\.?|ЛС|CV|CH)\b", re.IGNORECASE)


# =============================================================================
# NORMALIZATION
# =============================================================================


def normalize_descriptor(raw: Optional[str]) -> str:
    """Clean a raw descriptor into upper-case, space-separated tokens.

    Examples:
        >>> normalize_descriptor("Аркана (двигатель H4M) 1,6")
        'АРКАНА ДВИГАТЕЛЬ H4M 1.6'
    """
    if not raw:
        return ""
    text = _DECIMAL_COMMA_RE.sub(r"\1.\2", str(raw))
    text = _SEPARATOR_RE.sub(" ", text).upper()
    return _WHITESPACE_RE.sub(" ", text).strip()


def _capitalize_words(name: str) -> str:
    return " ".join(w if w.isdigit() else w.capitalize() for w in name.split())


# =============================================================================
# PARSER
# =============================================================================


class SignatureParser:
    """Extracts a ``VehicleSignature`` from one raw descriptor.

    Every extraction step runs independently on the normalized text, so a
    failure to find one field never prevents finding the others.
    """

    def __init__(self, tables: Optional[ParserTables] = None):
        self.tables = tables or ParserTables()

    def parse(self, raw: Optional[str]) -> VehicleSignature:
        text = normalize_descriptor(raw)

        model_name = self.extract_model(text)
        volume = self.extract_volume(text)
        valves = self.extract_valves(text)
        engine_code = self.extract_engine_code(text)
        year_range = self.extract_year_range(text)
        power = self.extract_power(text)

        found = {
            MissingField.MODEL: model_name,
            MissingField.YEARS: year_range,
            MissingField.VOLUME: volume,
            MissingField.VALVES: valves,
            MissingField.ENGINE: engine_code,
        }
        missing = [name for name in MissingField if not found[name]]

        return VehicleSignature(
            raw=raw or "",
            model_name=model_name,
            year_range=year_range,
            volume=volume,
            valves=valves,
            engine_code=engine_code,
            power=power,
            missing_fields=missing,
        )

    # -------------------------------------------------------------------------
    # Field extractors (all take normalized text)
    # -------------------------------------------------------------------------

    def extract_model(self, text: str) -> str:
        """Find the canonical model name, including a generation suffix.

        Examples:
            >>> SignatureParser().extract_model("ЛОГАН 2 1.6 8V K7M")
            'Logan 2'
            >>> SignatureParser().extract_model("DUSTER II 2.0")
            'Duster'
        """
        matched_token = ""
        base_name = ""
        for alias, canonical in self.tables.model_aliases.items():
            if alias in text:
                matched_token, base_name = alias, canonical
                break
        if not base_name:
            return ""

        suffix = self._generation_suffix(text, matched_token)
        if base_name in self.tables.unnumbered_models:
            suffix = ""
        if self.tables.collapsed_generations.get(base_name) == suffix:
            suffix = ""

        name = f"{base_name} {suffix}" if suffix else base_name
        return _capitalize_words(name)

    def _generation_suffix(self, text: str, matched_token: str) -> str:
        # Valve spellings such as "16 V" must not read as Roman numeral V
        roman = _ROMAN_RE.search(_VALVES_RE.sub(" ", text))
        if roman:
            return self.tables.roman_numerals.get(roman.group(1), roman.group(1))

        after = text[text.index(matched_token) + len(matched_token):]
        digit = _GENERATION_DIGIT_RE.match(after)
        return digit.group(1) if digit else ""

    def extract_volume(self, text: str) -> str:
        match = _VOLUME_RE.search(text)
        return match.group(1) if match else ""

    def extract_valves(self, text: str) -> str:
        match = _VALVES_RE.search(text)
        return f"{match.group(1)}V" if match else ""

    def extract_engine_code(self, text: str) -> str:
        """Token-based search for engine codes shaped letter-digit-letter.

        A token starting with a known engine-family letter wins immediately;
        otherwise the first shape match is kept as a weak candidate.

        Examples:
            >>> SignatureParser().extract_engine_code("DUSTER 4X4 1.6 16V K4M")
            'K4M'
            >>> SignatureParser().extract_engine_code("LOGAN 1.6 X7Z")
            'X7Z'
        """
        candidate = ""
        for token in text.split(" "):
            if len(token) < 3 or token in self.tables.engine_blacklist:
                continue
            if not _ENGINE_SHAPE_RE.match(token):
                continue
            if token[0] in self.tables.engine_prefixes:
                return token
            if not candidate:
                candidate = token
        return candidate

    def extract_year_range(self, text: str) -> str:
        """Find ``start-end``; open-ended markers become ``"н.в."``.

        Examples:
            >>> SignatureParser().extract_year_range("LOGAN 2014 - Н.В.")
            '2014-н.в.'
        """
        match = _YEAR_RANGE_RE.search(text)
        if not match:
            return ""
        start, end = match.group(1), match.group(2)
        if not end[0].isdigit():
            end = OPEN_ENDED_YEAR
        return f"{start}-{end}"

    def extract_power(self, text: str) -> str:
        match = _POWER_RE.search(text)
        return f"{match.group(1)} л.с." if match else ""


# =============================================================================
# MODULE-LEVEL API
# =============================================================================


@lru_cache
def get_default_parser() -> SignatureParser:
    """Parser built from the default lookup tables."""
    return SignatureParser()


def parse_descriptor(raw: Optional[str]) -> VehicleSignature:
    """Parse one raw descriptor with the default tables."""
    return get_default_parser().parse(raw)


def format_descriptor(model: str, years: str, modification: str) -> str:
    """Build a descriptor in canonical ``"<model> | <years> | <modification>"`` form.

    Used for manually entered structured data; parsing the result reproduces
    the same fields when they are already canonical.

    Examples:
        >>> format_descriptor("Duster", "2010-2015", "1.6 16V K4M")
        'Duster | 2010-2015 | 1.6 16V K4M'
    """
    return f"{model} | {years} | {modification}"
