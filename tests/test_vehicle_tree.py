"""Tests for building the model → year group → modification tree."""

import logging

from vehicle_fitment.core.enums import MissingField
from vehicle_fitment.models.catalog import CatalogItem
from vehicle_fitment.services.vehicle_tree import (
    RejectionCollector,
    build_vehicle_tree,
    build_vehicle_tree_from_items,
    generation_start_year,
    node_id,
)

CATALOG_DESCRIPTORS = [
    "Дастер 1.6 16V K4M 2010-2015",
    "Duster 2.0 16V F4R 2010-2015",
    "DUSTER (2010-2015) 1,6 16V K4M",
    "Duster 1.5 8V K9K 2015-2021",
    "Logan 1.4 8V K7J 2005-2014",
    "Logan II 1.6 8V K7M 82 л.с. 2014-н.в.",
    "Логан 2 1.6 16V H4M 2014-н.в.",
    "Аркана (двигатель H4M) 1.6 16V",
    "неизвестная деталь",
]


def _names(nodes):
    return [node.name for node in nodes]


def _find(nodes, name):
    return next(node for node in nodes if node.name == name)


# ---------------------------------------------------------------------------
# Structure & ordering
# ---------------------------------------------------------------------------


class TestTreeStructure:
    def test_models_sorted_by_name(self):
        tree = build_vehicle_tree(CATALOG_DESCRIPTORS)
        assert _names(tree) == ["Duster", "Logan", "Logan 2"]

    def test_generations_newest_first(self):
        duster = _find(build_vehicle_tree(CATALOG_DESCRIPTORS), "Duster")
        assert _names(duster.generations) == ["2015-2021", "2010-2015"]

    def test_modifications_by_displacement_desc(self):
        duster = _find(build_vehicle_tree(CATALOG_DESCRIPTORS), "Duster")
        generation = _find(duster.generations, "2010-2015")
        assert _names(generation.modifications) == ["2.0 16V F4R", "1.6 16V K4M"]

    def test_equal_displacement_keeps_insertion_order(self):
        logan2 = _find(build_vehicle_tree(CATALOG_DESCRIPTORS), "Logan 2")
        generation = _find(logan2.generations, "2014-н.в.")
        assert _names(generation.modifications) == ["1.6 8V K7M", "1.6 16V H4M"]

    def test_duplicate_spellings_collapse(self):
        duster = _find(build_vehicle_tree(CATALOG_DESCRIPTORS), "Duster")
        generation = _find(duster.generations, "2010-2015")
        assert _names(generation.modifications).count("1.6 16V K4M") == 1

    def test_modification_carries_engine_and_power(self):
        logan2 = _find(build_vehicle_tree(CATALOG_DESCRIPTORS), "Logan 2")
        mods = logan2.generations[0].modifications
        k7m = _find(mods, "1.6 8V K7M")
        assert k7m.engine_code == "K7M"
        assert k7m.power_hp == 82
        assert _find(mods, "1.6 16V H4M").power_hp is None

    def test_name_based_ids(self):
        duster = _find(build_vehicle_tree(CATALOG_DESCRIPTORS), "Duster")
        assert duster.id == "Duster"
        assert duster.generations[0].id == "Duster20152021"

    def test_model_id_is_the_model_name(self):
        logan2 = _find(build_vehicle_tree(CATALOG_DESCRIPTORS), "Logan 2")
        assert logan2.id == "Logan 2"
        assert logan2.generations[0].id == "Logan22014"

    def test_empty_input(self):
        assert build_vehicle_tree([]) == []


# ---------------------------------------------------------------------------
# Incomplete descriptors
# ---------------------------------------------------------------------------


class TestRejection:
    def test_incomplete_never_in_tree(self):
        tree = build_vehicle_tree(CATALOG_DESCRIPTORS)
        assert "Arkana" not in _names(tree)

    def test_collector_receives_exactly_the_incomplete(self):
        collector = RejectionCollector()
        build_vehicle_tree(CATALOG_DESCRIPTORS, on_rejected=collector)
        assert [raw for raw, _ in collector.rejected] == [
            "Аркана (двигатель H4M) 1.6 16V",
            "неизвестная деталь",
        ]
        assert collector.signatures[0].missing_fields == [MissingField.YEARS]
        assert all(not sig.is_complete for sig in collector.signatures)

    def test_default_callback_is_silent(self):
        assert build_vehicle_tree(["неизвестная деталь"]) == []

    def test_logs_summary(self, caplog):
        with caplog.at_level(logging.INFO, logger="vehicle_fitment"):
            build_vehicle_tree(CATALOG_DESCRIPTORS)
        assert "Built vehicle tree" in caplog.text
        assert "rejected=2" in caplog.text


# ---------------------------------------------------------------------------
# Rebuilds & catalog items
# ---------------------------------------------------------------------------


class TestRebuild:
    def test_idempotent(self):
        first = build_vehicle_tree(CATALOG_DESCRIPTORS)
        second = build_vehicle_tree(CATALOG_DESCRIPTORS)
        assert [m.model_dump() for m in first] == [m.model_dump() for m in second]

    def test_insertion_order_does_not_change_content(self):
        forward = build_vehicle_tree(CATALOG_DESCRIPTORS)
        backward = build_vehicle_tree(list(reversed(CATALOG_DESCRIPTORS)))
        assert _names(forward) == _names(backward)
        for a, b in zip(forward, backward):
            assert _names(a.generations) == _names(b.generations)

    def test_from_catalog_items(self):
        items = [
            CatalogItem(id="1", descriptors=CATALOG_DESCRIPTORS[:4]),
            CatalogItem(id="2", descriptors=CATALOG_DESCRIPTORS[4:], engine_codes=["K4M"]),
            CatalogItem(id="3"),
        ]
        from_items = build_vehicle_tree_from_items(items)
        assert [m.model_dump() for m in from_items] == [
            m.model_dump() for m in build_vehicle_tree(CATALOG_DESCRIPTORS)
        ]


class TestHelpers:
    def test_generation_start_year(self):
        assert generation_start_year("2014-н.в.") == 2014
        assert generation_start_year("н.в.") == 0
        assert generation_start_year("") == 0

    def test_node_id(self):
        assert node_id("Logan 2", "2014-2022") == "Logan220142022"
