"""
Tests for regions: defaults, repair, scalar deltas and deterministic outline evolution.
"""

import pytest

from geography import (
    Region, Specialization, TerrainType, DEFAULT_REGIONS, MAP_MIN, MAP_MAX,
    default_regions, normalize_regions, hash_seed, seeded_offset, shape_amplitude,
    policy_shape_bias, should_evolve_shapes, evolve_shape, evolve_region_shapes,
    apply_region_deltas, degrade_region, set_specialization, weakest_region, pick_region,
)


@pytest.fixture
def regions():
    return default_regions()


class TestHashing:

    def test_fnv1a_known_values(self):
        assert hash_seed("") == 0x811C9DC5
        assert hash_seed("a") == 0xE40C292C

    def test_seeded_offset_in_range(self):
        for i in range(200):
            value = seeded_offset(f"seed-{i}", 3)
            assert -3 <= value <= 3

    def test_pick_region_is_stable(self, regions):
        assert pick_region(regions, "n1:faction:citizens").id == pick_region(regions, "n1:faction:citizens").id


class TestDefaults:

    def test_four_default_regions(self, regions):
        assert [r.id for r in regions] == ["r-heartland", "r-coast", "r-highlands", "r-frontier"]

    def test_defaults_are_copies(self, regions):
        regions[0].shape.append((50, 50))
        assert len(DEFAULT_REGIONS[0].shape) == 5

    def test_normalize_seeds_defaults_when_missing(self):
        assert len(normalize_regions(None)) == 4
        assert len(normalize_regions([])) == 4

    def test_degenerate_shape_gets_default_back(self):
        region = Region.from_dict({"id": "r-coast", "name": "Coast", "shape": [{"x": 10, "y": 10}]},
                                  DEFAULT_REGIONS[1])
        assert region.shape == DEFAULT_REGIONS[1].shape

    def test_from_dict_repairs_values(self):
        region = Region.from_dict({
            "id": "r-x", "terrain": "swamp", "specialization": "trade",
            "shape": [[0, 0], [100, 0], [50, 100]], "stability": 400,
        }, DEFAULT_REGIONS[0])
        assert region.terrain == TerrainType.PLAINS
        assert region.specialization == Specialization.TRADE
        assert region.stability == 100
        assert all(MAP_MIN <= c <= MAP_MAX for p in region.shape for c in p)


class TestShapeEvolution:

    def test_amplitude_by_era(self):
        assert shape_amplitude("Stone Age") == 1
        assert shape_amplitude("Classical Era") == 2
        assert shape_amplitude("Information Age") == 3
        assert shape_amplitude("Intergalactic Empire") == 4

    def test_cadence_and_specialization_trigger(self):
        assert should_evolve_shapes(6, "issue-1", 6)
        assert not should_evolve_shapes(7, "issue-1", 6)
        assert should_evolve_shapes(7, "spec-trade", 6)

    def test_trade_bias(self):
        coast = DEFAULT_REGIONS[1]
        dx, dy, scale = policy_shape_bias(coast, {}, targeted=False)
        assert dx == pytest.approx(0.48)
        assert dy == 0
        assert scale == 1.0

    def test_targeted_bias_is_stronger(self):
        heartland = DEFAULT_REGIONS[0]
        dx_far, _, _ = policy_shape_bias(heartland, {"economy": 5}, targeted=False)
        dx_near, _, _ = policy_shape_bias(heartland, {"economy": 5}, targeted=True)
        assert dx_near == pytest.approx(3 * dx_far)

    def test_scale_is_clamped(self):
        fortress = DEFAULT_REGIONS[2]
        _, _, scale = policy_shape_bias(fortress, {"technology": 10}, targeted=True)
        assert 0.94 <= scale <= 1.08

    def test_evolution_is_deterministic(self, regions):
        args = ("user-slot-1", regions[0], 6, "Iron Age", "issue-6-1", {"economy": 5})
        assert evolve_shape(*args) == evolve_shape(*args)

    def test_evolution_depends_on_inputs(self, regions):
        a = evolve_shape("user-slot-1", regions[0], 6, "Iron Age", "opt-a", {})
        b = evolve_shape("user-slot-1", regions[0], 6, "Iron Age", "opt-b", {})
        assert a != b

    def test_evolved_points_stay_on_canvas(self, regions):
        edge = Region("r-edge", "Edge", TerrainType.FRONTIER, Specialization.TRADE,
                      [(8, 8), (92, 8), (92, 92), (8, 92)])
        for turn in range(30):
            edge.shape = evolve_shape("n", edge, turn, "Intergalactic Empire", "spec-trade",
                                      {"economy": 10, "technology": 10}, targeted=True)
            assert len(edge.shape) == 4
            assert all(MAP_MIN <= c <= MAP_MAX for p in edge.shape for c in p)

    def test_evolve_all_regions_keeps_ids(self, regions):
        evolved = evolve_region_shapes("n", regions, 3, "Stone Age", "o", {}, "r-coast")
        assert [r.id for r in evolved] == [r.id for r in regions]
        assert all(round(x, 2) == x for r in evolved for x, _ in r.shape)


class TestRegionScalars:

    def test_happiness_raises_stability_everywhere(self, regions):
        updated = apply_region_deltas(regions, {"happiness": 10})
        for before, after in zip(regions, updated):
            assert after.stability == before.stability + 3
            assert after.development == before.development

    def test_targeted_region_bonus(self, regions):
        updated = apply_region_deltas(regions, {}, "r-frontier")
        frontier = updated[3]
        assert frontier.stability == regions[3].stability + 3
        assert frontier.development == regions[3].development + 2
        assert updated[0].stability == regions[0].stability

    def test_degrade_clamps_at_zero(self, regions):
        updated = degrade_region(regions, "r-frontier", 500, 6)
        assert updated[3].stability == 0
        assert updated[3].development == regions[3].development - 6

    def test_set_specialization(self, regions):
        updated = set_specialization(regions, "r-frontier", "scholarly")
        assert updated[3].specialization == Specialization.SCHOLARLY
        assert set_specialization(regions, "r-frontier", "wizardry")[3].specialization == Specialization.AGRARIAN

    def test_weakest_region(self, regions):
        assert weakest_region(regions).id == "r-frontier"
