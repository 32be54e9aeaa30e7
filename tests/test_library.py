from __future__ import annotations

import random

import pytest

from chunkstitch.generators.errors import (
    DimensionMismatchError,
    InvalidArgumentError,
    NoMatchingTemplateError,
)
from chunkstitch.generators.library import ChunkLibrary, weighted_choice
from chunkstitch.generators.templates import ChunkTemplate
from tests.helpers import ScriptedRandom


@pytest.fixture
def light() -> ChunkTemplate:
    return ChunkTemplate((1, 1), weight=1, tag="a", name="light")


@pytest.fixture
def heavy() -> ChunkTemplate:
    return ChunkTemplate((2, 2), weight=3, tag="b", name="heavy")


class TestWeightedChoice:
    @pytest.mark.parametrize(
        "value, expected",
        [(0.0, "light"), (0.2, "light"), (0.25, "heavy"), (0.999, "heavy")],
    )
    def test_walks_cumulative_weights(self, light, heavy, value, expected) -> None:
        """r = value * 4; the first template whose cumulative weight exceeds r wins."""
        assert weighted_choice(ScriptedRandom([value]), [light, heavy]).name == expected

    def test_frequencies_follow_weights(self, light, heavy) -> None:
        rng = random.Random(1234)
        draws = [weighted_choice(rng, [light, heavy]) for _ in range(10000)]
        assert draws.count(heavy) / len(draws) == pytest.approx(0.75, abs=0.03)

    def test_empty_sequence_raises(self) -> None:
        with pytest.raises(NoMatchingTemplateError):
            weighted_choice(ScriptedRandom([0.5]), [])


class TestChunkLibrary:
    def test_add_and_iterate(self, light, heavy) -> None:
        library = ChunkLibrary()
        library.add_template(light)
        library.add_template(heavy)
        assert len(library) == 2
        assert list(library) == [light, heavy]
        assert library.total_weight == 4

    def test_add_none_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            ChunkLibrary().add_template(None)

    def test_mixed_dimensionality_raises(self, light) -> None:
        library = ChunkLibrary([light])
        with pytest.raises(DimensionMismatchError):
            library.add_template(ChunkTemplate((1, 1, 1)))

    def test_geometry_of_empty_library_is_none(self) -> None:
        assert ChunkLibrary().geometry is None

    def test_select_random_from_empty_library_raises(self) -> None:
        with pytest.raises(NoMatchingTemplateError):
            ChunkLibrary().select_random(ScriptedRandom([0.0]))

    def test_select_random_with_tag(self, light, heavy) -> None:
        library = ChunkLibrary([light, heavy])
        assert library.select_random(ScriptedRandom([0.0]), tag="b") is heavy
        with pytest.raises(NoMatchingTemplateError):
            library.select_random(ScriptedRandom([0.0]), tag="c")

    def test_select_random_requires_random_source(self, light) -> None:
        with pytest.raises(InvalidArgumentError):
            ChunkLibrary([light]).select_random(None)

    def test_select_random_where(self, light, heavy) -> None:
        library = ChunkLibrary([light, heavy])
        rng = ScriptedRandom([0.0])
        assert library.select_random_where(rng, lambda t: t.extents[0] > 1) is heavy
        with pytest.raises(NoMatchingTemplateError):
            library.select_random_where(rng, lambda t: False)

    def test_same_seed_same_draws(self, light, heavy) -> None:
        library = ChunkLibrary([light, heavy])
        rng_a, rng_b = random.Random(9), random.Random(9)
        assert [library.select_random(rng_a) for _ in range(20)] == [
            library.select_random(rng_b) for _ in range(20)
        ]

    def test_freeze_freezes_templates(self, light, heavy) -> None:
        library = ChunkLibrary([light, heavy])
        library.freeze()
        assert light.is_frozen and heavy.is_frozen

    def test_get_templates_by_tag(self, light, heavy) -> None:
        library = ChunkLibrary([light, heavy])
        assert library.get_templates_by_tag("a") == [light]
        assert library.get_templates_by_tag("z") == []
