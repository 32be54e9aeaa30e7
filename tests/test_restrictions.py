from __future__ import annotations

import pytest

from chunkstitch.generators import Level
from chunkstitch.pipeline.restrictions import (
    CompatibleContextTagsRestriction,
    DifferentChunksRestriction,
    DifferentChunkTagsRestriction,
    PredicateAlignmentRestriction,
)
from tests.helpers import make_template, place


@pytest.fixture
def level() -> Level:
    return Level((20, 2))


def contexts_of(level, tag, socket_tag="", x=0):
    template = make_template((2, 2), contexts=[(0, 1), (2, 1)], tag=tag, socket_tag=socket_tag)
    return place(level, template, (x, 0)).contexts


class TestDifferentChunkTags:
    def test_same_tag_forbidden(self, level) -> None:
        a = contexts_of(level, "room", x=0)[1]
        b = contexts_of(level, "room", x=2)[0]
        assert not DifferentChunkTagsRestriction().can_align(a, b, level)

    def test_different_tags_allowed(self, level) -> None:
        a = contexts_of(level, "room", x=0)[1]
        b = contexts_of(level, "corridor", x=2)[0]
        assert DifferentChunkTagsRestriction().can_align(a, b, level)

    def test_untagged_chunks_allowed(self, level) -> None:
        a = contexts_of(level, "", x=0)[1]
        b = contexts_of(level, "", x=2)[0]
        assert DifferentChunkTagsRestriction().can_align(a, b, level)


class TestOtherRestrictions:
    def test_different_chunks(self, level) -> None:
        first, second = contexts_of(level, "room")
        other = contexts_of(level, "room", x=2)[0]
        restriction = DifferentChunksRestriction()
        assert not restriction.can_align(first, second, level)
        assert restriction.can_align(second, other, level)

    def test_compatible_context_tags(self, level) -> None:
        door = contexts_of(level, "", socket_tag="door", x=0)[1]
        window = contexts_of(level, "", socket_tag="window", x=2)[0]
        any_tag = contexts_of(level, "", x=4)[0]
        restriction = CompatibleContextTagsRestriction()
        assert not restriction.can_align(door, window, level)
        assert restriction.can_align(door, any_tag, level)

    def test_predicate(self, level) -> None:
        a, b = contexts_of(level, "")
        restriction = PredicateAlignmentRestriction(lambda x, y, lvl: x.index < y.index)
        assert restriction.can_align(a, b, level)
        assert not restriction.can_align(b, a, level)
