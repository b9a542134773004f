"""Tests for SourceRange and RangeIndex."""

from docbridge.extractor.ranges import RangeIndex, SourceRange


class TestSourceRange:
    def test_contains(self):
        outer = SourceRange(0, 10)
        assert outer.contains(SourceRange(2, 5))
        assert outer.contains(SourceRange(0, 10))
        assert not outer.contains(SourceRange(5, 11))

    def test_strictly_contains_excludes_equal(self):
        outer = SourceRange(0, 10)
        assert outer.strictly_contains(SourceRange(0, 9))
        assert not outer.strictly_contains(SourceRange(0, 10))

    def test_slice(self):
        assert SourceRange(6, 11).slice("hello world") == "world"


class TestRangeIndex:
    def test_within_in_source_order(self):
        index = RangeIndex(
            [
                (SourceRange(30, 40), "c"),
                (SourceRange(0, 100), "outer"),
                (SourceRange(10, 20), "a"),
                (SourceRange(95, 120), "straddles"),
            ]
        )
        assert len(index) == 4
        assert list(index.within(SourceRange(0, 100))) == ["a", "c"]
        assert list(index.within(SourceRange(0, 100), strict=False)) == ["outer", "a", "c"]

    def test_empty(self):
        assert list(RangeIndex().within(SourceRange(0, 10))) == []
