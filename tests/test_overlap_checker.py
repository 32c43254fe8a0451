import pytest

from asmcore.util.overlap_checker import OverlapChecker, OverlapError


def _checker():
    checker = OverlapChecker()
    checker.check_and_insert("a", 0, 4)
    checker.check_and_insert("b", 4, 4)
    return checker


def test_overlap_with_following_entry():
    checker = _checker()
    with pytest.raises(OverlapError) as info:
        checker.check_and_insert("c", 3, 2)
    assert info.value.span == "c"
    assert info.value.other_span == "b"


def test_overlap_with_preceding_entry():
    checker = _checker()
    with pytest.raises(OverlapError) as info:
        checker.check_and_insert("c", 2, 1)
    assert info.value.other_span == "a"


def test_same_position_overlaps():
    checker = _checker()
    with pytest.raises(OverlapError) as info:
        checker.check_and_insert("c", 4, 1)
    assert info.value.other_span == "b"
    assert str(info.value) == "output overlap"


def test_ranges_inserted_out_of_order():
    checker = OverlapChecker()
    checker.check_and_insert("late", 10, 2)
    checker.check_and_insert("early", 0, 2)
    with pytest.raises(OverlapError) as info:
        checker.check_and_insert("mid", 9, 2)
    assert info.value.other_span == "late"