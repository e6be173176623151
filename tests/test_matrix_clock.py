import pytest

from moirai.clock import Clock, ViewData
from moirai.matrix_clock import MatrixClock


def view_ab():
    return ViewData(id=0, members=("A", "B"))


def view_abc():
    return ViewData(id=0, members=("A", "B", "C"))


def test_new():
    mc = MatrixClock.build(view_abc(), 0, [[0, 0, 0], [0, 0, 0], [0, 0, 0]])
    assert len(mc) == 3
    assert mc.get("A") == Clock.build(view_abc(), "A", [0, 0, 0])


def test_svv():
    m = MatrixClock.build(view_ab(), 0, [[10, 2], [8, 6]])
    result = m.svv([])
    assert result == Clock.build(view_ab(), None, [8, 2])
    assert result.origin_idx is None


def test_incremental_svv():
    lsv = Clock.build(view_ab(), None, [0, 0])
    m = MatrixClock.build(view_ab(), 0, [[0, 0], [0, 0]])

    c_1 = Clock.build(view_ab(), "A", [1, 0])
    m.merge_clock(c_1)
    assert m.incremental_svv(c_1, lsv, []) == Clock.build(view_ab(), None, [0, 0])

    c_2 = Clock.build(view_ab(), "B", [0, 1])
    m.get("A").merge(c_2)
    m.merge_clock(c_2)
    assert m.incremental_svv(c_2, lsv, []) == Clock.build(view_ab(), None, [0, 1])

    c_3 = Clock.build(view_ab(), "A", [2, 1])
    m.get("A").merge(c_3)
    m.merge_clock(c_3)
    assert m.incremental_svv(c_3, lsv, []) == Clock.build(view_ab(), None, [0, 1])

    c_4 = Clock.build(view_ab(), "B", [2, 2])
    m.get("A").merge(c_4)
    m.merge_clock(c_4)
    assert m.incremental_svv(c_4, lsv, []) == Clock.build(view_ab(), None, [2, 2])


def test_incremental_svv_three_members():
    m = MatrixClock.build(view_abc(), 0, [[0, 1, 1], [0, 1, 0], [0, 1, 1]])
    lsv = Clock.build(view_abc(), None, [0, 0, 0])
    new_clock = Clock.build(view_abc(), "C", [0, 1, 1])
    result = m.incremental_svv(new_clock, lsv, [])
    assert result.to_dict() == {"A": 0, "B": 1, "C": 0}
    assert lsv.to_dict() == {"A": 0, "B": 0, "C": 0}


def test_incremental_svv_requires_origin():
    m = MatrixClock.build(view_abc(), 0, [[0, 0, 0], [0, 0, 0], [0, 0, 0]])
    lsv = Clock.build(view_abc(), None, [0, 0, 0])
    with pytest.raises(ValueError):
        m.incremental_svv(Clock.build(view_abc(), None, [1, 0, 0]), lsv, [])


def test_merge():
    mc1 = MatrixClock.build(view_ab(), 0, [[10, 6], [8, 6]])
    mc2 = MatrixClock.build(view_ab(), 0, [[7, 13], [1, 13]])
    mc1.merge(mc2)
    assert mc1 == MatrixClock.build(view_ab(), 0, [[10, 13], [8, 13]])


def test_svv_ignore():
    mc = MatrixClock.build(view_abc(), 0, [[2, 6, 1], [2, 5, 2], [1, 4, 11]])
    assert mc.svv(["C"]) == Clock.build(view_abc(), None, [2, 5, 1])


def test_display():
    mc = MatrixClock.build(view_abc(), 0, [[0, 1, 1], [1, 0, 1], [1, 1, 0]])
    assert str(mc) == (
        "{\n  A: { A: 0, B: 1, C: 1 }@A\n  B: { A: 1, B: 0, C: 1 }@B\n"
        "  C: { A: 1, B: 1, C: 0 }@C\n}"
    )


def test_change_view():
    mc = MatrixClock.build(view_ab(), 0, [[10, 6], [8, 6]])
    new_view = ViewData(id=1, members=("A", "B", "C"))
    mc.change_view(new_view, 0)
    assert mc == MatrixClock.build(new_view, 0, [[10, 6, 0], [8, 6, 0], [0, 0, 0]])


def test_change_view_complex():
    view_0 = ViewData(id=0, members=("B", "C", "D"))
    mc = MatrixClock.build(view_0, 1, [[10, 6, 4], [8, 6, 4], [9, 0, 4]])
    view_1 = ViewData(id=1, members=("E", "A", "C", "D"))
    mc.change_view(view_1, 2)
    expected = MatrixClock.build(
        view_1, 2, [[0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 6, 4], [0, 0, 0, 4]]
    )
    assert mc == expected
    assert mc.is_valid() is True


def test_most_update():
    mc = MatrixClock.build(view_ab(), 0, [[1, 0], [0, 3]])
    mc.most_update("A")
    assert mc.get("A").to_dict() == {"A": 1, "B": 3}
    assert mc.get("B").to_dict() == {"A": 0, "B": 3}


def test_dot_val_and_members():
    mc = MatrixClock.build(view_ab(), 0, [[4, 2], [1, 7]])
    assert mc.dot_val("A") == 4
    assert mc.dot_val("B") == 7
    assert mc.members() == ("A", "B")
    with pytest.raises(KeyError):
        mc.dot_val("Z")


def test_get_unknown_member():
    mc = MatrixClock(view_ab(), 0)
    assert mc.get("Z") is None
    assert mc.get_by_idx(5) is None
    assert mc.get_by_idx(1) == Clock.build(view_ab(), "B", [0, 0])


def test_origin_clock():
    mc = MatrixClock.build(view_ab(), 1, [[1, 0], [1, 2]])
    assert mc.origin_clock().to_dict() == {"A": 1, "B": 2}
    assert mc.origin_clock().origin() == "B"


def test_clear_and_is_empty():
    mc = MatrixClock(view_ab(), 0)
    assert mc.is_empty() is False
    mc.clear()
    assert mc.is_empty() is True
    assert len(mc) == 0


def test_is_square():
    mc = MatrixClock(view_abc(), 0)
    assert mc.is_square() is True
    mc.get("A").remove("C")
    assert mc.is_square() is False


def test_is_valid():
    assert MatrixClock.build(view_ab(), 0, [[10, 13], [8, 13]]).is_valid() is True
    # A row claims more of B than B itself has.
    assert MatrixClock.build(view_ab(), 0, [[1, 5], [0, 3]]).is_valid() is False
    # Origin row lags behind B's own entry.
    assert MatrixClock.build(view_ab(), 0, [[1, 0], [0, 3]]).is_valid() is False


def test_build_rejects_wrong_shape():
    with pytest.raises(ValueError):
        MatrixClock.build(view_ab(), 0, [[0, 0]])
    with pytest.raises(ValueError):
        MatrixClock.build(view_ab(), 0, [[0, 0], [0]])


def test_merge_clock_requires_origin():
    mc = MatrixClock(view_ab(), 0)
    with pytest.raises(ValueError):
        mc.merge_clock(Clock.build(view_ab(), None, [1, 1]))


def test_equality_depends_on_id():
    a = MatrixClock.build(view_ab(), 0, [[1, 0], [0, 0]])
    b = MatrixClock.build(view_ab(), 1, [[1, 0], [0, 0]])
    assert (a == b) is False
    assert a == MatrixClock.build(view_ab(), 0, [[1, 0], [0, 0]])