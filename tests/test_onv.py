import pytest

from fockci.onv import ONV


def test_occupation_indices_and_str():
    onv = ONV(5, 3, 0b10110)
    assert onv.occupation_indices == [1, 2, 4]
    assert str(onv) == "10110"
    assert onv.get_occupied_index(2) == 4


def test_invalid_representation_raises():
    with pytest.raises(ValueError):
        ONV(4, 2, 0b0111)  # three electrons
    with pytest.raises(ValueError):
        ONV(3, 2, 0b1001)  # bit 3 outside 3 orbitals


def test_equality_and_copy():
    onv = ONV(4, 2, 0b0101)
    other = onv.copy()
    assert other == onv
    assert other is not onv
    assert ONV(5, 2, 0b0101) != onv
    assert len({onv, other}) == 1


def test_is_occupied_out_of_range():
    onv = ONV(4, 2, 0b0101)
    assert onv.is_occupied(2)
    assert not onv.is_occupied(1)
    with pytest.raises(ValueError):
        onv.is_occupied(4)


def test_annihilate_and_create_in_place():
    onv = ONV(4, 2, 0b0101)
    assert not onv.annihilate(1)
    assert onv.representation == 0b0101

    assert onv.annihilate(0)
    assert onv.representation == 0b0100
    assert not onv.create(2)
    assert onv.create(3)
    assert onv.representation == 0b1100


def test_occupation_indices_need_explicit_update():
    onv = ONV(4, 2, 0b0011)
    onv.annihilate(0)
    onv.create(3)
    assert onv.occupation_indices == [0, 1]
    onv.update_occupation_indices()
    assert onv.occupation_indices == [1, 3]


def test_phase_tracking_operations():
    onv = ONV(4, 2, 0b0101)
    assert onv.operator_phase_factor(2) == -1
    assert onv.operator_phase_factor(3) == 1

    # a_2 passes the electron in orbital 0
    ok, sign = onv.annihilate_with_phase(2)
    assert ok and sign == -1
    # a_1† passes the electron in orbital 0 again
    ok, sign = onv.create_with_phase(1, sign)
    assert ok and sign == 1
    assert onv.representation == 0b0011

    # failures leave the state and the sign untouched
    ok, sign = onv.create_with_phase(0, -1)
    assert not ok and sign == -1
    ok, sign = onv.annihilate_with_phase(3, 1)
    assert not ok and sign == 1
    assert onv.representation == 0b0011


def test_slice():
    onv = ONV(6, 3, 0b010011)
    assert onv.slice(1, 4) == 0b001
    assert onv.slice(0, 6) == 0b010011
    assert onv.slice(2, 2) == 0
    with pytest.raises(ValueError):
        onv.slice(3, 7)


def test_set_representation_resyncs():
    onv = ONV(4, 2, 0b0011)
    onv.set_representation(0b1010)
    assert onv.occupation_indices == [1, 3]
