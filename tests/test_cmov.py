import pytest

from blockutils.cmov import cmovnz, cmovz

CASES = [
    (0x11, 0x22),
    (0x1111, 0x2222),
    (0x11111111, 0x22222222),
    (0x11111111_11111111, 0x22222222_22222222),
    (
        0x11111111_11111111_22222222_22222222,
        0x22222222_22222222_33333333_33333333,
    ),
]


@pytest.mark.parametrize("initial, other", CASES)
def test_cmovz_works(initial, other):
    n = initial
    for cond in range(1, 0xFF):
        n = cmovz(n, other, cond)
        assert n == initial
    n = cmovz(n, other, 0)
    assert n == other


@pytest.mark.parametrize("initial, other", CASES)
def test_cmovnz_works(initial, other):
    n = cmovnz(initial, other, 0)
    assert n == initial
    for cond in range(1, 0xFF):
        assert cmovnz(initial, other, cond) == other


def test_cmovnz_u128_from_smaller_value():
    target = 0x22222222_22222222_33333333_33333333
    for cond in range(1, 0xFF):
        assert cmovnz(0x11111111_11111111, target, cond) == target


def test_condition_0xff():
    assert cmovz(1, 2, 0xFF) == 1
    assert cmovnz(1, 2, 0xFF) == 2


@pytest.mark.parametrize("condition", [-1, 256])
def test_condition_out_of_range(condition):
    with pytest.raises(ValueError):
        cmovz(1, 2, condition)
    with pytest.raises(ValueError):
        cmovnz(1, 2, condition)


def test_negative_values_rejected():
    with pytest.raises(ValueError):
        cmovz(-1, 2, 0)
    with pytest.raises(ValueError):
        cmovnz(1, -2, 1)