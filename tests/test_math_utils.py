import pytest
from hypothesis import given, strategies as st

from wellclear.math_utils import dot, norm, norm3, add3, sub3, mul3


def test_dot_basic():
    assert dot((1, 2), (3, 4)) == 11
    assert dot((0, 0), (3, 4)) == 0
    assert dot((1, -1), (1, 1)) == 0


def test_norm_basic():
    assert norm((3, 4)) == 5
    assert norm3((2, 3, 6)) == 7
    assert norm3((0, 0, 0)) == 0


def test_add_sub_inverse():
    a = (10.0, -5.0, 2.0)
    b = (-2.0, 3.0, 0.5)
    c = add3(a, b)
    assert sub3(c, b) == a
    assert sub3(c, a) == b


def test_scalar_multiplication():
    v = (2.0, -3.0, 1.0)
    mv = mul3(v, 4.0)
    assert mv == (8.0, -12.0, 4.0)
    assert norm3(mv) == pytest.approx(4.0 * norm3(v))


@given(
    v=st.tuples(st.floats(-1e3, 1e3), st.floats(-1e3, 1e3), st.floats(-1e3, 1e3)),
    k=st.floats(-100, 100),
)
def test_norm3_homogeneous(v, k):
    # norm(k * v) ≈ |k| * norm(v)
    assert norm3(mul3(v, k)) == pytest.approx(abs(k) * norm3(v), rel=1e-6, abs=1e-6)
