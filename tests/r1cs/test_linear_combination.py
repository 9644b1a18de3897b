"""
Variable / LinearCombination 테스트.
"""
import pytest

from cloak.r1cs.field import FR
from cloak.r1cs.linear_combination import Variable, LinearCombination


def _values(mapping):
    """Variable → FR 딕셔너리를 평가 함수로 바꾼다."""
    def value_of(var):
        if var == Variable.one():
            return FR(1)
        return mapping[var]
    return value_of


@pytest.fixture
def wires():
    a = Variable.multiplier_left(0)
    b = Variable.multiplier_right(0)
    c = Variable.committed(1)
    value_of = _values({a: FR(3), b: FR(5), c: FR(11)})
    return a, b, c, value_of


class TestVariable:
    """Variable 테스트."""

    def test_equality_and_hash(self):
        """종류와 인덱스가 같으면 같은 변수."""
        assert Variable.committed(0) == Variable.committed(0)
        assert Variable.committed(0) != Variable.committed(1)
        assert Variable.multiplier_left(0) != Variable.multiplier_right(0)
        assert len({Variable.committed(2), Variable.committed(2)}) == 1

    def test_repr(self):
        """repr 형식."""
        assert repr(Variable.multiplier_output(3)) == "Variable.multiplier_output(3)"
        assert repr(Variable.one()) == "Variable.one()"

    def test_add_produces_linear_combination(self, wires):
        """변수끼리 더하면 선형 결합."""
        a, b, _, value_of = wires
        lc = a + b
        assert isinstance(lc, LinearCombination)
        assert lc.evaluate(value_of) == FR(8)

    def test_sub(self, wires):
        """변수끼리 빼기."""
        a, b, _, value_of = wires
        assert (b - a).evaluate(value_of) == FR(2)
        assert (a - b).evaluate(value_of) == FR(0) - FR(2)

    def test_scalar_on_the_right(self, wires):
        """오른쪽 스칼라 곱."""
        a, _, _, value_of = wires
        assert (a * FR(4)).evaluate(value_of) == FR(12)
        assert (a * 4).evaluate(value_of) == FR(12)

    def test_int_on_the_left(self, wires):
        """왼쪽 정수와의 연산."""
        a, _, _, value_of = wires
        assert (4 * a).evaluate(value_of) == FR(12)
        assert (1 + a).evaluate(value_of) == FR(4)
        assert (1 - a).evaluate(value_of) == FR(0) - FR(2)

    def test_neg(self, wires):
        """부호 반전."""
        a, _, _, value_of = wires
        assert (-a).evaluate(value_of) == FR(0) - FR(3)

    def test_variable_times_variable_is_rejected(self, wires):
        """변수끼리의 곱은 선형이 아니다."""
        a, b, _, _ = wires
        with pytest.raises(TypeError):
            a * b


class TestLinearCombination:
    """LinearCombination 테스트."""

    def test_zero(self, wires):
        """영 선형 결합은 0으로 평가된다."""
        _, _, _, value_of = wires
        assert LinearCombination.zero().evaluate(value_of) == FR(0)

    def test_from_constant(self, wires):
        """상수는 ONE 변수의 항이 된다."""
        _, _, _, value_of = wires
        lc = LinearCombination.from_(FR(9))
        assert lc.terms == [(Variable.one(), FR(9))]
        assert lc.evaluate(value_of) == FR(9)

    def test_from_linear_combination_is_identity(self):
        """선형 결합은 그대로 반환된다."""
        lc = LinearCombination.from_(3)
        assert LinearCombination.from_(lc) is lc

    def test_from_rejects_unknown(self):
        """알 수 없는 타입은 거부된다."""
        with pytest.raises(TypeError):
            LinearCombination.from_("x")

    def test_combination_with_tags(self, wires):
        """q + w·a + w²·t 형태의 결합."""
        a, b, c, value_of = wires
        w = FR(10)
        lc = a + b * w + c * (w * w)
        assert lc.evaluate(value_of) == FR(3 + 50 + 1100)

    def test_subtract_constant(self, wires):
        """상수 빼기."""
        a, _, _, value_of = wires
        z = FR(7)
        assert (LinearCombination.from_(a) - z).evaluate(value_of) == FR(0) - FR(4)

    def test_repeated_variable_terms_accumulate(self, wires):
        """같은 변수의 항은 평가 시 합쳐진다."""
        a, _, _, value_of = wires
        lc = a + a + a
        assert len(lc.terms) == 3
        assert lc.evaluate(value_of) == FR(9)

    def test_scale(self, wires):
        """선형 결합 전체에 스칼라 곱."""
        a, b, _, value_of = wires
        assert ((a + b) * 2).evaluate(value_of) == FR(16)
        assert (2 * (a + b)).evaluate(value_of) == FR(16)

    def test_operations_do_not_mutate(self, wires):
        """연산은 원래 선형 결합을 바꾸지 않는다."""
        a, b, _, _ = wires
        lc = LinearCombination.from_(a)
        _ = lc + b
        _ = -lc
        assert lc.terms == [(a, FR(1))]
