"""
R1CS 변수와 선형 결합 (Variables & Linear Combinations)
=========================================================

R1CS 제약 시스템의 모든 관계는 변수(배선)들의 선형 결합으로 표현된다.

**변수 종류**:
  | 종류               | 의미                                   |
  |--------------------|----------------------------------------|
  | committed(i)       | i번째 Pedersen 커밋먼트로 묶인 값 vᵢ   |
  | multiplier_left(i) | i번째 곱셈기의 왼쪽 입력 a_L[i]        |
  | multiplier_right(i)| i번째 곱셈기의 오른쪽 입력 a_R[i]      |
  | multiplier_output(i)| i번째 곱셈기의 출력 a_O[i]            |
  | one                | 상수 1 (상수항 표현용)                 |

  곱셈기 i는 항상 a_L[i] · a_R[i] = a_O[i] 를 만족한다.

**선형 결합**:
  LC = Σ cⱼ · varⱼ  (cⱼ ∈ FR)
  선형 제약 constrain(LC)는 "LC의 값 = 0"을 뜻한다.

사용 예시:
    >>> lc = x.q + x.a * w + x.t * (w * w)   # x.q, x.a, x.t: Variable
    >>> cs.constrain(lc - y_var)

주의:
    py_ecc의 FR은 모르는 피연산자를 만나면 TypeError를 던지므로,
    스칼라는 항상 오른쪽에 둔다 (var * w, lc - z).
"""

from cloak.r1cs.field import FR, to_fr


COMMITTED = "committed"
MULTIPLIER_LEFT = "multiplier_left"
MULTIPLIER_RIGHT = "multiplier_right"
MULTIPLIER_OUTPUT = "multiplier_output"
ONE = "one"


class Variable:
    """제약 시스템 안의 배선 핸들 (wire handle).

    값 자체는 담지 않는다. Prover는 할당 벡터에서, Verifier는 증명에서
    해당 위치의 값을 찾는다.
    """

    __slots__ = ("kind", "index")

    def __init__(self, kind, index=0):
        self.kind = kind
        self.index = index

    @classmethod
    def committed(cls, index):
        return cls(COMMITTED, index)

    @classmethod
    def multiplier_left(cls, index):
        return cls(MULTIPLIER_LEFT, index)

    @classmethod
    def multiplier_right(cls, index):
        return cls(MULTIPLIER_RIGHT, index)

    @classmethod
    def multiplier_output(cls, index):
        return cls(MULTIPLIER_OUTPUT, index)

    @classmethod
    def one(cls):
        return cls(ONE, 0)

    def __eq__(self, other):
        if not isinstance(other, Variable):
            return NotImplemented
        return self.kind == other.kind and self.index == other.index

    def __hash__(self):
        return hash((self.kind, self.index))

    def __repr__(self):
        if self.kind == ONE:
            return "Variable.one()"
        return f"Variable.{self.kind}({self.index})"

    # Variable 연산은 모두 LinearCombination으로 승격된다
    def __add__(self, other):
        return LinearCombination.from_(self) + other

    def __radd__(self, other):
        return LinearCombination.from_(other) + self

    def __sub__(self, other):
        return LinearCombination.from_(self) - other

    def __rsub__(self, other):
        return LinearCombination.from_(other) - self

    def __neg__(self):
        return -LinearCombination.from_(self)

    def __mul__(self, scalar):
        return LinearCombination.from_(self) * scalar

    def __rmul__(self, scalar):
        return LinearCombination.from_(self) * scalar


class LinearCombination:
    """변수와 FR 계수의 선형 결합 Σ cⱼ · varⱼ.

    같은 변수가 여러 번 나와도 합치지 않는다. 평가할 때 모두 더해진다.

    속성:
        terms: (Variable, FR) 튜플 리스트
    """

    def __init__(self, terms=None):
        self.terms = list(terms) if terms is not None else []

    @classmethod
    def zero(cls):
        """항이 없는 선형 결합 (값 0)."""
        return cls()

    @classmethod
    def from_(cls, value):
        """Variable, 상수(정수/FR), LinearCombination을 선형 결합으로 변환한다.

        Raises:
            TypeError: 변환할 수 없는 값일 때
        """
        if isinstance(value, LinearCombination):
            return value
        if isinstance(value, Variable):
            return cls([(value, FR(1))])
        return cls([(Variable.one(), to_fr(value))])

    def __add__(self, other):
        other = LinearCombination.from_(other)
        return LinearCombination(self.terms + other.terms)

    def __radd__(self, other):
        return LinearCombination.from_(other) + self

    def __sub__(self, other):
        return self + (-LinearCombination.from_(other))

    def __rsub__(self, other):
        return LinearCombination.from_(other) - self

    def __neg__(self):
        return LinearCombination([(var, -coeff) for var, coeff in self.terms])

    def __mul__(self, scalar):
        scalar = to_fr(scalar)
        return LinearCombination([(var, coeff * scalar) for var, coeff in self.terms])

    def __rmul__(self, scalar):
        return self * scalar

    def __repr__(self):
        return f"LinearCombination({self.terms!r})"

    def evaluate(self, value_of):
        """변수 → 값 함수를 받아 선형 결합의 값을 계산한다.

        Args:
            value_of: Variable을 받아 FR을 돌려주는 함수

        Returns:
            FR: Σ cⱼ · value_of(varⱼ)
        """
        total = FR(0)
        for var, coeff in self.terms:
            total = total + coeff * value_of(var)
        return total
