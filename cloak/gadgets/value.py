"""
태그가 붙은 값 (Tagged Value) 모델
===================================

기밀 거래의 값 하나는 수량과 두 개의 분류 태그로 이루어진다:

    Value = { q: 수량 (u64), a: 자산 태그 (FR), t: 발행 태그 (FR) }

  영값 Value.zero() = { q: 0, a: 0, t: 0 } 은 "값 없음" / 패딩 자리표시자이다.

**회로 쪽 표현 (AllocatedValue)**:
  세 배선 (q, a, t)의 핸들. Prover와 Verifier를 명시적인 두 타입으로 나눈다:

  | 타입          | 배선 | 할당(witness)     |
  |---------------|------|-------------------|
  | ProverValue   | ✓    | 항상 있음 (Value) |
  | VerifierValue | ✓    | 속성 자체가 없음  |

  Verifier 코드 경로는 할당을 볼 수 없고, Prover 경로는 할당을 빠뜨릴 수 없다.

**커밋 어댑터**:
  Prover: Value 리스트 → (CommittedValue 리스트, ProverValue 리스트)
  Verifier: CommittedValue 리스트 → VerifierValue 리스트

사용 예시:
    >>> values = [Value(1, 666, 777), Value.zero()]
    >>> committed, prover_vars = commit_values(prover, values)
    >>> verifier_vars = commit_committed(verifier, committed)
"""

import secrets

from cloak.r1cs.field import FR, CURVE_ORDER, to_fr


# 수량은 u64 범위 안에 있어야 한다
U64_MAX = (1 << 64) - 1


def random_blinding():
    """커밋먼트 블라인딩 계수를 균등 무작위로 뽑는다."""
    return FR(secrets.randbelow(CURVE_ORDER))


class Value:
    """구체적인 (witness를 가진) 태그 값.

    속성:
        q: 수량, 0 ≤ q < 2^64 인 정수
        a: 자산 태그 (FR)
        t: 발행 태그 (FR)
    """

    __slots__ = ("q", "a", "t")

    def __init__(self, q, a, t):
        if not isinstance(q, int) or isinstance(q, bool):
            raise TypeError(f"수량은 정수여야 합니다: {type(q).__name__}")
        if q < 0 or q > U64_MAX:
            raise ValueError(f"수량은 u64 범위 안에 있어야 합니다: {q}")
        self.q = q
        self.a = to_fr(a)
        self.t = to_fr(t)

    @classmethod
    def zero(cls):
        """영값 (패딩 자리표시자)."""
        return cls(0, FR(0), FR(0))

    def is_zero(self):
        return self.q == 0 and self.a == FR(0) and self.t == FR(0)

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self.q == other.q and self.a == other.a and self.t == other.t

    def __hash__(self):
        return hash((self.q, int(self.a), int(self.t)))

    def __repr__(self):
        return f"Value(q={self.q}, a={int(self.a)}, t={int(self.t)})"

    def commit(self, prover, blindings=None):
        """q, a, t를 이 순서로 커밋한다.

        Args:
            prover: Prover
            blindings: 블라인딩 세 개 (없으면 무작위)

        Returns:
            tuple: (CommittedValue, ProverValue)
        """
        if blindings is None:
            blindings = (random_blinding(), random_blinding(), random_blinding())
        b_q, b_a, b_t = blindings

        q_com, q_var = prover.commit(FR(self.q), b_q)
        a_com, a_var = prover.commit(self.a, b_a)
        t_com, t_var = prover.commit(self.t, b_t)

        return CommittedValue(q_com, a_com, t_com), ProverValue(q_var, a_var, t_var, self)

    def allocate(self, cs):
        """커밋 없이 곱셈기 입력 세 개로 할당한다.

        Returns:
            cs 쪽에 맞는 AllocatedValue (Prover면 ProverValue)
        """
        q = cs.allocate(FR(self.q))
        a = cs.allocate(self.a)
        t = cs.allocate(self.t)
        return cs.allocated_value(q, a, t, self)


class AllocatedValue:
    """제약 시스템에 할당된 값의 세 배선 핸들.

    직접 만들지 않고 ProverValue / VerifierValue를 쓴다.
    """

    __slots__ = ("q", "a", "t")

    def __init__(self, q, a, t):
        self.q = q
        self.a = a
        self.t = t

    def wires(self):
        return self.q, self.a, self.t

    def combine(self, w, w2):
        """세 배선을 하나의 선형 결합 q + w·a + w²·t 로 묶는다."""
        return self.q + self.a * w + self.t * w2


class ProverValue(AllocatedValue):
    """Prover 쪽 할당 값: 배선 + 필수 할당.

    속성:
        assignment: 배선에 실제로 할당되는 Value
    """

    __slots__ = ("assignment",)

    def __init__(self, q, a, t, assignment):
        if not isinstance(assignment, Value):
            raise ValueError("ProverValue에는 Value 할당이 필요합니다")
        super().__init__(q, a, t)
        self.assignment = assignment

    def __repr__(self):
        return f"ProverValue({self.q!r}, {self.a!r}, {self.t!r}, {self.assignment!r})"


class VerifierValue(AllocatedValue):
    """Verifier 쪽 할당 값: 배선만 있다."""

    __slots__ = ()

    @classmethod
    def unassigned(cls, cs):
        """할당 없이 곱셈기 입력 세 개로 할당한다 (Verifier 전용)."""
        q = cs.allocate(None)
        a = cs.allocate(None)
        t = cs.allocate(None)
        return cls(q, a, t)

    def __repr__(self):
        return f"VerifierValue({self.q!r}, {self.a!r}, {self.t!r})"


class CommittedValue:
    """Verifier가 보는 커밋된 값: q, a, t 각각의 Pedersen 커밋먼트."""

    __slots__ = ("q", "a", "t")

    def __init__(self, q, a, t):
        self.q = q
        self.a = a
        self.t = t

    def commit(self, verifier):
        """세 커밋먼트를 Verifier에 q, a, t 순서로 넣는다.

        Returns:
            VerifierValue
        """
        q = verifier.commit(self.q)
        a = verifier.commit(self.a)
        t = verifier.commit(self.t)
        return VerifierValue(q, a, t)


def commit_values(prover, values):
    """Value 리스트를 순서대로 커밋한다.

    Returns:
        tuple: (CommittedValue 리스트, ProverValue 리스트)
    """
    committed = []
    allocated = []
    for value in values:
        com, var = value.commit(prover)
        committed.append(com)
        allocated.append(var)
    return committed, allocated


def commit_committed(verifier, committed_values):
    """CommittedValue 리스트를 순서대로 Verifier에 넣는다.

    Returns:
        list[VerifierValue]
    """
    return [value.commit(verifier) for value in committed_values]
