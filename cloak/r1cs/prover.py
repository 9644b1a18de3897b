"""
R1CS Prover
============

가젯이 제약을 추가하는 동안 모든 배선 값을 함께 계산해 두었다가,
prove()에서 트랜스크립트 일정을 실행하고 제약 만족 여부를 확인한다.

**prove() 흐름**:
  ┌─────────────────────────────────────────────────────┐
  │  1. m (커밋 수) 추가                                  │
  │  2. 1단계 곱셈기 할당 a_L, a_R, a_O 추가             │
  │  3. 2단계 구분자 → 보류된 callback 실행 (챌린지 사용) │
  │  4. 2단계 곱셈기 할당 추가                            │
  │  5. aₗ·aᵣ = aₒ, 모든 선형 제약 = 0 확인              │
  │  6. R1CSProof 반환                                    │
  └─────────────────────────────────────────────────────┘

사용 예시:
    >>> prover = Prover(PedersenGens(), Transcript(b"PaddedShuffleTest"))
    >>> com, var = prover.commit(FR(5), FR(1234))
    >>> ...  # 가젯이 제약 추가
    >>> proof = prover.prove()
"""

import logging

from cloak.errors import R1CSError
from cloak.gadgets.value import ProverValue
from cloak.r1cs.constraint_system import (
    ConstraintSystem,
    Metrics,
    absorb_multipliers,
    is_satisfied,
)
from cloak.r1cs.field import FR, to_fr
from cloak.r1cs.linear_combination import (
    COMMITTED,
    MULTIPLIER_LEFT,
    MULTIPLIER_OUTPUT,
    MULTIPLIER_RIGHT,
    ONE,
    LinearCombination,
    Variable,
)
from cloak.r1cs.proof import R1CSProof

logger = logging.getLogger(__name__)


class Prover(ConstraintSystem):
    """할당을 알고 있는 쪽의 제약 시스템.

    속성:
        pc_gens: PedersenGens
        transcript: Transcript (외부에서 만들어 넘긴다)
        v, v_blinding: 커밋된 값과 블라인딩
        a_L, a_R, a_O: 곱셈기 할당
        constraints: 선형 제약 리스트
        deferred_constraints: 2단계로 보류된 callback
    """

    value_class = ProverValue

    def __init__(self, pc_gens, transcript):
        transcript.r1cs_domain_sep()
        self.pc_gens = pc_gens
        self.transcript = transcript
        self.v = []
        self.v_blinding = []
        self.a_L = []
        self.a_R = []
        self.a_O = []
        self.constraints = []
        self.deferred_constraints = []
        self.pending_multiplier = None
        self.phase_one_constraints = None

    def commit(self, v, v_blinding):
        """값 v를 Pedersen 커밋하고 트랜스크립트에 추가한다.

        Returns:
            tuple: (커밋먼트 G1 점, Variable.committed(i))
        """
        v = to_fr(v)
        v_blinding = to_fr(v_blinding)
        i = len(self.v)
        self.v.append(v)
        self.v_blinding.append(v_blinding)

        V = self.pc_gens.commit(v, v_blinding)
        self.transcript.append_point(b"V", V)
        return V, Variable.committed(i)

    def eval(self, lc):
        """현재 할당으로 선형 결합을 평가한다."""
        return LinearCombination.from_(lc).evaluate(self._value_of)

    def _value_of(self, var):
        if var.kind == COMMITTED:
            return self.v[var.index]
        if var.kind == MULTIPLIER_LEFT:
            return self.a_L[var.index]
        if var.kind == MULTIPLIER_RIGHT:
            return self.a_R[var.index]
        if var.kind == MULTIPLIER_OUTPUT:
            return self.a_O[var.index]
        if var.kind == ONE:
            return FR(1)
        raise R1CSError(f"알 수 없는 변수: {var!r}")

    def multiply(self, left, right):
        left = LinearCombination.from_(left)
        right = LinearCombination.from_(right)
        l = self.eval(left)
        r = self.eval(right)
        o = l * r

        i = len(self.a_L)
        self.a_L.append(l)
        self.a_R.append(r)
        self.a_O.append(o)

        l_var = Variable.multiplier_left(i)
        r_var = Variable.multiplier_right(i)
        o_var = Variable.multiplier_output(i)

        self.constrain(left - l_var)
        self.constrain(right - r_var)

        return l_var, r_var, o_var

    def allocate(self, assignment=None):
        if assignment is None:
            raise R1CSError("Prover는 할당 없이 변수를 만들 수 없습니다")
        scalar = to_fr(assignment)

        if self.pending_multiplier is None:
            i = len(self.a_L)
            self.pending_multiplier = i
            self.a_L.append(scalar)
            self.a_R.append(FR(0))
            self.a_O.append(FR(0))
            return Variable.multiplier_left(i)

        i = self.pending_multiplier
        self.pending_multiplier = None
        self.a_R[i] = scalar
        self.a_O[i] = self.a_L[i] * scalar
        return Variable.multiplier_right(i)

    def constrain(self, lc):
        self.constraints.append(LinearCombination.from_(lc))

    def specify_randomized_constraints(self, callback):
        self.deferred_constraints.append(callback)

    def allocated_value(self, q, a, t, assignment):
        return ProverValue(q, a, t, assignment)

    def metrics(self):
        constraints = len(self.constraints)
        if self.phase_one_constraints is None:
            phase_one = constraints
        else:
            phase_one = self.phase_one_constraints
        return Metrics(
            multipliers=len(self.a_L),
            constraints=constraints,
            phase_one_constraints=phase_one,
            phase_two_constraints=constraints - phase_one,
        )

    def prove(self):
        """트랜스크립트 일정을 실행하고 증명을 만든다.

        Returns:
            R1CSProof

        Raises:
            R1CSError: 할당이 제약 시스템을 만족하지 않을 때.
                       어떤 제약이 실패했는지는 알려주지 않는다.
        """
        self.transcript.append_u64(b"m", len(self.v))

        n1 = len(self.a_L)
        absorb_multipliers(self.transcript, self.a_L, self.a_R, self.a_O, 0, n1)

        self._create_randomized_constraints()

        n = len(self.a_L)
        absorb_multipliers(self.transcript, self.a_L, self.a_R, self.a_O, n1, n)

        logger.debug(
            "proving: %d commitment(s), %d phase-one + %d phase-two multiplier(s), %d constraint(s)",
            len(self.v), n1, n - n1, len(self.constraints),
        )

        multiplications_hold = all(
            self.a_L[i] * self.a_R[i] == self.a_O[i] for i in range(n)
        )
        if not multiplications_hold or not is_satisfied(self.constraints, self._value_of):
            raise R1CSError("제약 시스템이 만족되지 않습니다")

        return R1CSProof(
            v=list(self.v),
            v_blinding=list(self.v_blinding),
            a_L=list(self.a_L),
            a_R=list(self.a_R),
            a_O=list(self.a_O),
            phase_one_multipliers=n1,
        )
