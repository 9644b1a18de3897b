"""
R1CS Verifier
==============

Verifier는 값을 모른 채 배선 핸들만으로 Prover와 똑같은 순서로 가젯을
실행하여 같은 제약 시스템을 재구성한다. verify(proof)에서 증명의 할당으로
트랜스크립트를 재생하고 모든 관계를 확인한다.

**검증 과정**:
  1. m (커밋 수) 추가, 증명 모양 확인
  2. 증명의 1단계 곱셈기 할당을 트랜스크립트에 추가
  3. 보류된 callback 실행 → Prover와 같은 챌린지 복원
  4. 2단계 곱셈기 수 확인, 2단계 할당 추가
  5. 커밋 열기 Vᵢ = vᵢ·B + rᵢ·B̃ 확인
  6. aₗ·aᵣ = aₒ, 모든 선형 제약 = 0 확인

  Prover와 Verifier의 호출 순서가 다르면 3단계의 챌린지가 달라지고
  6단계에서 실패한다.

사용 예시:
    >>> verifier = Verifier(PedersenGens(), Transcript(b"PaddedShuffleTest"))
    >>> var = verifier.commit(V)
    >>> ...  # 같은 가젯 호출
    >>> verifier.verify(proof)  # True / False
"""

import logging

from cloak.errors import R1CSError
from cloak.gadgets.value import VerifierValue
from cloak.r1cs.constraint_system import (
    ConstraintSystem,
    Metrics,
    absorb_multipliers,
    is_satisfied,
)
from cloak.r1cs.field import FR
from cloak.r1cs.linear_combination import (
    COMMITTED,
    MULTIPLIER_LEFT,
    MULTIPLIER_OUTPUT,
    MULTIPLIER_RIGHT,
    ONE,
    LinearCombination,
    Variable,
)

logger = logging.getLogger(__name__)


class Verifier(ConstraintSystem):
    """할당을 모르는 쪽의 제약 시스템.

    속성:
        pc_gens: PedersenGens
        transcript: Transcript
        V: Prover에게서 받은 커밋먼트 리스트
        num_vars: 할당된 곱셈기 수
        constraints: 선형 제약 리스트
        deferred_constraints: 2단계로 보류된 callback
    """

    value_class = VerifierValue

    def __init__(self, pc_gens, transcript):
        transcript.r1cs_domain_sep()
        self.pc_gens = pc_gens
        self.transcript = transcript
        self.V = []
        self.num_vars = 0
        self.constraints = []
        self.deferred_constraints = []
        self.pending_multiplier = None
        self.phase_one_constraints = None

    def commit(self, commitment):
        """Prover의 커밋먼트를 받아 트랜스크립트에 추가한다.

        Returns:
            Variable.committed(i)
        """
        i = len(self.V)
        self.V.append(commitment)
        self.transcript.append_point(b"V", commitment)
        return Variable.committed(i)

    def multiply(self, left, right):
        i = self.num_vars
        self.num_vars += 1

        l_var = Variable.multiplier_left(i)
        r_var = Variable.multiplier_right(i)
        o_var = Variable.multiplier_output(i)

        self.constrain(LinearCombination.from_(left) - l_var)
        self.constrain(LinearCombination.from_(right) - r_var)

        return l_var, r_var, o_var

    def allocate(self, assignment=None):
        # Verifier는 할당을 보지 않는다
        if self.pending_multiplier is None:
            i = self.num_vars
            self.num_vars += 1
            self.pending_multiplier = i
            return Variable.multiplier_left(i)

        i = self.pending_multiplier
        self.pending_multiplier = None
        return Variable.multiplier_right(i)

    def constrain(self, lc):
        self.constraints.append(LinearCombination.from_(lc))

    def specify_randomized_constraints(self, callback):
        self.deferred_constraints.append(callback)

    def allocated_value(self, q, a, t, assignment):
        return VerifierValue(q, a, t)

    def metrics(self):
        constraints = len(self.constraints)
        if self.phase_one_constraints is None:
            phase_one = constraints
        else:
            phase_one = self.phase_one_constraints
        return Metrics(
            multipliers=self.num_vars,
            constraints=constraints,
            phase_one_constraints=phase_one,
            phase_two_constraints=constraints - phase_one,
        )

    def verify(self, proof):
        """증명을 검증한다.

        Args:
            proof: R1CSProof (Prover.prove()의 결과)

        Returns:
            bool: 검증 성공 여부
        """
        self.transcript.append_u64(b"m", len(self.V))

        n1 = self.num_vars
        if not proof.has_shape(len(self.V), n1):
            logger.debug("verification failed: proof shape does not match phase one")
            return False
        absorb_multipliers(self.transcript, proof.a_L, proof.a_R, proof.a_O, 0, n1)

        try:
            self._create_randomized_constraints()
        except R1CSError:
            logger.debug("verification failed: randomized constraints could not be built")
            return False

        n = self.num_vars
        if proof.multipliers != n:
            logger.debug("verification failed: proof shape does not match phase two")
            return False
        absorb_multipliers(self.transcript, proof.a_L, proof.a_R, proof.a_O, n1, n)

        for V, v, v_blinding in zip(self.V, proof.v, proof.v_blinding):
            if self.pc_gens.commit(v, v_blinding) != V:
                logger.debug("verification failed: commitment opening mismatch")
                return False

        if not all(proof.a_L[i] * proof.a_R[i] == proof.a_O[i] for i in range(n)):
            logger.debug("verification failed: multiplication gate not satisfied")
            return False

        def value_of(var):
            if var.kind == COMMITTED:
                return proof.v[var.index]
            if var.kind == MULTIPLIER_LEFT:
                return proof.a_L[var.index]
            if var.kind == MULTIPLIER_RIGHT:
                return proof.a_R[var.index]
            if var.kind == MULTIPLIER_OUTPUT:
                return proof.a_O[var.index]
            if var.kind == ONE:
                return FR(1)
            raise R1CSError(f"알 수 없는 변수: {var!r}")

        if not is_satisfied(self.constraints, value_of):
            logger.debug("verification failed: linear constraint not satisfied")
            return False

        return True
