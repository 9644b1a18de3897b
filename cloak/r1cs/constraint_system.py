"""
R1CS 제약 시스템 인터페이스 (Constraint System Contract)
=========================================================

가젯이 사용하는 제약 시스템의 공통 계약. Prover와 Verifier가 같은
인터페이스를 구현하므로, 가젯 코드는 한 번만 작성하고 양쪽에서 그대로 실행된다.

**두 단계 (two-phase) 구성**:
  ┌─────────────────────────────────────────────────────┐
  │  1단계: 커밋 + 곱셈기 + 선형 제약                    │
  │  commit(), multiply(), allocate(), constrain()      │
  │  specify_randomized_constraints(callback) → 보류     │
  ├─────────────────────────────────────────────────────┤
  │  1단계 할당이 트랜스크립트에 고정된 뒤               │
  │  보류된 callback들이 RandomizedConstraintSystem으로  │
  │  실행된다: challenge_scalar() 사용 가능             │
  └─────────────────────────────────────────────────────┘

  챌린지는 그 시점까지 커밋된 모든 것에 묶이므로, Prover는 챌린지를 보고
  값을 바꿀 수 없다. Prover와 Verifier는 정확히 같은 순서로 호출해야 한다.
"""

import logging

from cloak.errors import R1CSError
from cloak.r1cs.field import FR

logger = logging.getLogger(__name__)


class Metrics:
    """제약 시스템 크기 정보.

    속성:
        multipliers: 곱셈기 수
        constraints: 선형 제약 수 (1단계 + 2단계)
        phase_one_constraints: 1단계 선형 제약 수
        phase_two_constraints: 2단계 (무작위) 선형 제약 수
    """

    def __init__(self, multipliers, constraints, phase_one_constraints, phase_two_constraints):
        self.multipliers = multipliers
        self.constraints = constraints
        self.phase_one_constraints = phase_one_constraints
        self.phase_two_constraints = phase_two_constraints

    def __eq__(self, other):
        if not isinstance(other, Metrics):
            return NotImplemented
        return (
            self.multipliers == other.multipliers
            and self.constraints == other.constraints
            and self.phase_one_constraints == other.phase_one_constraints
            and self.phase_two_constraints == other.phase_two_constraints
        )

    def __repr__(self):
        return (
            f"Metrics(multipliers={self.multipliers}, constraints={self.constraints}, "
            f"phase_one_constraints={self.phase_one_constraints}, "
            f"phase_two_constraints={self.phase_two_constraints})"
        )


class ConstraintSystem:
    """가젯이 보는 제약 시스템 (1단계).

    Prover, Verifier, 그리고 Randomizing 래퍼가 구현한다.
    """

    transcript = None

    # 이 쪽 가젯 엔트리의 타입 (ProverValue 또는 VerifierValue)
    value_class = None

    def multiply(self, left, right):
        """곱셈기 하나를 할당하고 입력을 선형 결합에 묶는다.

        새 곱셈기 (l, r, o)를 만들고 두 선형 제약
        left - l = 0, right - r = 0 을 추가한다.
        출력 o = l · r 은 곱셈기 자체가 강제한다.

        Args:
            left, right: LinearCombination (또는 Variable/상수)

        Returns:
            tuple: (l, r, o) Variable 세 개
        """
        raise NotImplementedError

    def allocate(self, assignment=None):
        """제약 없이 곱셈기 입력 하나를 할당한다.

        두 번 연속 호출하면 같은 곱셈기의 왼쪽/오른쪽 입력이 채워진다.

        Args:
            assignment: FR 값 (Prover는 필수, Verifier는 무시)

        Returns:
            Variable
        """
        raise NotImplementedError

    def constrain(self, lc):
        """선형 제약 lc = 0 을 추가한다."""
        raise NotImplementedError

    def specify_randomized_constraints(self, callback):
        """챌린지가 필요한 제약을 2단계로 보류한다.

        callback은 RandomizedConstraintSystem을 받아 Result를 반환한다.
        """
        raise NotImplementedError

    def allocated_value(self, q, a, t, assignment):
        """세 배선으로 이 쪽(Prover/Verifier)에 맞는 AllocatedValue를 만든다."""
        raise NotImplementedError

    def metrics(self):
        """현재 제약 시스템의 Metrics를 반환한다."""
        raise NotImplementedError

    def _create_randomized_constraints(self):
        """1단계를 고정하고 보류된 callback들을 2단계로 실행한다.

        Prover.prove()와 Verifier.verify()가 같은 시점에 호출한다.
        보류된 callback이 없으면 1단계 구분자만 추가한다.

        Raises:
            R1CSError: callback이 Result.err를 반환했을 때
        """
        # 1단계에서 반쯤 채워진 곱셈기는 이미 고정되었다
        self.pending_multiplier = None
        self.phase_one_constraints = len(self.constraints)

        if not self.deferred_constraints:
            self.transcript.r1cs_1phase_domain_sep()
            return

        self.transcript.r1cs_2phase_domain_sep()
        callbacks = self.deferred_constraints
        self.deferred_constraints = []
        randomized = Randomizing(self)
        logger.debug("running %d deferred randomized constraint callback(s)", len(callbacks))
        for callback in callbacks:
            result = callback(randomized)
            if result.is_err():
                raise R1CSError(
                    f"무작위 제약 구성 실패: {result.error.description}"
                ) from result.error


class RandomizedConstraintSystem(ConstraintSystem):
    """2단계 제약 시스템: 챌린지 스칼라를 뽑을 수 있다."""

    def challenge_scalar(self, label):
        """트랜스크립트에서 챌린지를 생성한다.

        Args:
            label: 바이트열 레이블

        Returns:
            FR
        """
        return self.transcript.challenge_scalar(label)


class Randomizing(RandomizedConstraintSystem):
    """Prover/Verifier를 감싸 2단계 호출을 그대로 위임하는 래퍼.

    2단계 안에서 specify_randomized_constraints를 다시 부르면
    이미 1단계가 고정되었으므로 callback을 즉시 실행한다.
    """

    def __init__(self, inner):
        self.inner = inner
        self.transcript = inner.transcript

    @property
    def value_class(self):
        return self.inner.value_class

    def multiply(self, left, right):
        return self.inner.multiply(left, right)

    def allocate(self, assignment=None):
        return self.inner.allocate(assignment)

    def constrain(self, lc):
        self.inner.constrain(lc)

    def specify_randomized_constraints(self, callback):
        return callback(self)

    def allocated_value(self, q, a, t, assignment):
        return self.inner.allocated_value(q, a, t, assignment)

    def metrics(self):
        return self.inner.metrics()


def absorb_multipliers(transcript, a_L, a_R, a_O, start, end):
    """곱셈기 할당 a_L, a_R, a_O[start:end]를 트랜스크립트에 추가한다.

    Prover와 Verifier가 같은 함수를 써서 같은 바이트열을 만든다.
    """
    for i in range(start, end):
        transcript.append_scalar(b"a_L", a_L[i])
        transcript.append_scalar(b"a_R", a_R[i])
        transcript.append_scalar(b"a_O", a_O[i])


def is_satisfied(constraints, value_of):
    """모든 선형 제약이 0으로 평가되는지 확인한다."""
    zero = FR(0)
    return all(lc.evaluate(value_of) == zero for lc in constraints)
