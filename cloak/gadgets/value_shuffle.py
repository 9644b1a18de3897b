"""
값 셔플 가젯 (Value Shuffle)
=============================

두 AllocatedValue 리스트가 (q, a, t) 삼중쌍의 다중집합으로 같음을 강제한다.

**태그 바인딩**:
  스칼라 셔플은 스칼라 하나씩만 비교하므로, 먼저 각 값을 스칼라 하나로 묶는다:

      combine(v) = v.q + w·v.a + w²·v.t

  w는 모든 값이 커밋된 뒤 뽑는 챌린지이다. (q, a, t)가 다른 두 값이
  같은 combine 값을 가지려면 w가 특정 2차 방정식의 근이어야 하므로
  확률은 무시할 수 있다. w 하나의 거듭제곱으로 두 태그를 묶는다.

**크기별 처리**:
  | k   | 제약                                                    |
  |-----|---------------------------------------------------------|
  | 0   | 없음                                                    |
  | 1   | y.q - x.q = 0, y.a - x.a = 0, y.t - x.t = 0             |
  | ≥ 2 | 2단계: w → 곱셈기 k개 (combine(xᵢ), combine(yᵢ))        |
  |     |        → scalar_shuffle(왼쪽 배선들, 오른쪽 배선들)      |
"""

import logging

from cloak.errors import GadgetError, Result
from cloak.gadgets import scalar_shuffle
from cloak.gadgets.value import AllocatedValue, ProverValue, VerifierValue

logger = logging.getLogger(__name__)


VALUE_SHUFFLE_CHALLENGE_LABEL = b"k-value shuffle challenge"


def fill_cs(cs, x, y):
    """y가 x의 재배열임을 강제하는 제약을 추가한다.

    Args:
        cs: ConstraintSystem
        x, y: 같은 길이의 AllocatedValue 리스트

    Returns:
        Result: 구조적 오류가 있으면 err. 값이 실제로 재배열인지는
                여기서 판단하지 않는다 (증명/검증 단계의 몫).
    """
    if len(x) != len(y):
        return Result.err(GadgetError("x and y vector lengths do not match"))

    error = check_entries(cs, list(x) + list(y))
    if error is not None:
        return Result.err(error)

    k = len(x)
    if k == 0:
        return Result.ok()

    if k == 1:
        cs.constrain(y[0].q - x[0].q)
        cs.constrain(y[0].a - x[0].a)
        cs.constrain(y[0].t - x[0].t)
        return Result.ok()

    x = list(x)
    y = list(y)

    def shuffle_combined(cs):
        w = cs.challenge_scalar(VALUE_SHUFFLE_CHALLENGE_LABEL)
        w2 = w * w

        x_scalars = []
        y_scalars = []
        for x_i, y_i in zip(x, y):
            x_i_var, y_i_var, _ = cs.multiply(x_i.combine(w, w2), y_i.combine(w, w2))
            x_scalars.append(x_i_var)
            y_scalars.append(y_i_var)

        return scalar_shuffle.fill_cs(cs, x_scalars, y_scalars)

    logger.debug("deferring %d-value shuffle to the randomized phase", k)
    cs.specify_randomized_constraints(shuffle_combined)
    return Result.ok()


def check_entries(cs, entries):
    """엔트리가 모두 cs 쪽의 AllocatedValue인지 확인한다.

    Returns:
        GadgetError 또는 None
    """
    for entry in entries:
        if not isinstance(entry, AllocatedValue):
            return GadgetError(f"expected an allocated value, got {type(entry).__name__}")

    has_prover = any(isinstance(entry, ProverValue) for entry in entries)
    has_verifier = any(isinstance(entry, VerifierValue) for entry in entries)
    if has_prover and has_verifier:
        return GadgetError("prover and verifier values are mixed in one shuffle")

    expected = cs.value_class
    if expected is not None:
        for entry in entries:
            if not isinstance(entry, expected):
                return GadgetError(
                    f"{type(entry).__name__} does not belong to a {type(cs).__name__} shuffle"
                )
    return None
