"""
패딩 셔플 가젯 (Shuffle with Padding)
======================================

길이가 다른 두 값 리스트 x (길이 m), y (길이 n)에 대해, 짧은 쪽을
영값 자리표시자로 채운 뒤 값 셔플을 적용한다. 한쪽에만 있는 영값은
"값 없음"으로 취급되어 상대편의 자동 패딩과 짝을 이룬다.

**자리표시자 만들기 (곱셈기 하나로 세 배선을 0으로)**:
  곱셈기 (l, r, o) = multiply(0, 0)
    - multiply가 선형 제약 l = 0, r = 0 두 개를 추가한다
    - o = l · r 은 곱셈기가 강제하므로 o = 0 은 저절로 성립한다
  세 배선을 (q, a, t) 순서로 자리표시자에 쓴다.
  자리표시자 하나당 곱셈기 1개, 선형 제약 2개.

  | 입력         | 패딩 후                | pad_count |
  |--------------|------------------------|-----------|
  | m = n        | 그대로                 | 0         |
  | m > n        | y에 m - n개 추가       | m - n     |
  | m < n        | x에 n - m개 추가       | n - m     |

사용 예시:
    >>> result = fill_cs(prover, input_vars, output_vars)
    >>> result.is_ok()
    True
"""

import logging

from cloak.errors import Result
from cloak.gadgets import value_shuffle
from cloak.gadgets.value import Value
from cloak.r1cs.field import FR
from cloak.r1cs.linear_combination import LinearCombination

logger = logging.getLogger(__name__)


def fill_cs(cs, x, y):
    """y가 x의 재배열임을 강제한다. 한쪽의 영값은 생략될 수 있다.

    Args:
        cs: ConstraintSystem (Prover 또는 Verifier)
        x, y: AllocatedValue 리스트 (호출자의 리스트는 바뀌지 않는다)

    Returns:
        Result: 엔트리 검사가 실패하면 cs를 건드리지 않고 err.
                그 밖에는 value_shuffle의 결과를 그대로 전달한다
    """
    # 잘못된 입력이면 자리표시자를 만들기 전에 멈춘다
    error = value_shuffle.check_entries(cs, list(x) + list(y))
    if error is not None:
        return Result.err(error)

    x, y = pad(cs, x, y)
    return value_shuffle.fill_cs(cs, x, y)


def pad(cs, x, y):
    """짧은 쪽 끝에 영값 자리표시자를 붙여 길이를 맞춘다.

    Returns:
        tuple: (x', y') 새 리스트, 길이 max(m, n)
    """
    m = len(x)
    n = len(y)

    # 한쪽에 채울 자리표시자 수
    pad_count = max(m, n) - min(m, n)
    placeholders = [zero_placeholder(cs) for _ in range(pad_count)]

    if m > n:
        logger.debug("padding y with %d zero placeholder(s)", pad_count)
        return list(x), list(y) + placeholders
    if m < n:
        logger.debug("padding x with %d zero placeholder(s)", pad_count)
        return list(x) + placeholders, list(y)
    return list(x), list(y)


def zero_placeholder(cs):
    """세 배선이 모두 0으로 강제된 자리표시자를 할당한다."""
    # 입력 두 개만 선형 제약으로 고정하면 출력은 곱셈 제약으로 0이 된다
    zero = LinearCombination.from_(FR(0))
    q, a, t = cs.multiply(zero, zero)
    return cs.allocated_value(q, a, t, Value.zero())
