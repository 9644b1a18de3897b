"""
스칼라 셔플 가젯 (Grand Product 순열 논증)
============================================

두 스칼라 리스트 x, y가 서로의 재배열(다중집합으로 같음)임을 증명한다.

**핵심 아이디어**:
  x와 y가 다중집합으로 같다
    ⇔  다항식 ∏ᵢ (xᵢ - Z) 와 ∏ᵢ (yᵢ - Z) 가 같다 (Z에 대한 k차 다항식)

  두 다항식이 다르면 많아야 k개의 점에서만 일치한다.
  모든 값이 커밋된 뒤 챌린지 z를 뽑아 한 점에서만 비교하면,
  틀린 셔플이 통과할 확률은 k / |FR| 이하이다 (Schwartz-Zippel).

**곱셈기 체인** (k ≥ 2):
  ┌──────────────────────────────────────────────────────┐
  │  o₀ = (x_{k-1} - z) · (x_{k-2} - z)                  │
  │  o₁ = o₀ · (x_{k-3} - z)                             │
  │  ...                                                  │
  │  P_X = o_{k-2} · (x₀ - z)                            │
  └──────────────────────────────────────────────────────┘
  y도 같은 방식으로 P_Y를 만든 뒤 선형 제약 P_X - P_Y = 0 하나를 추가한다.
  곱셈기 2(k-1)개, 선형 제약 4(k-1) + 1개.

사용:
    value_shuffle이 2단계(무작위 제약) 안에서 호출한다.
"""

from cloak.errors import GadgetError, Result
from cloak.r1cs.constraint_system import RandomizedConstraintSystem
from cloak.r1cs.linear_combination import LinearCombination


SHUFFLE_CHALLENGE_LABEL = b"shuffle challenge"


def fill_cs(cs, x, y):
    """y가 x의 재배열임을 강제하는 제약을 추가한다.

    Args:
        cs: RandomizedConstraintSystem (k ≥ 2일 때 챌린지가 필요)
        x, y: LinearCombination 또는 Variable 리스트

    Returns:
        Result: 길이가 다르거나 챌린지를 뽑을 수 없으면 err
    """
    if len(x) != len(y):
        return Result.err(GadgetError("x and y vector lengths do not match"))

    k = len(x)
    if k == 0:
        return Result.ok()

    x = [LinearCombination.from_(x_i) for x_i in x]
    y = [LinearCombination.from_(y_i) for y_i in y]

    if k == 1:
        cs.constrain(y[0] - x[0])
        return Result.ok()

    if not isinstance(cs, RandomizedConstraintSystem):
        return Result.err(GadgetError("scalar shuffle needs a randomized constraint system"))

    z = cs.challenge_scalar(SHUFFLE_CHALLENGE_LABEL)

    first_mulx_out = _grand_product(cs, x, z)
    first_muly_out = _grand_product(cs, y, z)

    cs.constrain(first_mulx_out - first_muly_out)
    return Result.ok()


def _grand_product(cs, lcs, z):
    # ∏ (lcᵢ - z), 마지막 두 원소부터 0번까지 접는다
    k = len(lcs)
    _, _, last_mul_out = cs.multiply(lcs[k - 1] - z, lcs[k - 2] - z)

    out = last_mul_out
    for i in range(k - 3, -1, -1):
        _, _, out = cs.multiply(out, lcs[i] - z)
    return out
