"""
R1CS 기반 모듈: 유한체(Finite Field) 및 타원곡선 연산
======================================================

셔플 가젯과 R1CS 백엔드 전체에서 사용되는 기본 대수적 도구를 정의한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드 (scalar field). 모든 배선(wire) 값,
  선형 결합 계수, Fiat-Shamir 챌린지가 이 필드의 원소이다.
  - 위수(order) p ≈ 2^254, 소수체(prime field)
  - 수량(quantity, u64)은 이 필드에 그대로 들어간다 (2^64 ≪ p)

**타원곡선 연산**:
  Pedersen 커밋먼트 V = v·B + r·B̃ 를 위한 G1 그룹 연산.

**해시-투-커브(hash to curve)**:
  블라인딩 생성자 B̃는 이산로그를 아무도 모르는 점이어야 한다.
  레이블을 해싱하여 x좌표를 정하고 곡선 위의 점을 찾는다 (try-and-increment).

사용 예시:
    >>> from cloak.r1cs.field import FR, G1, ec_mul
    >>> a = FR(3)
    >>> b = FR(7)
    >>> c = a * b        # FR(21)
    >>> P = ec_mul(G1, 5)  # 5·G1
"""

import hashlib

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
        >>> FR(0) - FR(1)  # p - 1
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (스칼라 필드 크기)
CURVE_ORDER = bn128.curve_order

# 기저 필드 크기 (점의 좌표가 사는 필드)
FIELD_MODULUS = bn128.field_modulus


def to_fr(value):
    """정수 또는 FR 원소를 FR로 변환한다.

    Raises:
        TypeError: 정수도 FR도 아닌 값일 때 (bool 포함)
    """
    if isinstance(value, FR):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return FR(value)
    raise TypeError(f"FR 원소 또는 정수가 필요합니다: {type(value).__name__}")


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 상수 및 연산
# ─────────────────────────────────────────────────────────────────────

# G1 그룹 생성자 (generator)
G1 = bn128.G1


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point.

    Args:
        point: G1 위의 점
        scalar: 정수 또는 FR 원소

    Returns:
        scalar · point
    """
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2."""
    return bn128.add(p1, p2)


def hash_to_curve(label):
    """레이블에서 이산로그를 알 수 없는 G1 점을 유도한다.

    try-and-increment 방식:
      1. x = SHA-256(label ‖ counter) mod q
      2. y² = x³ + 3 이 제곱잉여이면 y = (x³ + 3)^((q+1)/4)
         (q ≡ 3 mod 4 이므로 이 지수로 제곱근을 구할 수 있다)
      3. 아니면 counter를 증가시켜 반복

    bn128 G1의 여인수(cofactor)는 1이므로 곡선 위의 모든 점이 G1에 속한다.

    Args:
        label: 바이트열 레이블

    Returns:
        G1 점 (FQ 튜플)
    """
    counter = 0
    while True:
        h = hashlib.sha256(label + counter.to_bytes(4, "big")).digest()
        x = FQ(int.from_bytes(h, "big") % FIELD_MODULUS)
        rhs = x ** 3 + bn128.b
        y = rhs ** ((FIELD_MODULUS + 1) // 4)
        if y * y == rhs:
            return (x, y)
        counter += 1
