"""
오류 계층과 가젯 결과 타입
==========================

두 개의 분리된 실패 계층:

1. **구조적 오류 (structural)**: 가젯 구성 시점에 바로 드러난다.
   올바른 호출자라면 어기지 않을 전제 조건 (길이 불일치, 잘못된 엔트리 형태).
   가젯 함수는 예외를 던지지 않고 Result 값을 반환한다.

2. **건전성 실패 (soundness)**: 순열이 아닌 셔플은 구성 시점에 아무 오류도
   내지 않는다. Prover가 만족하는 할당을 찾지 못하거나 (R1CSError),
   Verifier가 증명을 거부한다 (verify() → False).
   어떤 제약이 실패했는지는 드러내지 않는다.
"""


class R1CSError(Exception):
    """R1CS 증명 생성/검증 단계의 오류."""


class GadgetError(Exception):
    """가젯 구성 단계의 구조적 오류.

    예외 클래스이지만 가젯은 이를 Result.err()에 담아 반환한다.
    Result.unwrap()을 호출하면 그때 던져진다.
    """

    def __init__(self, description):
        super().__init__(description)
        self.description = description


class Result:
    """가젯 구성 결과: 성공(ok) 또는 GadgetError 하나.

    예시:
        >>> result = padded_shuffle.fill_cs(prover, x, y)
        >>> if result.is_err():
        ...     print(result.error.description)
    """

    __slots__ = ("error",)

    def __init__(self, error=None):
        self.error = error

    @classmethod
    def ok(cls):
        return cls()

    @classmethod
    def err(cls, error):
        if not isinstance(error, GadgetError):
            error = GadgetError(str(error))
        return cls(error)

    def is_ok(self):
        return self.error is None

    def is_err(self):
        return self.error is not None

    def unwrap(self):
        """성공이면 None, 실패면 담긴 GadgetError를 던진다."""
        if self.error is not None:
            raise self.error

    def __eq__(self, other):
        if not isinstance(other, Result):
            return NotImplemented
        if self.error is None or other.error is None:
            return self.error is other.error
        return self.error.description == other.error.description

    def __repr__(self):
        if self.error is None:
            return "Result.ok()"
        return f"Result.err({self.error.description!r})"
