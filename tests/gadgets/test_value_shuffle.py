"""
값 셔플 가젯 테스트: (q, a, t) 삼중쌍의 다중집합 동등성.
"""
from cloak.errors import R1CSError
from cloak.gadgets import value_shuffle
from cloak.gadgets.value import Value, commit_committed, commit_values
from cloak.r1cs.field import FR
from cloak.r1cs.linear_combination import Variable
from cloak.r1cs.prover import Prover
from cloak.r1cs.transcript import Transcript
from cloak.r1cs.verifier import Verifier


LABEL = b"ValueShuffleTest"


# Helper functions to make the tests easier to read
def yuan(q):
    return Value(q, 888, 999)


def peso(q):
    return Value(q, 666, 777)


def value_shuffle_helper(pc_gens, inputs, outputs):
    prover = Prover(pc_gens, Transcript(LABEL))
    input_com, input_vars = commit_values(prover, inputs)
    output_com, output_vars = commit_values(prover, outputs)
    assert value_shuffle.fill_cs(prover, input_vars, output_vars).is_ok()
    try:
        proof = prover.prove()
    except R1CSError:
        return False

    verifier = Verifier(pc_gens, Transcript(LABEL))
    input_vars = commit_committed(verifier, input_com)
    output_vars = commit_committed(verifier, output_com)
    assert value_shuffle.fill_cs(verifier, input_vars, output_vars).is_ok()
    return verifier.verify(proof)


class TestValueShuffle:
    """값 셔플 증명/검증 테스트."""

    def test_k1(self, pc_gens):
        """값 하나: 세 배선이 각각 같아야 한다."""
        assert value_shuffle_helper(pc_gens, [peso(1)], [peso(1)])
        assert not value_shuffle_helper(pc_gens, [peso(1)], [peso(2)])
        assert not value_shuffle_helper(pc_gens, [peso(1)], [yuan(1)])

    def test_k2(self, pc_gens):
        """값 두 개의 재배열."""
        assert value_shuffle_helper(pc_gens, [peso(1), yuan(4)], [yuan(4), peso(1)])
        assert value_shuffle_helper(pc_gens, [peso(1), yuan(4)], [peso(1), yuan(4)])
        assert not value_shuffle_helper(pc_gens, [peso(1), yuan(4)], [yuan(4), peso(2)])

    def test_k3(self, pc_gens):
        """값 세 개의 재배열."""
        assert value_shuffle_helper(
            pc_gens, [yuan(1), yuan(4), peso(8)], [peso(8), yuan(1), yuan(4)]
        )
        assert not value_shuffle_helper(
            pc_gens, [yuan(1), yuan(4), peso(8)], [peso(8), yuan(1), peso(4)]
        )

    def test_tags_bound_separately(self, pc_gens):
        """같은 수량이라도 태그 하나만 달라지면 실패한다."""
        assert not value_shuffle_helper(
            pc_gens, [Value(5, 1, 2), Value(6, 3, 4)], [Value(6, 3, 4), Value(5, 1, 3)]
        )
        assert not value_shuffle_helper(
            pc_gens, [Value(5, 1, 2), Value(6, 3, 4)], [Value(6, 3, 4), Value(5, 2, 2)]
        )

    def test_swapped_tags_rejected(self, pc_gens):
        """a와 t를 바꾼 값은 다른 값이다."""
        assert not value_shuffle_helper(
            pc_gens, [Value(5, 1, 2), Value(6, 3, 4)], [Value(6, 3, 4), Value(5, 2, 1)]
        )

    def test_empty(self, pc_gens):
        """빈 리스트끼리는 자명하게 성공."""
        assert value_shuffle_helper(pc_gens, [], [])


class TestValueShuffleStructure:
    """값 셔플 구조와 제약 개수 테스트."""

    def test_length_mismatch_is_a_gadget_error(self, pc_gens):
        """길이가 다르면 구조적 오류."""
        prover = Prover(pc_gens, Transcript(LABEL))
        _, x = commit_values(prover, [peso(1), yuan(4)])
        _, y = commit_values(prover, [peso(1)])
        result = value_shuffle.fill_cs(prover, x, y)
        assert result.is_err()
        assert result.error.description == "x and y vector lengths do not match"

    def test_non_value_entry_is_a_gadget_error(self, pc_gens):
        """AllocatedValue가 아닌 엔트리는 구조적 오류."""
        prover = Prover(pc_gens, Transcript(LABEL))
        _, x = commit_values(prover, [peso(1)])
        result = value_shuffle.fill_cs(prover, x, [Variable.committed(0)])
        assert result.is_err()

    def test_mixed_prover_and_verifier_entries_is_a_gadget_error(self, pc_gens):
        """Prover 값과 Verifier 값을 섞으면 구조적 오류."""
        prover = Prover(pc_gens, Transcript(LABEL))
        committed, x = commit_values(prover, [peso(1)])
        verifier = Verifier(pc_gens, Transcript(LABEL))
        y = commit_committed(verifier, committed)
        result = value_shuffle.fill_cs(prover, x, y)
        assert result.is_err()
        assert "mixed" in result.error.description

    def test_prover_entries_on_verifier_is_a_gadget_error(self, pc_gens):
        """Verifier 쪽 셔플에 ProverValue를 넣으면 구조적 오류."""
        prover = Prover(pc_gens, Transcript(LABEL))
        _, x = commit_values(prover, [peso(1), yuan(4)])
        verifier = Verifier(pc_gens, Transcript(LABEL))
        result = value_shuffle.fill_cs(verifier, x, list(reversed(x)))
        assert result.is_err()
        assert verifier.deferred_constraints == []

    def test_check_entries_accepts_own_side(self, pc_gens):
        """같은 쪽 엔트리만 있으면 오류가 없다."""
        prover = Prover(pc_gens, Transcript(LABEL))
        committed, x = commit_values(prover, [peso(1)])
        verifier = Verifier(pc_gens, Transcript(LABEL))
        y = commit_committed(verifier, committed)
        assert value_shuffle.check_entries(prover, x) is None
        assert value_shuffle.check_entries(verifier, y) is None
        assert value_shuffle.check_entries(verifier, x) is not None
        assert value_shuffle.check_entries(prover, y) is not None

    def test_structural_error_adds_no_constraints(self, pc_gens):
        """구조적 오류는 제약을 추가하지 않는다."""
        prover = Prover(pc_gens, Transcript(LABEL))
        _, x = commit_values(prover, [peso(1), yuan(4)])
        before = prover.metrics()
        value_shuffle.fill_cs(prover, x, x[:1])
        assert prover.metrics() == before
        assert prover.deferred_constraints == []

    def test_k1_uses_three_direct_constraints(self, pc_gens):
        """k = 1은 챌린지 없이 선형 제약 세 개."""
        prover = Prover(pc_gens, Transcript(LABEL))
        _, x = commit_values(prover, [peso(1)])
        _, y = commit_values(prover, [peso(1)])
        assert value_shuffle.fill_cs(prover, x, y).is_ok()
        metrics = prover.metrics()
        assert metrics.multipliers == 0
        assert metrics.constraints == 3

    def test_k2_is_deferred(self, pc_gens):
        """k ≥ 2는 2단계로 보류된다."""
        prover = Prover(pc_gens, Transcript(LABEL))
        _, x = commit_values(prover, [peso(1), yuan(4)])
        _, y = commit_values(prover, [yuan(4), peso(1)])
        assert value_shuffle.fill_cs(prover, x, y).is_ok()
        assert prover.metrics().constraints == 0
        assert len(prover.deferred_constraints) == 1

        prover.prove()
        # k개의 결합 곱셈기 + 스칼라 셔플 2(k-1)개
        assert prover.metrics().multipliers == 2 + 2
        assert prover.metrics().phase_two_constraints == 2 * 2 + 4 * 1 + 1

    def test_combined_scalars_use_w_and_w_squared(self, pc_gens):
        """결합 스칼라는 q + w·a + w²·t 이다."""
        prover = Prover(pc_gens, Transcript(LABEL))
        _, x = commit_values(prover, [Value(5, 7, 11), Value(1, 2, 3)])
        _, y = commit_values(prover, [Value(1, 2, 3), Value(5, 7, 11)])
        value_shuffle.fill_cs(prover, x, y)
        transcript_copy = Transcript(LABEL)
        transcript_copy.state = bytearray(prover.transcript.state)

        prover.prove()

        # prove()와 같은 순서로 트랜스크립트를 재생해 w를 복원한다
        transcript_copy.append_u64(b"m", len(prover.v))
        transcript_copy.r1cs_2phase_domain_sep()
        w = transcript_copy.challenge_scalar(b"k-value shuffle challenge")
        assert prover.a_L[0] == FR(5) + w * FR(7) + w * w * FR(11)
        assert prover.a_R[0] == FR(1) + w * FR(2) + w * w * FR(3)
