import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from cloak.r1cs.pedersen import PedersenGens


@pytest.fixture(scope="session")
def pc_gens():
    """테스트 전체에서 공유하는 Pedersen 생성자 (hash-to-curve는 한 번만)."""
    return PedersenGens()
