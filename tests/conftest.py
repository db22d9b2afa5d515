import os
import sys

import pytest

# 웹 데모 테스트가 db.json을 만들지 않도록 메모리 DB 사용
os.environ.setdefault("ROGUEKEY_DB", ":memory:")

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from roguekey.aggregate import forge_registry_entry
from roguekey.registry import Registry


# ── 테스트 상수 ──
HONEST_SECRETS = [2, 3, 5]
ATTACKER_SECRET = 100
MESSAGE = b"intldds"


@pytest.fixture(scope="session")
def honest_registry():
    """비밀 [2, 3, 5]로 만든 인덱스 0..2 레지스트리."""
    return Registry.build(HONEST_SECRETS)


@pytest.fixture(scope="session")
def public_registry(honest_registry):
    """바이너리를 거쳐 복원한 레지스트리 (비밀 없이 공개 값만 가짐)."""
    return Registry.from_bytes(honest_registry.to_bytes())


@pytest.fixture(scope="session")
def forgery(public_registry):
    """공격자 비밀 100으로 인덱스 3에 위조한 항목."""
    return forge_registry_entry(public_registry, ATTACKER_SECRET, MESSAGE)
