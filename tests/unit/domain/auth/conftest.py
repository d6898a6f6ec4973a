import pytest
from auth_fakes import InMemoryStore

from quill.domain.auth.model.conflict import ConflictPolicy


@pytest.fixture
def seeded_store() -> InMemoryStore:
    return InMemoryStore.seeded()


@pytest.fixture
def default_policy() -> ConflictPolicy:
    return ConflictPolicy.from_pairs(
        static=[("MODERATOR", "ADMIN")],
        dynamic=[("USER", "MEMBER")],
    )
