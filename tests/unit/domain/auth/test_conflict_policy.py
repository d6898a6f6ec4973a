"""Tests for ConflictConstraint and ConflictPolicy."""

import pytest

from quill.domain.auth.model.conflict import ConflictConstraint, ConflictPolicy


class TestConflictConstraint:
    def test_equality_is_symmetric(self) -> None:
        assert ConflictConstraint("MODERATOR", "ADMIN") == ConflictConstraint("ADMIN", "MODERATOR")
        assert hash(ConflictConstraint("MODERATOR", "ADMIN")) == hash(
            ConflictConstraint("ADMIN", "MODERATOR")
        )

    def test_identical_roles_rejected(self) -> None:
        with pytest.raises(ValueError):
            ConflictConstraint("ADMIN", "ADMIN")

    def test_empty_role_rejected(self) -> None:
        with pytest.raises(ValueError):
            ConflictConstraint("", "ADMIN")

    def test_violated_only_when_both_present(self) -> None:
        constraint = ConflictConstraint("MODERATOR", "ADMIN")

        assert constraint.violated_by({"MODERATOR", "ADMIN", "USER"})
        assert not constraint.violated_by({"MODERATOR", "USER"})
        assert not constraint.violated_by(set())

    def test_str(self) -> None:
        assert str(ConflictConstraint("USER", "MEMBER")) == "USER/MEMBER"


class TestConflictPolicy:
    def test_from_pairs_drops_symmetric_duplicates(self) -> None:
        policy = ConflictPolicy.from_pairs(
            static=[("MODERATOR", "ADMIN"), ("ADMIN", "MODERATOR")],
        )

        assert policy.static == (ConflictConstraint("MODERATOR", "ADMIN"),)
        assert policy.dynamic == ()

    def test_default_policy_is_empty(self) -> None:
        policy = ConflictPolicy()

        assert policy.static == ()
        assert policy.dynamic == ()
