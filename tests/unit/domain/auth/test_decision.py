"""Tests for Decision variants and their error conversion."""

import pytest

from quill.domain.auth.model.conflict import ConflictConstraint
from quill.domain.auth.model.decision import Decision, DecisionKind
from quill.domain.shared.error import AuthorizationError


class TestDecision:
    def test_allow_is_shared_and_allowed(self) -> None:
        assert Decision.allow() is Decision.allow()
        assert Decision.allow().allowed

    def test_allow_has_no_error(self) -> None:
        with pytest.raises(ValueError):
            Decision.allow().to_error()

    def test_conflict_reason_names_pairs(self) -> None:
        decision = Decision.conflict((ConflictConstraint("MODERATOR", "ADMIN"),))

        assert decision.kind is DecisionKind.DENY_CONFLICT
        assert "MODERATOR/ADMIN" in decision.reason

    def test_insufficient_reason_lists_missing_sorted(self) -> None:
        decision = Decision.insufficient(frozenset({"B", "A"}))

        assert decision.reason.endswith("A, B")

    @pytest.mark.parametrize(
        "decision",
        [
            Decision.unauthenticated(),
            Decision.conflict((ConflictConstraint("USER", "MEMBER"),)),
            Decision.insufficient(frozenset({"ADMINISTER"})),
        ],
    )
    def test_denials_convert_to_authorization_error(self, decision: Decision) -> None:
        error = decision.to_error()

        assert isinstance(error, AuthorizationError)
        assert error.code == decision.kind.value
        assert error.message == decision.reason
