"""Tests for run() wrapping: the gate consults the access engine before the handler body."""

from unittest.mock import AsyncMock

import pytest

from quill.domain.auth.model.decision import Decision, DecisionKind
from quill.domain.auth.model.identity import Anonymous, Identity
from quill.domain.auth.model.principal import Principal
from quill.domain.auth.model.value import UserId
from quill.domain.shared.authorization.gate import authenticated, public, requires
from quill.domain.shared.command import Command, CommandHandler, Result
from quill.domain.shared.error import AuthorizationError, ConfigurationError
from quill.domain.shared.query import Query, QueryHandler
from quill.domain.shared.query import Result as QueryResult


class Ping(Query):
    pass


class Pong(QueryResult):
    ok: bool = True


class PublicPingHandler(QueryHandler[Ping, Pong]):
    __auth__ = public()
    identity: Identity
    access: AsyncMock

    async def run(self, query: Ping) -> Pong:
        return Pong()


class AdminPingHandler(QueryHandler[Ping, Pong]):
    __auth__ = requires("ADMINISTER", "DELETE_COMMENT")
    identity: Identity
    access: AsyncMock

    async def run(self, query: Ping) -> Pong:
        return Pong()


class Touch(Command):
    pass


class TouchHandler(CommandHandler[Touch, Result]):
    __auth__ = authenticated()
    identity: Identity
    access: AsyncMock
    calls: int = 0

    async def run(self, cmd: Touch) -> Result:
        self.calls += 1
        return Result()


def _engine(decision: Decision) -> AsyncMock:
    engine = AsyncMock()
    engine.authorize.return_value = decision
    return engine


class TestGateEnforcement:
    @pytest.mark.asyncio
    async def test_public_gate_passes_allow_anonymous(self) -> None:
        engine = _engine(Decision.allow())
        handler = PublicPingHandler(identity=Anonymous(), access=engine)

        result = await handler.run(Ping())

        assert result.ok
        engine.authorize.assert_awaited_once_with(Anonymous(), frozenset(), allow_anonymous=True)

    @pytest.mark.asyncio
    async def test_requires_gate_passes_permissions(self) -> None:
        engine = _engine(Decision.allow())
        principal = Principal(user_id=UserId.generate())
        handler = AdminPingHandler(identity=principal, access=engine)

        await handler.run(Ping())

        engine.authorize.assert_awaited_once_with(
            principal,
            frozenset({"ADMINISTER", "DELETE_COMMENT"}),
            allow_anonymous=False,
        )

    @pytest.mark.asyncio
    async def test_denial_raises_with_decision_kind_and_skips_body(self) -> None:
        engine = _engine(Decision.insufficient(frozenset({"ADMINISTER"})))
        handler = TouchHandler(identity=Principal(user_id=UserId.generate()), access=engine)

        with pytest.raises(AuthorizationError) as exc_info:
            await handler.run(Touch())

        assert exc_info.value.code == DecisionKind.DENY_INSUFFICIENT_PERMISSION.value
        assert handler.calls == 0

    @pytest.mark.asyncio
    async def test_allow_runs_body(self) -> None:
        engine = _engine(Decision.allow())
        handler = TouchHandler(identity=Principal(user_id=UserId.generate()), access=engine)

        await handler.run(Touch())

        assert handler.calls == 1

    @pytest.mark.asyncio
    async def test_handler_without_gate_fails_closed(self) -> None:
        class NoGateHandler(QueryHandler[Ping, Pong]):
            identity: Identity
            access: AsyncMock

            async def run(self, query: Ping) -> Pong:
                return Pong()

        handler = NoGateHandler(identity=Anonymous(), access=_engine(Decision.allow()))

        with pytest.raises(ConfigurationError):
            await handler.run(Ping())
