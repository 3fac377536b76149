"""Tests for the host navigator and interactions."""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from niffy.capture.interactions import Interactions, run_interaction
from niffy.capture.navigator import HostNavigator
from niffy.models.result import Role

from tests.conftest import BASE_HOST, TEST_HOST


class TestInteractions:
    """Tests for the base/test interaction pair."""

    def test_single_function_runs_on_both(self):
        fn = Mock()
        interactions = Interactions.of(fn)
        assert interactions.base is fn
        assert interactions.test is fn

    def test_distinct_test_function(self):
        fn, fn2 = Mock(), Mock()
        interactions = Interactions.of(fn, fn2)
        assert interactions.for_role(Role.BASE) is fn
        assert interactions.for_role(Role.TEST) is fn2

    def test_no_functions(self):
        interactions = Interactions.of()
        assert interactions.base is None
        assert interactions.test is None

    @pytest.mark.asyncio
    async def test_run_interaction_sync(self):
        fn = Mock(return_value=None)
        await run_interaction(fn, "page", "base")
        fn.assert_called_once_with("page", "base")

    @pytest.mark.asyncio
    async def test_run_interaction_async(self):
        fn = AsyncMock()
        await run_interaction(fn, "page", "test")
        fn.assert_awaited_once_with("page", "test")


class TestHostNavigator:
    """Tests for HostNavigator.goto_host()."""

    @pytest.mark.asyncio
    async def test_navigates_to_host_plus_path(self, niffy_config, session, mock_page):
        navigator = HostNavigator(niffy_config)
        await navigator.goto_host(session, TEST_HOST, "/pricing?plan=pro")
        mock_page.goto.assert_awaited_once_with("http://localhost:3000/pricing?plan=pro")

    @pytest.mark.asyncio
    async def test_interaction_receives_page_and_role(self, niffy_config, session, mock_page):
        navigator = HostNavigator(niffy_config)
        fn = AsyncMock()
        await navigator.goto_host(session, BASE_HOST, "/", fn)
        await navigator.goto_host(session, TEST_HOST, "/", fn)
        assert [c.args for c in fn.await_args_list] == [(mock_page, "base"), (mock_page, "test")]

    @pytest.mark.asyncio
    async def test_interaction_wrapped_in_settle_waits(self, niffy_config, session):
        config = niffy_config.model_copy(
            update={"timing": niffy_config.timing.model_copy(update={"settle_ms": 1000})}
        )
        navigator = HostNavigator(config)
        order = []
        fn = Mock(side_effect=lambda page, role: order.append("interact"))

        async def _stabilize(ms):
            order.append(ms)

        with patch("niffy.capture.navigator.stabilize", side_effect=_stabilize):
            await navigator.goto_host(session, BASE_HOST, "/", fn)
        assert order == [1000, "interact", 1000]

    @pytest.mark.asyncio
    async def test_no_waits_without_interaction(self, niffy_config, session):
        navigator = HostNavigator(niffy_config)
        with patch("niffy.capture.navigator.stabilize", new_callable=AsyncMock) as mock_wait:
            await navigator.goto_host(session, BASE_HOST, "/")
        mock_wait.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_navigation_error_propagates(self, niffy_config, session, mock_page):
        mock_page.goto.side_effect = TimeoutError("Timeout 30000ms exceeded")
        navigator = HostNavigator(niffy_config)
        fn = AsyncMock()
        with pytest.raises(TimeoutError):
            await navigator.goto_host(session, BASE_HOST, "/", fn)
        fn.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_interaction_error_propagates(self, niffy_config, session):
        navigator = HostNavigator(niffy_config)
        fn = AsyncMock(side_effect=RuntimeError("selector not found"))
        with pytest.raises(RuntimeError, match="selector not found"):
            await navigator.goto_host(session, BASE_HOST, "/", fn)
