import logging
from unittest.mock import AsyncMock

from campushub.services.post_commit import PostCommitActions

from conftest import run_async


class TestPostCommitActions:

    def test_every_action_runs_even_after_a_failure(self, caplog):
        first = AsyncMock(side_effect=RuntimeError("smtp down"))
        second = AsyncMock()
        actions = PostCommitActions(logging.getLogger("test.post_commit"))
        actions.add("email", first, "a@b.com")
        actions.add("notify", second, registration_id="R1")

        with caplog.at_level(logging.ERROR, logger="test.post_commit"):
            results = run_async(actions.run())

        assert results == {"email": False, "notify": True}
        first.assert_awaited_once_with("a@b.com")
        second.assert_awaited_once_with(registration_id="R1")
        assert "Post-commit action 'email' failed" in caplog.text

    def test_actions_run_once(self):
        action = AsyncMock()
        actions = PostCommitActions()
        actions.add("notify", action)

        run_async(actions.run())
        run_async(actions.run())

        assert action.await_count == 1
        assert len(actions) == 0
