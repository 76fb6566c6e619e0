"""
Unit tests for the Telegram account linking handlers.
"""

from unittest.mock import MagicMock

import pytest

from habit_tracker.telegram.handlers.linking import (
    CONNECT_USAGE_TEXT,
    CONNECTED_TEXT,
    USER_NOT_FOUND_TEXT,
    WELCOME_TEXT,
    cmd_connect,
    cmd_start,
    create_router,
)


def _command(args: str | None) -> MagicMock:
    command = MagicMock()
    command.args = args
    return command


class TestStart:

    @pytest.mark.asyncio
    async def test_start_replies_with_welcome(self, mock_message):
        await cmd_start(mock_message)

        mock_message.answer.assert_awaited_once_with(WELCOME_TEXT)
        assert "/connect <username>" in WELCOME_TEXT


class TestConnect:

    @pytest.mark.asyncio
    async def test_connect_links_chat_id(self, mock_message, memory_storage, make_user):
        user = await make_user("alice")

        await cmd_connect(mock_message, _command("alice"), memory_storage)

        assert user.telegram_id == "12345"
        mock_message.answer.assert_awaited_once_with(CONNECTED_TEXT)

    @pytest.mark.asyncio
    async def test_relink_replaces_handle(self, mock_message, memory_storage, make_user):
        user = await make_user("alice", telegram_id="111")
        mock_message.chat.id = 222

        await cmd_connect(mock_message, _command("alice"), memory_storage)

        assert user.telegram_id == "222"

    @pytest.mark.asyncio
    async def test_unknown_user_leaves_storage_untouched(self, mock_message, mock_storage):
        mock_storage.get_user_by_username.return_value = None

        await cmd_connect(mock_message, _command("ghost"), mock_storage)

        mock_storage.get_user_by_username.assert_awaited_once_with("ghost")
        mock_storage.update_user.assert_not_called()
        mock_message.answer.assert_awaited_once_with(USER_NOT_FOUND_TEXT)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("args", [None, "", "   "])
    async def test_missing_username_shows_usage(self, mock_message, mock_storage, args):
        await cmd_connect(mock_message, _command(args), mock_storage)

        mock_storage.get_user_by_username.assert_not_called()
        mock_message.answer.assert_awaited_once_with(CONNECT_USAGE_TEXT)


class TestRouter:

    def test_fresh_router_each_time(self):
        """A restarted bot needs routers that are not attached to an old dispatcher."""
        first = create_router()
        second = create_router()

        assert first is not second
        assert len(first.message.handlers) == 2


class TestChatOwnership:

    @pytest.mark.asyncio
    async def test_chat_moves_to_new_account(self, mock_message, memory_storage, make_user):
        """A chat already linked elsewhere is unlinked from the old account."""
        alice = await make_user("alice", telegram_id="12345")
        bob = await make_user("bob")

        await cmd_connect(mock_message, _command("bob"), memory_storage)

        assert bob.telegram_id == "12345"
        assert alice.telegram_id is None
        assert await memory_storage.get_user_by_telegram_id("12345") is bob
        mock_message.answer.assert_awaited_once_with(CONNECTED_TEXT)

    @pytest.mark.asyncio
    async def test_reconnecting_same_account_keeps_link(self, mock_message, memory_storage, make_user):
        alice = await make_user("alice", telegram_id="12345")

        await cmd_connect(mock_message, _command("alice"), memory_storage)

        assert alice.telegram_id == "12345"
        mock_message.answer.assert_awaited_once_with(CONNECTED_TEXT)
