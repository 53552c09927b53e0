"""
Message dispatcher - turns one inbound text into outbound replies.

Flow per message:
1. parse_command() - trim/split, empty text is a no-op
2. resolve_action() - verb -> action
3. Non-replay commands are stored in the chat's slot BEFORE execution,
   whether or not the verb is recognized (/last repeats whatever was
   last attempted, not whatever last succeeded)
4. /last resolves the stored command and executes it
"""

from typing import Optional

from ..services.lookup import LookupEngine, format_outcomes
from .commands import (
    ExecutableAction,
    Hello,
    Help,
    InnMissing,
    InnQuery,
    Replay,
    Start,
    Unknown,
    parse_command,
    resolve_action,
)
from .context import SessionStore
from .logging_config import bot_logger as logger
from .messages import (
    GREETING_TEXT,
    HELP_TEXT,
    INN_MISSING_TEXT,
    NO_PREVIOUS_COMMAND_TEXT,
    UNKNOWN_COMMAND_TEXT,
)


class Dispatcher:
    """Maps chat commands to reply texts, with per-chat /last memory."""

    def __init__(self, engine: LookupEngine, sessions: SessionStore, developer_info: str):
        self.engine = engine
        self.sessions = sessions
        self.developer_info = developer_info

    async def handle_message(self, chat_id: int, text: str) -> list[str]:
        """
        Handle one inbound message.

        Args:
            chat_id: Telegram chat ID (scopes /last memory)
            text: Raw message text

        Returns:
            Reply texts to send; empty for blank input, otherwise exactly one
        """
        command = parse_command(text)
        if command is None:
            return []

        action = resolve_action(command)
        logger.info(f"chat_id={chat_id} command={command.verb} args={len(command.args)}")

        if not isinstance(action, Replay):
            await self.sessions.remember(chat_id, command)
            return await self.execute(action)

        replayed = await self._replay_action(chat_id)
        if replayed is None:
            return [NO_PREVIOUS_COMMAND_TEXT]

        return await self.execute(replayed)

    async def _replay_action(self, chat_id: int) -> Optional[ExecutableAction]:
        previous = await self.sessions.recall(chat_id)
        if previous is None:
            return None

        action = resolve_action(previous)
        if isinstance(action, Replay):
            # SessionStore.remember() refuses replay commands
            raise RuntimeError(f"Stored command for chat {chat_id} is a replay")

        logger.info(f"chat_id={chat_id} replaying {previous.verb}")
        return action

    async def execute(self, action: ExecutableAction) -> list[str]:
        """Run an action and return its reply texts (always one)."""
        if isinstance(action, Start):
            return [GREETING_TEXT]
        if isinstance(action, Help):
            return [HELP_TEXT]
        if isinstance(action, Hello):
            return [self.developer_info]
        if isinstance(action, InnMissing):
            return [INN_MISSING_TEXT]
        if isinstance(action, InnQuery):
            outcomes = await self.engine.resolve(list(action.identifiers))
            return [format_outcomes(outcomes)]
        if isinstance(action, Unknown):
            return [UNKNOWN_COMMAND_TEXT]

        raise TypeError(f"Unsupported action: {action!r}")
