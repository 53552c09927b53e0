"""
Per-chat command memory for /last.

Each chat has one slot holding its most recent non-replay command.
In-memory only: slots live for the process lifetime.
"""

import asyncio
from typing import Dict, Optional

from .commands import Command


class SessionStore:
    """
    Mapping chat_id -> last command, guarded by an asyncio lock.

    Replay commands are refused, which keeps replay exactly one level deep.
    """

    def __init__(self):
        self._last_commands: Dict[int, Command] = {}
        self._lock = asyncio.Lock()

    async def remember(self, chat_id: int, command: Command) -> None:
        """Store command as the chat's last command."""
        if command.is_replay:
            raise ValueError(f"Replay command {command.verb!r} cannot be stored")

        async with self._lock:
            self._last_commands[chat_id] = command

    async def recall(self, chat_id: int) -> Optional[Command]:
        """Get the chat's last command without clearing it."""
        async with self._lock:
            return self._last_commands.get(chat_id)
