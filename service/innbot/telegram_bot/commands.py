"""
Command parsing and action resolution.

Both steps are pure:

    parse_command("/INN 7707083893 abc")  -> Command("/inn", ("7707083893", "abc"))
    resolve_action(command)               -> InnQuery(("7707083893", "abc"))

Replay carries no payload, so a replayed action can never be another replay.
"""

from dataclasses import dataclass
from typing import Optional, Union

START = "/start"
HELP = "/help"
HELLO = "/hello"
INN = "/inn"
LAST = "/last"


@dataclass(frozen=True)
class Command:
    """A parsed user request. verb is lowercased and never empty."""
    verb: str
    args: tuple[str, ...] = ()

    @property
    def is_replay(self) -> bool:
        return self.verb == LAST


def parse_command(text: str) -> Optional[Command]:
    """
    Split raw message text into a Command.

    Text is trimmed and split on single spaces, so "a  b" keeps an empty
    token between a and b. A "@botname" suffix on the verb (group chat
    syntax, e.g. "/inn@my_bot") is dropped. Empty text gives None.
    """
    text = text.strip()
    if not text:
        return None

    tokens = text.split(" ")
    verb = tokens[0].lower()
    if verb.startswith("/") and "@" in verb:
        verb = verb.split("@", 1)[0]

    return Command(verb=verb, args=tuple(tokens[1:]))


# Actions

@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class Hello:
    pass


@dataclass(frozen=True)
class InnQuery:
    identifiers: tuple[str, ...]


@dataclass(frozen=True)
class InnMissing:
    pass


@dataclass(frozen=True)
class Unknown:
    verb: str


@dataclass(frozen=True)
class Replay:
    pass


ExecutableAction = Union[Start, Help, Hello, InnQuery, InnMissing, Unknown]
Action = Union[ExecutableAction, Replay]


def resolve_action(command: Command) -> Action:
    """Map a Command to the action it requests."""
    verb = command.verb

    if verb == START:
        return Start()
    if verb == HELP:
        return Help()
    if verb == HELLO:
        return Hello()
    if verb == INN:
        if command.args:
            return InnQuery(command.args)
        return InnMissing()
    if verb == LAST:
        return Replay()

    return Unknown(verb)
