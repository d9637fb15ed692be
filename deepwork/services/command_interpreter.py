"""Command interpreter for the single terminal input line.

Priority order (first match wins):

1. No identity yet: the whole line becomes the username.
2. Name-edit mode: the whole line replaces the username.
3. Line starts with ``/``: dispatch a command from the table below.
4. Anything else: the line becomes a new objective.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from deepwork.models.identity import Identity
from deepwork.models.task import Task
from deepwork.services.activity_log import ActivityLog
from deepwork.services.session_engine import SessionEngine
from deepwork.services.task_list import TaskList

logger = logging.getLogger(__name__)

COMMAND_PREFIX = "/"

# (usage, description) pairs shown by the help surface
COMMAND_HELP: list[tuple[str, str]] = [
    ("/help", "Show this help"),
    ("/user <name>, /name <name>", "Change username (no argument: prompt for it)"),
    ("/add <task>", "Add an objective"),
    ("/clear", "Clear the terminal log"),
    ("/start, /execute", "Start the timer"),
    ("/pause", "Pause the timer"),
    ("/stop, /abort", "Reset the current phase"),
    ("<text>", "Anything else is added as an objective"),
]


class InputKind(str, Enum):
    """Which branch handled an input line."""

    IGNORED = "ignored"  # Blank line
    IDENTITY = "identity"  # First name set
    RENAME = "rename"  # Name-edit mode consumed the line
    COMMAND = "command"  # Slash command
    TASK = "task"  # Free text became an objective


@dataclass
class CommandResult:
    """Outcome of interpreting one input line."""

    kind: InputKind
    command: str | None = None
    argument: str = ""
    known: bool = True
    task: Task | None = None


def parse_command(line: str) -> tuple[str, str]:
    """Split a prefixed line into a lowercase command token and its argument.

    Args:
        line: Input starting with the command prefix.

    Returns:
        (command, argument) where argument is the remaining tokens joined
        by single spaces.
    """
    tokens = line[len(COMMAND_PREFIX) :].split()
    if not tokens:
        return "", ""
    return tokens[0].lower(), " ".join(tokens[1:])


class CommandInterpreter:
    """Turns input lines into identity changes, commands or objectives."""

    def __init__(
        self,
        engine: SessionEngine,
        tasks: TaskList,
        log: ActivityLog,
        identity: Identity,
        on_help: Callable[[], None] | None = None,
    ):
        """Initialize the interpreter.

        Args:
            engine: Session engine for timer commands.
            tasks: Task list for new objectives.
            log: Activity log for notices.
            identity: Identity record, mutated in place.
            on_help: Called when the help surface should open.
        """
        self.engine = engine
        self.tasks = tasks
        self.log = log
        self.identity = identity
        self.on_help = on_help
        self._handlers: dict[str, Callable[[str], Task | None]] = {
            "help": self._cmd_help,
            "user": self._cmd_name,
            "name": self._cmd_name,
            "add": self._cmd_add,
            "clear": self._cmd_clear,
            "start": self._cmd_start,
            "execute": self._cmd_start,
            "pause": self._cmd_pause,
            "stop": self._cmd_stop,
            "abort": self._cmd_stop,
        }

    @property
    def commands(self) -> list[str]:
        """All recognised command names."""
        return list(self._handlers)

    def submit(self, line: str) -> CommandResult:
        """Interpret one line of input.

        Args:
            line: Raw input; surrounding whitespace is ignored.

        Returns:
            CommandResult describing which branch ran.
        """
        text = line.strip()
        if not text:
            return CommandResult(kind=InputKind.IGNORED)

        if not self.identity.is_known:
            self.identity.username = text
            self.log.system(f"Identity confirmed: {text}")
            return CommandResult(kind=InputKind.IDENTITY)

        if self.identity.editing_name:
            self.identity.username = text
            self.identity.editing_name = False
            self.log.system(f"Identity updated: {text}")
            return CommandResult(kind=InputKind.RENAME)

        if text.startswith(COMMAND_PREFIX):
            return self._dispatch(text)

        task = self.tasks.add(text)
        self.log.focus(f"Objective Added: {text}")
        return CommandResult(kind=InputKind.TASK, task=task)

    def _dispatch(self, text: str) -> CommandResult:
        command, argument = parse_command(text)
        handler = self._handlers.get(command)
        if handler is None:
            self.log.system(f"Unknown command: {command}. Type /help for instructions.")
            return CommandResult(
                kind=InputKind.COMMAND, command=command, argument=argument, known=False
            )

        logger.debug(f"Command /{command} {argument}".rstrip())
        task = handler(argument)
        return CommandResult(kind=InputKind.COMMAND, command=command, argument=argument, task=task)

    # ── Handlers ────────────────────────────────────────────────────────────

    def _cmd_help(self, argument: str) -> None:
        if self.on_help is not None:
            self.on_help()
        self.log.system("Help module loaded.")

    def _cmd_name(self, argument: str) -> None:
        if argument:
            self.identity.username = argument
            self.log.system(f"Identity updated: {argument}")
        else:
            self.identity.editing_name = True
            self.log.system("Enter new username:")

    def _cmd_add(self, argument: str) -> Task | None:
        if not argument:
            self.log.system("Usage: /add <task description>")
            return None
        task = self.tasks.add(argument)
        self.log.system(f'Task added: "{argument}"')
        return task

    def _cmd_clear(self, argument: str) -> None:
        # Clearing writes no entry of its own
        self.log.clear()

    def _cmd_start(self, argument: str) -> None:
        if self.engine.running:
            self.log.system("Timer is already running.")
        else:
            self.engine.toggle_running()

    def _cmd_pause(self, argument: str) -> None:
        if self.engine.running:
            self.engine.toggle_running()
        else:
            self.log.system("Timer is already paused.")

    def _cmd_stop(self, argument: str) -> None:
        self.engine.reset()
