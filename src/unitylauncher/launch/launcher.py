"""Process launching: start an editor or the Hub and forget about it.

``ProcessLauncher`` is the narrow interface the query engine needs. The
default ``SubprocessLauncher`` detaches the child from the launcher's
console and process group, so closing the launcher never takes Unity
down with it.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from unitylauncher.exceptions import LaunchFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchResult:
    """Outcome of a single start request.

    Attributes:
        executable: Program that was started (or attempted).
        argv: Arguments passed after the program.
        error: Reason for failure, or None on success.
    """

    executable: Path
    argv: tuple[str, ...]
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ProcessLauncher(ABC):
    """Starts programs without waiting for them."""

    @abstractmethod
    def spawn(self, executable: Path, argv: Sequence[str]) -> None:
        """Start ``executable`` with ``argv``.

        Raises:
            LaunchFailure: If the program could not be started.
        """

    def start_detached(self, executable: Path, argv: Sequence[str]) -> LaunchResult:
        """Start a program once, reporting failure instead of raising."""
        args = tuple(str(a) for a in argv)
        try:
            self.spawn(executable, args)
        except LaunchFailure as exc:
            logger.debug("Launch of %s failed: %s", executable, exc)
            return LaunchResult(executable=executable, argv=args, error=str(exc))
        logger.debug("Started %s %s", executable, " ".join(args))
        return LaunchResult(executable=executable, argv=args)


class SubprocessLauncher(ProcessLauncher):
    """Launch through ``subprocess.Popen``, detached from this process."""

    def spawn(self, executable: Path, argv: Sequence[str]) -> None:
        kwargs: dict[str, object] = {
            "stdin": subprocess.DEVNULL,
            "stdout": subprocess.DEVNULL,
            "stderr": subprocess.DEVNULL,
            "close_fds": True,
            "cwd": str(Path(executable).parent),
        }
        if sys.platform == "win32":
            kwargs["creationflags"] = (
                subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
            )
        else:
            kwargs["start_new_session"] = True
        try:
            subprocess.Popen([str(executable), *argv], **kwargs)  # noqa: S603
        except (OSError, ValueError) as exc:
            raise LaunchFailure(str(exc)) from exc
