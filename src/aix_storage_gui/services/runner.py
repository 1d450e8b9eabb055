"""
Command execution for the inventory layer.

Nothing above this module calls subprocess directly; tests hand the inventory a
callable that returns fixture text instead.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Protocol

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    def __call__(self, cmd: list[str]) -> str:
        """Run ``cmd`` and return its standard output, or "" on any failure."""
        ...


class SubprocessRunner:
    def __init__(self, timeout_s: float | None = None) -> None:
        self.timeout_s = timeout_s
        self.failures: list[str] = []

    def __call__(self, cmd: list[str]) -> str:
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout_s,
            )
        except FileNotFoundError:
            self._fail(cmd, "command not found")
            return ""
        except subprocess.TimeoutExpired as e:
            self._fail(cmd, f"timed out after {e.timeout}s")
            return ""
        except OSError as e:
            self._fail(cmd, str(e))
            return ""

        if proc.returncode != 0:
            err = (proc.stderr or "").strip().splitlines()
            self._fail(cmd, f"rc={proc.returncode}" + (f" {err[0]}" if err else ""))
            return ""
        return proc.stdout or ""

    def take_failures(self) -> list[str]:
        out, self.failures = self.failures, []
        return out

    def _fail(self, cmd: list[str], reason: str) -> None:
        msg = f"{' '.join(cmd)}: {reason}"
        logger.debug("command failed: %s", msg)
        self.failures.append(msg)
