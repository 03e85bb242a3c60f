"""
Utility functions for running system commands and verifying binary availability.

Functions:
    - run_cmd: Executes a system command with an optional timeout and returns
      its exit code together with the captured output.
    - find_binary: Resolves a binary name or path to an executable, or None.
"""
import shutil
import subprocess
from typing import Tuple, List, Optional


def run_cmd(cmd: List[str], timeout: Optional[float] = None, merge_output: bool = False) -> Tuple[int, str, str]:
    """Run a command and return (code, stdout, stderr).

    With ``merge_output`` stderr is folded into stdout and the returned stderr
    is empty. stdin is closed so interactive prompts fail instead of blocking.
    Raises ``OSError`` when the binary cannot be started and
    ``subprocess.TimeoutExpired`` when ``timeout`` elapses.
    """
    p = subprocess.run(
        cmd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT if merge_output else subprocess.PIPE,
        text=True,
        errors="replace",
        timeout=timeout,
    )
    return p.returncode, p.stdout or "", p.stderr or ""


def find_binary(binary: str) -> Optional[str]:
    """Return the executable path for ``binary`` (name or path), or None."""
    return shutil.which(binary)
