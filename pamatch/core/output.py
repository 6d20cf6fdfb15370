"""
Scoped redirection of diagnostic output produced by external collaborators.
"""
import os
import sys
from contextlib import contextmanager, redirect_stdout, redirect_stderr
from typing import Iterator


@contextmanager
def suppress_output(stdout: bool = True, stderr: bool = True) -> Iterator[None]:
    """Send Python-level stdout/stderr to the null device for the duration of the block.

    Streams are restored on every exit path, including exceptions.
    """
    with open(os.devnull, 'w') as devnull:
        out_target = devnull if stdout else sys.stdout
        err_target = devnull if stderr else sys.stderr
        with redirect_stdout(out_target), redirect_stderr(err_target):
            yield
