"""Process bridge: spawning external programs.

Three shapes of launch, all blocking until the relevant child exits:

- inherited: the child shares the terminal's stdin/stdout/stderr and only
  its exit status comes back;
- captured: stdin is /dev/null, stdout and stderr are collected and
  returned with the status as a ``{":stdout", ":stderr", ":status"}`` map;
- pipeline: stage N's stdout feeds stage N+1's stdin. Intermediate exit
  statuses are ignored; only the final stage's output and status count.

Exit statuses are reported in 0..255; a child killed by a signal, or one
that could not be started, reports 255.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Optional

from lish.errors import CommandNotFound, SpawnError

logger = logging.getLogger(__name__)

STATUS_FAILED = 255


def exit_code(returncode: Optional[int]) -> int:
    if returncode is None or not 0 <= returncode <= 255:
        return STATUS_FAILED
    return returncode


def captured_result(stdout: str, stderr: str, status: int) -> dict:
    return {":stdout": stdout, ":stderr": stderr, ":status": status}


def _decode(data: Optional[bytes]) -> str:
    return (data or b"").decode("utf-8", errors="replace").strip()


def _spawn_error(command: str, err: OSError):
    if isinstance(err, FileNotFoundError):
        return CommandNotFound(command)
    return SpawnError(command, str(err))


def run_inherited(argv: list[str]) -> int:
    """Run ``argv`` attached to the terminal; return its exit status."""
    cwd = os.getcwd()
    logger.debug("spawn %r in %s (inherited stdio)", argv, cwd)
    try:
        completed = subprocess.run(argv, cwd=cwd)
    except OSError as err:
        raise _spawn_error(argv[0], err) from err
    status = exit_code(completed.returncode)
    logger.debug("%s exited with %d", argv[0], status)
    return status


def run_captured(argv: list[str]) -> dict:
    """Run ``argv`` with stdin nulled and output captured."""
    cwd = os.getcwd()
    logger.debug("spawn %r in %s (captured)", argv, cwd)
    try:
        completed = subprocess.run(
            argv, cwd=cwd, stdin=subprocess.DEVNULL, capture_output=True,
        )
    except OSError as err:
        logger.debug("spawning %s failed: %s", argv[0], err)
        return captured_result("", str(err), STATUS_FAILED)
    status = exit_code(completed.returncode)
    logger.debug("%s exited with %d", argv[0], status)
    return captured_result(_decode(completed.stdout), _decode(completed.stderr), status)


def _start_pipeline(stages: list[list[str]], capture: bool) -> list[subprocess.Popen]:
    cwd = os.getcwd()
    procs: list[subprocess.Popen] = []
    stdin = subprocess.DEVNULL if capture else None
    try:
        for i, argv in enumerate(stages):
            last = i == len(stages) - 1
            if last:
                stdout = subprocess.PIPE if capture else None
                stderr = subprocess.PIPE if capture else None
            else:
                stdout = subprocess.PIPE
                stderr = subprocess.DEVNULL if capture else None
            logger.debug("pipeline stage %d: %r in %s", i, argv, cwd)
            proc = subprocess.Popen(argv, cwd=cwd, stdin=stdin, stdout=stdout, stderr=stderr)
            if procs and procs[-1].stdout is not None:
                # the child holds its own copy; ours would keep the pipe open
                procs[-1].stdout.close()
            procs.append(proc)
            stdin = proc.stdout
    except OSError as err:
        for proc in procs:
            if proc.stdout is not None:
                proc.stdout.close()
            proc.kill()
            proc.wait()
        raise _spawn_error(argv[0], err) from err
    return procs


def run_pipeline(stages: list[list[str]], capture: bool):
    """Run a pipeline; return the final status, or a captured map when ``capture``."""
    try:
        procs = _start_pipeline(stages, capture)
    except (CommandNotFound, SpawnError) as err:
        if capture:
            return captured_result("", str(err), STATUS_FAILED)
        raise

    last = procs[-1]
    if capture:
        out, err_out = last.communicate()
    else:
        last.wait()
    for proc in procs[:-1]:
        proc.wait()
    status = exit_code(last.returncode)
    logger.debug("pipeline finished with %d", status)
    if capture:
        return captured_result(_decode(out), _decode(err_out), status)
    return status
