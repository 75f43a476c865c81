# process.py
from __future__ import annotations

import subprocess
import threading
from typing import IO, Callable

from .errors import OutputError
from .model import Job, JobOutcome, OutputLine
from .ui.console import get_console

Sink = Callable[[OutputLine], None]


def _pump(stream: IO[str], stream_name: str, job: Job, emit: Sink, failures: list) -> None:
    """
    Forward `stream` to `emit` one line at a time until EOF or a read error.

    A read error is only warned about. A failing `emit` is recorded in
    `failures` for the caller; either way the stream is closed on return.
    """
    with stream:
        while True:
            try:
                raw = stream.readline()
            except (OSError, ValueError) as e:
                # stop reading this stream; the process is still waited on
                get_console().print_warning(f"reading {stream_name} of [{job.index}] {job.command} -> {e}")
                return
            if not raw:
                return
            try:
                emit(OutputLine(job=job, text=raw.rstrip("\n"), stream=stream_name))
            except Exception as e:
                failures.append(e)
                return


def run_command(job: Job, sink: Sink) -> JobOutcome:
    """
    Run `job.command` through the shell and stream its output into `sink`.

    stdout and stderr are read by one thread each; sink calls for a Job never
    overlap, and each stream's lines arrive in the order they were written.
    Returns once both streams hit EOF and the process has exited. If `sink`
    raises, that stream stops being read, the process is still waited on, and
    the failure is raised as OutputError.
    """
    try:
        proc = subprocess.Popen(
            job.command,
            shell=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            bufsize=1,
        )
    except OSError as e:
        return JobOutcome(job=job, error=f"starting command ({job.command}) -> {e}")

    lock = threading.Lock()
    failures: list[Exception] = []

    def emit(line: OutputLine) -> None:
        with lock:
            sink(line)

    readers = [
        threading.Thread(target=_pump, args=(proc.stdout, "stdout", job, emit, failures), daemon=True),
        threading.Thread(target=_pump, args=(proc.stderr, "stderr", job, emit, failures), daemon=True),
    ]
    for reader in readers:
        reader.start()
    for reader in readers:
        reader.join()

    returncode = proc.wait()
    if failures:
        raise OutputError(f"writing output of [{job.index}] {job.command} -> {failures[0]!r}") from failures[0]
    return JobOutcome(job=job, returncode=returncode)
