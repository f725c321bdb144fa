"""
Synchronous execution of the external solver process.

The caller blocks until the solver exits. The timeout is only passed on to
the solver's own command line; a solver that ignores it is not killed.
"""

import logging
import subprocess
import time
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Callable, Optional

from .adapters.base import Invocation, SolverDescriptor, Tolerances
from .exceptions import SpawnError
from .utils.solution_format import SolveRequest

logger = logging.getLogger(__name__)

# Keeps Windows from opening a console window for the solver (0 elsewhere)
CREATE_NO_WINDOW = getattr(subprocess, "CREATE_NO_WINDOW", 0)


@dataclass
class ProcessOutcome:
    """What happened when the solver was run"""
    exit_code: Optional[int] = None
    elapsed: float = 0.0
    # Set when the process could not be created
    error: Optional[str] = None
    invocation: Optional[Invocation] = None

    @property
    def spawned(self) -> bool:
        return self.error is None


class ProcessRunner:
    def build_invocation(
        self,
        descriptor: SolverDescriptor,
        tolerances: Tolerances,
        diagnose: bool = False,
    ) -> Invocation:
        return descriptor.adapter.build_invocation(descriptor, tolerances, diagnose)

    def run(
        self,
        descriptor: SolverDescriptor,
        request: SolveRequest,
        tolerances: Tolerances,
        on_started: Optional[Callable[[], None]] = None,
    ) -> ProcessOutcome:
        invocation = self.build_invocation(descriptor, tolerances, request.diagnose)
        logger.debug("Running %s", invocation.command_line)
        start = time.perf_counter()
        try:
            exit_code = self._spawn(invocation, on_started)
        except SpawnError as e:
            logger.error("Could not start %s: %s", descriptor.display_name, e)
            return ProcessOutcome(
                elapsed=time.perf_counter() - start,
                error=str(e),
                invocation=invocation,
            )
        elapsed = time.perf_counter() - start
        if exit_code:
            logger.info("Process status: %s", exit_code)
        return ProcessOutcome(exit_code=exit_code, elapsed=elapsed, invocation=invocation)

    def probe(self, descriptor: SolverDescriptor) -> bool:
        """Run the solver with its help arguments; for Gurobi this checks the license."""
        invocation = descriptor.adapter.probe_invocation(descriptor)
        try:
            status = self._spawn(invocation)
        except SpawnError as e:
            logger.warning("Solver test failed for %s: %s", descriptor.display_name, e)
            return False
        logger.info("Solver test process status: %s", status)
        return status == 0

    def _spawn(self, invocation: Invocation, on_started: Optional[Callable[[], None]] = None) -> int:
        kwargs = {
            "cwd": str(invocation.cwd) if invocation.cwd else None,
            "stdin": subprocess.DEVNULL,
            "stdout": subprocess.DEVNULL,
            # Output is discarded; the solver's own files are authoritative
            "stderr": subprocess.DEVNULL,
            "creationflags": CREATE_NO_WINDOW,
        }
        with ExitStack() as stack:
            try:
                if invocation.shell:
                    kwargs["shell"] = True
                elif invocation.stdout_path is not None:
                    kwargs["stdout"] = stack.enter_context(open(invocation.stdout_path, "w"))
                    kwargs["stderr"] = subprocess.STDOUT
                proc = subprocess.Popen(invocation.args, **kwargs)
            except (OSError, subprocess.SubprocessError, ValueError) as e:
                raise SpawnError(str(e)) from e
            if on_started:
                on_started()
            return proc.wait()
