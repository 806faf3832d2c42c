"""Process lifecycle tracking and guaranteed cleanup of transient resources."""

import os
import shutil
import signal
import tempfile

from govready.utils.exceptions import ProcessInterrupted

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ProcessLifecycle:
    """Process-wide record of the temporary directory held by the current run.

    Two states: Clean (temp_dir is None) and HoldingTemp. Only the step that
    allocates a temp directory and the exit handler mutate it.
    """

    def __init__(self, debug_logger=None):
        self.temp_dir = None
        self.logger = debug_logger

    @property
    def holding_temp(self):
        return self.temp_dir is not None

    def allocate_temp_dir(self, prefix='govready-'):
        """Allocate the run's temporary directory, reusing it if already held.

        Returns:
            str: Path to the temporary directory
        """
        if self.temp_dir is None:
            self.temp_dir = tempfile.mkdtemp(prefix=prefix)
            if self.logger:
                self.logger.log(f"Allocated temporary directory {self.temp_dir}")
        return self.temp_dir

    def release(self):
        """Remove the temporary directory if one is held. Safe to call repeatedly."""
        if self.temp_dir is None:
            return
        path = self.temp_dir
        self.temp_dir = None
        if os.path.isdir(path):
            shutil.rmtree(path, ignore_errors=True)
        if self.logger:
            self.logger.log(f"Removed temporary directory {path}")


class LifecycleGuard:
    """Cleanup scope covering the whole process lifetime.

    Used as a context manager around command dispatch. SIGINT and SIGTERM are
    turned into ProcessInterrupted so that they unwind through the same exit
    path as errors and normal returns, and the lifecycle is released once on
    the way out.
    """

    def __init__(self, lifecycle):
        self.lifecycle = lifecycle
        self._previous_handlers = {}

    def _handle_signal(self, signum, frame):
        raise ProcessInterrupted(signum)

    def __enter__(self):
        for signum in HANDLED_SIGNALS:
            self._previous_handlers[signum] = signal.signal(signum, self._handle_signal)
        return self.lifecycle

    def __exit__(self, exc_type, exc_value, traceback):
        try:
            self.lifecycle.release()
        finally:
            for signum, handler in self._previous_handlers.items():
                signal.signal(signum, handler)
            self._previous_handlers = {}
        return False
