"""Scan execution and artifact post-processing."""

import os

from govready.models.scan_run import RunOutcome, STATUS_ERROR
from govready.operations.base import Operation
from govready.utils.exception_reporter import (
    PERMISSION_ADJUST_FAILED,
    FIX_GENERATION_FAILED,
    ENGINE_ERROR,
)
from govready.utils.exceptions import EngineLaunchFailure


class RunExecutor(Operation):
    """Run the evaluation engine, then normalize permissions and build the fix script.

    A non-zero exit from a launched engine is a completed run: the engine
    exits 2 when a rule fails, and that is a compliance result. Only a launch
    failure aborts the run, and then no post-processing is attempted.
    There is no timeout on the engine.
    """

    def __init__(self, config, lifecycle, file_manager, exception_reporter,
                 progress=None, debug_logger=None):
        super().__init__(config, lifecycle, progress, debug_logger)
        self.file_manager = file_manager
        self.reporter = exception_reporter

    def execute(self, run):
        """Execute a ScanRun.

        Args:
            run (ScanRun): Run produced by ScanRunBuilder

        Returns:
            RunOutcome: Exit code, permission status, fix script path and warnings

        Raises:
            EngineLaunchFailure: If the engine could not be started
            OSError: If the temporary engine logs cannot be created
        """
        exit_code = self._evaluate(run)
        outcome = RunOutcome(run=run, exit_code=exit_code)

        if outcome.status == STATUS_ERROR:
            detail = self.file_manager.tail(self._engine_log('stderr'), lines=5)
            message = f"Evaluation engine exited with status {exit_code}"
            if detail:
                message = f"{message}: {detail.splitlines()[-1]}"
            self._warn(outcome, ENGINE_ERROR, message)

        outcome.permissions_adjusted = self._adjust_permissions(outcome)
        outcome.fix_script_path = self._generate_fix(outcome)
        return outcome

    def _engine_log(self, stream):
        return self.file_manager.get_temp_file_path(f"engine-{stream}.log")

    def _evaluate(self, run):
        stdout_path = self._engine_log('stdout')
        stderr_path = self._engine_log('stderr')
        self.log(f"Evaluating profile {run.profile}, results -> {run.result_path}")

        # Only a failure to start the engine is a launch failure
        with open(stdout_path, 'w', encoding='utf-8') as out, \
                open(stderr_path, 'w', encoding='utf-8') as err:
            try:
                result = self.run_command(run.command, stdout=out, stderr=err)
            except OSError as e:
                self.log(f"Engine launch failed: {e}")
                raise EngineLaunchFailure(run.command[0], e.strerror or str(e)) from e

        if self.config.debug:
            self.log(f"Engine output:\n{self.file_manager.tail(stdout_path)}")
        return result.returncode

    def _adjust_permissions(self, outcome):
        adjusted = True
        for path in outcome.run.artifacts:
            try:
                self.file_manager.widen_read_permissions(path)
            except OSError as e:
                adjusted = False
                self._warn(outcome, PERMISSION_ADJUST_FAILED,
                           f"Could not adjust permissions on {path}: {e.strerror or e}")
        return adjusted

    def _generate_fix(self, outcome):
        run = outcome.run
        if not os.path.exists(run.result_path):
            self._warn(outcome, FIX_GENERATION_FAILED,
                       f"No result file at {run.result_path}; fix script not generated")
            return None

        log_path = self.file_manager.get_temp_file_path('fix-generation.log')
        try:
            with open(log_path, 'w', encoding='utf-8') as log:
                result = self.run_command(run.fix_command, stdout=log, stderr=log)
        except OSError as e:
            self._warn(outcome, FIX_GENERATION_FAILED,
                       f"Could not run fix generation: {e.strerror or e}")
            return None

        if result.returncode != 0:
            self._discard_partial(run.fix_script_path)
            detail = self.file_manager.tail(log_path, lines=1)
            self._warn(outcome, FIX_GENERATION_FAILED,
                       f"Fix generation exited with status {result.returncode}"
                       + (f": {detail}" if detail else ""))
            return None

        self.log(f"Fix script written to {run.fix_script_path}")
        return run.fix_script_path

    def _discard_partial(self, path):
        if os.path.exists(path):
            try:
                os.remove(path)
                self.log(f"Removed partial fix script {path}")
            except OSError as e:
                self.log(f"Could not remove partial fix script {path}: {e}")

    def _warn(self, outcome, category, message):
        outcome.warnings.append(category)
        if self.reporter:
            self.reporter.add_warning(category, message)
