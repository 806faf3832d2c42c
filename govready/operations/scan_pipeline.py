"""The scan command: load, build, execute, summarize."""

from govready.operations.base import Operation
from govready.operations.scan_builder import ScanRunBuilder
from govready.operations.scan_executor import RunExecutor
from govready.utils.config import load_project_config
from govready.utils.exception_reporter import ExceptionReporter
from govready.utils.file_manager import FileManager
from govready.utils.progress import StageTracker


class ScanPipeline(Operation):
    """Orchestrate one scan of the local host.

    Configuration load precedes run construction, which precedes execution.
    Configuration errors surface before any process is launched.
    """

    def __init__(self, config, lifecycle, builder=None, stage_tracker=None,
                 exception_reporter=None, debug_logger=None):
        super().__init__(config, lifecycle, debug_logger=debug_logger)
        self.builder = builder or ScanRunBuilder(config, debug_logger=debug_logger)
        self.stages = stage_tracker or StageTracker()
        self.reporter = exception_reporter or ExceptionReporter(debug_logger)

    def execute(self, profile_override=None):
        """Run the pipeline.

        Args:
            profile_override (str, optional): Profile from the command line

        Returns:
            RunOutcome: The outcome of the run
        """
        self.stages.start_stage("Loading configuration")
        project = load_project_config(self.config.project_file, self.logger)
        self.log(f"Loaded {project!r} from {self.config.project_file}")
        self.stages.end_stage("Loading configuration",
                              api_version=project.api_version,
                              scan_dir=project.scan_dir)

        self.stages.start_stage("Building scan run")
        run = self.builder.execute(project, profile_override)
        self.log(f"Scan run: {run.to_dict()}")
        self.stages.end_stage("Building scan run", profile=run.profile, suffix=run.suffix)

        self.stages.start_stage("Evaluating")
        file_manager = FileManager(self.lifecycle, self.logger)
        executor = RunExecutor(self.config, self.lifecycle, file_manager, self.reporter,
                               debug_logger=self.logger)
        outcome = executor.execute(run)
        self.stages.end_stage("Evaluating",
                              status=outcome.status,
                              exit_code=outcome.exit_code,
                              warnings=len(outcome.warnings))

        self.print_summary(outcome)
        return outcome

    def print_summary(self, outcome):
        run = outcome.run
        print("\n" + "=" * 80)
        print("SCAN SUMMARY")
        print("=" * 80)
        print(f"Profile:     {run.profile}")
        print(f"Compliance:  {outcome.status}")
        print(f"Results:     {run.result_path}")
        print(f"Report:      {run.report_path}")
        print(f"Fix script:  {outcome.fix_script_path or 'not generated'}")
        for line in self.reporter.format_summary():
            print(line)
        print("=" * 80)
