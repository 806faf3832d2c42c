"""Scan run construction."""

from dataclasses import replace
from datetime import datetime

from govready.models.scan_run import ScanRun
from govready.operations.base import Operation

# Minute granularity: two runs of one profile in the same minute share
# artifact names and the later run overwrites the earlier one.
SUFFIX_FORMAT = '%m%d-%H%M'


class ScanRunBuilder(Operation):
    """Resolve the profile and artifact names and assemble engine commands."""

    def __init__(self, config, clock=datetime.now, debug_logger=None):
        """Initialize the builder.

        Args:
            config (Config): Runtime settings (engine name, content path)
            clock (callable): Returns the current local datetime
            debug_logger (DebugLogger, optional): Debug logger instance
        """
        super().__init__(config, debug_logger=debug_logger)
        self.clock = clock

    def execute(self, project, profile_override=None):
        """Build the ScanRun for a project.

        Nothing is executed and nothing touches the filesystem.

        Args:
            project (ProjectConfig): Loaded project configuration
            profile_override (str, optional): Profile given on the command line

        Returns:
            ScanRun: The run, with its evaluation and fix commands
        """
        profile = profile_override or project.default_profile
        suffix = self.clock().strftime(SUFFIX_FORMAT)

        run = ScanRun(scan_dir=project.scan_dir, profile=profile, suffix=suffix)
        run = replace(
            run,
            command=self.eval_command(run, project.cpe_dictionary_path),
            fix_command=self.fix_command(run, run.fix_script_path),
        )

        self.log(f"Built scan run: profile={profile} suffix={suffix}")
        return run

    build = execute

    def eval_command(self, run, cpe_path):
        """Evaluate run.profile against the content file."""
        return (
            self.config.engine,
            'xccdf',
            'eval',
            '--profile', run.profile,
            '--results', run.result_path,
            '--report', run.report_path,
            '--cpe', cpe_path,
            self.config.content_path,
        )

    def fix_command(self, run, output_path):
        """Generate a shell remediation script from run.result_path."""
        return (
            self.config.engine,
            'xccdf',
            'generate',
            'fix',
            '--template', self.config.fix_template,
            '--result-id', run.result_id,
            '--output', output_path,
            run.result_path,
        )
