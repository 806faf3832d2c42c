"""Scan run model."""

import os
from dataclasses import dataclass, field

RESULT_ID_PREFIX = "xccdf_org.open-scap_testresult_"

STATUS_PASS = "pass"
STATUS_FAIL = "fail"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class ScanRun:
    """One execution of the evaluation engine.

    Artifact paths are derived from (scan_dir, profile, suffix) and cannot be
    set on their own. Existing files at those paths are overwritten.
    """

    scan_dir: str
    profile: str
    suffix: str
    command: tuple = ()
    fix_command: tuple = ()

    @property
    def result_path(self):
        return os.path.join(self.scan_dir, f"{self.profile}-results-{self.suffix}.xml")

    @property
    def report_path(self):
        return os.path.join(self.scan_dir, f"{self.profile}-results-{self.suffix}.html")

    @property
    def fix_script_path(self):
        # Written to the working directory, not scan_dir
        return f"{self.profile}-fix-{self.suffix}.sh"

    @property
    def result_id(self):
        return f"{RESULT_ID_PREFIX}{self.profile}"

    @property
    def artifacts(self):
        return (self.result_path, self.report_path)

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'profile': self.profile,
            'suffix': self.suffix,
            'result_path': self.result_path,
            'report_path': self.report_path,
            'fix_script_path': self.fix_script_path,
        }

    def __repr__(self):
        return f"ScanRun(profile={self.profile}, suffix={self.suffix})"


@dataclass
class RunOutcome:
    """What happened when a ScanRun was executed."""

    run: ScanRun
    exit_code: int
    permissions_adjusted: bool = False
    fix_script_path: str = None
    warnings: list = field(default_factory=list)

    @property
    def status(self):
        """Compliance status reported by the engine exit code."""
        if self.exit_code == 0:
            return STATUS_PASS
        if self.exit_code == 2:
            return STATUS_FAIL
        return STATUS_ERROR

    @property
    def compliant(self):
        return self.status == STATUS_PASS

    def __repr__(self):
        return f"RunOutcome(profile={self.run.profile}, status={self.status}, warnings={len(self.warnings)})"
