"""Checks for external utilities the tool relies on."""

import shutil

from govready.utils.exceptions import DependencyMissing


class DependencyChecker:
    """Verify that required utilities resolve on the current PATH."""

    def __init__(self, utilities, progress=None, debug_logger=None, which=shutil.which):
        """Initialize the dependency checker.

        Args:
            utilities (iterable): Utility names, checked in order
            progress (ProgressTracker, optional): Progress tracker instance
            debug_logger (DebugLogger, optional): Debug logger instance
            which (callable): PATH lookup, shutil.which by default
        """
        self.utilities = tuple(utilities)
        self.progress = progress
        self.logger = debug_logger
        self.which = which

    def execute(self):
        """Check every utility, stopping at the first missing one.

        Returns:
            dict: Utility name -> resolved path

        Raises:
            DependencyMissing: Naming the first utility that did not resolve
        """
        resolved = {}
        if self.progress:
            self.progress.create_bar(len(self.utilities), "Checking dependencies", "tools")
        try:
            for utility in self.utilities:
                path = self.which(utility)
                if not path:
                    if self.logger:
                        self.logger.log(f"Dependency check failed: {utility} not found")
                    raise DependencyMissing(utility)
                resolved[utility] = path
                if self.logger:
                    self.logger.log(f"Found {utility} at {path}")
                if self.progress:
                    self.progress.update(1)
        finally:
            if self.progress:
                self.progress.close()
        return resolved
