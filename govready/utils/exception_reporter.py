"""Warning and summary reporting utilities."""

import sys

PERMISSION_ADJUST_FAILED = "PermissionAdjustFailed"
FIX_GENERATION_FAILED = "FixGenerationFailed"
ENGINE_ERROR = "EngineError"


class ExceptionReporter:
    """Collect non-fatal problems during a run and report them."""

    def __init__(self, debug_logger=None, stream=None):
        """Initialize the exception reporter.

        Args:
            debug_logger (DebugLogger, optional): Debug logger instance
            stream (file, optional): Where warnings are printed (default: stderr)
        """
        self.logger = debug_logger
        self.stream = stream
        self.warnings = []

    def add_warning(self, category, message):
        """Record a warning and print it.

        Args:
            category (str): Warning category
            message (str): Human-readable description
        """
        self.warnings.append({
            'category': category,
            'message': message
        })
        print(f"WARNING: {message}", file=self.stream or sys.stderr)
        if self.logger:
            self.logger.log(f"WARNING [{category}]: {message}")

    def has_warnings(self, category=None):
        if category is None:
            return bool(self.warnings)
        return any(w['category'] == category for w in self.warnings)

    def categories(self):
        return [w['category'] for w in self.warnings]

    def format_summary(self):
        """Build the warnings section of the run summary.

        Returns:
            list: Summary lines
        """
        if not self.warnings:
            return ["No warnings."]

        lines = [f"Warnings ({len(self.warnings)}):"]

        # Group by category
        by_category = {}
        for warning in self.warnings:
            by_category.setdefault(warning['category'], []).append(warning['message'])

        for category in sorted(by_category.keys()):
            lines.append(f"  {category}:")
            for message in by_category[category]:
                lines.append(f"    - {message}")
        return lines
