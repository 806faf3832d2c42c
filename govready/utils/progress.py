"""Progress tracking utilities."""

from tqdm import tqdm
import sys


class ProgressTracker:
    """Track and display progress for multi-step checks."""

    def __init__(self, enabled=True):
        """Initialize the progress tracker.

        Args:
            enabled (bool): Draw progress bars
        """
        self.enabled = enabled
        self.current_bar = None

    def create_bar(self, total, description, unit='items'):
        """Create a new progress bar.

        Args:
            total (int): Total number of items
            description (str): Description of the operation
            unit (str): Unit name for items

        Returns:
            tqdm: Progress bar instance
        """
        if self.current_bar:
            self.current_bar.close()

        self.current_bar = tqdm(
            total=total,
            desc=description,
            unit=unit,
            ncols=80,
            file=sys.stderr,
            leave=False,
            disable=not self.enabled,
        )
        return self.current_bar

    def update(self, n=1):
        """Update the current progress bar.

        Args:
            n (int): Number of items to increment
        """
        if self.current_bar:
            self.current_bar.update(n)

    def close(self):
        """Close the current progress bar."""
        if self.current_bar:
            self.current_bar.close()
            self.current_bar = None


class StageTracker:
    """Track the stages of the scan pipeline."""

    def __init__(self, quiet=False):
        """Initialize the stage tracker.

        Args:
            quiet (bool): Suppress stage banners
        """
        self.quiet = quiet
        self.stats = {}

    def start_stage(self, stage_name):
        """Start a new stage.

        Args:
            stage_name (str): Name of the stage
        """
        self.stats[stage_name] = {}
        if not self.quiet:
            print(f"\n{'=' * 80}")
            print(f"Stage: {stage_name}")
            print(f"{'=' * 80}")

    def end_stage(self, stage_name, **stats):
        """End a stage and record statistics.

        Args:
            stage_name (str): Name of the stage
            **stats: Statistics to record
        """
        self.stats.setdefault(stage_name, {}).update(stats)
        if not self.quiet:
            print(f"\n{stage_name} completed:")
            for key, value in stats.items():
                print(f"  - {key}: {value}")

    def get_stats(self):
        return self.stats
