"""File management utilities."""

import os
import stat


class FileManager:
    """Manage scan artifacts and the run's temporary files."""

    def __init__(self, lifecycle, debug_logger=None):
        """Initialize the file manager.

        Args:
            lifecycle (ProcessLifecycle): Owner of the temporary directory
            debug_logger (DebugLogger, optional): Debug logger instance
        """
        self.lifecycle = lifecycle
        self.logger = debug_logger

    def get_temp_file_path(self, filename):
        """Return a path inside the run's temporary directory.

        Allocates the directory on first use.

        Args:
            filename (str): File name

        Returns:
            str: Full path to temp file
        """
        return os.path.join(self.lifecycle.allocate_temp_dir(), filename)

    def widen_read_permissions(self, path):
        """Add group and other read permission to a file.

        Args:
            path (str): File to adjust

        Raises:
            OSError: If the file is missing or its mode cannot be changed
        """
        mode = os.stat(path).st_mode
        os.chmod(path, stat.S_IMODE(mode) | stat.S_IRGRP | stat.S_IROTH)
        if self.logger:
            self.logger.log(f"Widened read permissions on {path}")

    @staticmethod
    def tail(path, lines=20):
        """Return the last lines of a text file, or '' if it is missing.

        Args:
            path (str): File to read
            lines (int): Number of lines to return

        Returns:
            str: Trailing lines joined by newlines
        """
        if not os.path.exists(path):
            return ""
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            content = f.read().splitlines()
        return "\n".join(content[-lines:])
