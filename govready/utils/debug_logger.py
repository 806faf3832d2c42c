"""Debug logging to file with live updates."""

import os
import sys
from datetime import datetime


class DebugLogger:
    """Logger that writes debug output to a file and, optionally, the console."""

    def __init__(self, log_file_path=None, console_debug=False):
        """Initialize the debug logger.

        Args:
            log_file_path (str, optional): Path to the debug log file. Nothing
                is written to disk when omitted.
            console_debug (bool): Whether to also print to console
        """
        self.log_file_path = log_file_path
        self.console_debug = console_debug
        self.file_handle = None

        if log_file_path:
            try:
                os.makedirs(os.path.dirname(log_file_path) or '.', exist_ok=True)
                # Line buffering for live updates
                self.file_handle = open(log_file_path, 'w', encoding='utf-8', buffering=1)
                self.log(f"Debug log started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
                self.log("=" * 80)
            except OSError as e:
                print(f"WARNING: Could not open debug log file: {e}", file=sys.stderr)
                self.file_handle = None

    def log(self, message):
        """Write a message to the debug log.

        Args:
            message (str): Message to log
        """
        timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        log_line = f"[{timestamp}] {message}"

        if self.file_handle:
            try:
                self.file_handle.write(log_line + '\n')
                self.file_handle.flush()
            except OSError as e:
                print(f"WARNING: Failed to write to debug log: {e}", file=sys.stderr)

        if self.console_debug:
            print(f"DEBUG: {message}", file=sys.stderr)

    def close(self):
        """Close the log file."""
        if self.file_handle:
            try:
                self.log("=" * 80)
                self.log(f"Debug log ended: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
                self.file_handle.close()
            except OSError:
                pass
            self.file_handle = None

    def __del__(self):
        """Ensure file is closed on destruction."""
        self.close()
