import subprocess


class Operation:
    """Base class for all operations."""

    def __init__(self, config, lifecycle=None, progress=None, debug_logger=None):
        """Initialize the operation.

        Args:
            config (Config): Runtime settings
            lifecycle (ProcessLifecycle, optional): Process lifecycle instance
            progress (ProgressTracker, optional): Progress tracker instance
            debug_logger (DebugLogger, optional): Debug logger instance
        """
        self.config = config
        self.lifecycle = lifecycle
        self.progress = progress
        self.logger = debug_logger

    def log(self, message):
        if self.logger:
            self.logger.log(message)

    def run_command(self, command, **kwargs):
        """Run an external command given as an argument vector.

        Args:
            command (list): Program name followed by its arguments
            **kwargs: Passed through to subprocess.run

        Returns:
            subprocess.CompletedProcess: The finished process

        Raises:
            OSError: If the program could not be started
        """
        self.log(f"Running: {command}")
        result = subprocess.run(list(command), check=False, **kwargs)
        self.log(f"Exit code {result.returncode}: {command[0]}")
        return result

    def execute(self):
        """Execute the operation.

        This method should be overridden by specific operations.
        """
        raise NotImplementedError("Operation must implement execute method")
