"""Exception classes for the GovReady scan orchestrator.

Every fatal condition is a GovReadyError subclass carrying the exit status
the process should terminate with. Conditions that only degrade a run
(permission changes, fix script generation) are not exceptions; they are
recorded as warnings on the ExceptionReporter.
"""


class GovReadyError(Exception):
    """Base class for fatal GovReady errors."""

    exit_code = 1

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class UsageError(GovReadyError):
    """Raised when the command line cannot be routed to a command."""

    pass


class DependencyMissing(GovReadyError):
    """Raised when a required external utility is not on PATH."""

    def __init__(self, utility):
        super().__init__(f"Required utility '{utility}' was not found on PATH")
        self.utility = utility


class ConfigMissing(GovReadyError):
    """Raised when the project configuration file is absent or empty."""

    def __init__(self, path):
        super().__init__(
            f"Configuration file '{path}' is missing or empty. Run 'govready init' to create one."
        )
        self.path = path


class ConfigIncomplete(GovReadyError):
    """Raised when the project configuration lacks a required key."""

    def __init__(self, path, missing_keys):
        keys = ", ".join(missing_keys)
        super().__init__(
            f"Configuration file '{path}' is missing required settings: {keys}. "
            f"Run 'govready init' to create a complete one."
        )
        self.path = path
        self.missing_keys = list(missing_keys)


class EngineLaunchFailure(GovReadyError):
    """Raised when the evaluation engine could not be started at all."""

    def __init__(self, program, reason):
        super().__init__(f"Could not launch evaluation engine '{program}': {reason}")
        self.program = program
        self.reason = reason


class PackageInstallFailed(GovReadyError):
    """Raised when a package could not be installed."""

    def __init__(self, package, reason):
        super().__init__(f"Failed to install package '{package}': {reason}")
        self.package = package
        self.reason = reason


class ProcessInterrupted(GovReadyError):
    """Raised from the signal handler when SIGINT or SIGTERM arrives."""

    def __init__(self, signum):
        super().__init__(f"Interrupted by signal {signum}")
        self.signum = signum
        self.exit_code = 128 + signum
