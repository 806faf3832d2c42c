"""List the profiles available in the compliance content."""

from govready.operations.base import Operation
from govready.utils.exceptions import EngineLaunchFailure


class ProfileLister(Operation):
    """Delegate to the engine to describe the content and its profiles."""

    def execute(self):
        """Run the engine's info command; its output goes straight to the terminal.

        Returns:
            int: The engine's exit code

        Raises:
            EngineLaunchFailure: If the engine could not be started
        """
        command = [self.config.engine, 'info', self.config.content_path]
        try:
            result = self.run_command(command)
        except OSError as e:
            raise EngineLaunchFailure(command[0], e.strerror or str(e)) from e
        return result.returncode
