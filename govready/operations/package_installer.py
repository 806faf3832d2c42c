"""Idempotent installation of the engine, its content and its repository."""

from govready.operations.base import Operation
from govready.utils.exceptions import PackageInstallFailed

# command name -> package
PACKAGES = {
    'install-oscap': 'openscap-scanner',
    'install-ssg': 'scap-security-guide',
    'install-epel': 'epel-release',
}


class PackageInstaller(Operation):
    """Ensure a package is installed, installing it only when missing."""

    def is_installed(self, package):
        result = self.run_command(
            [self.config.package_query, '-q', package],
            capture_output=True, text=True,
        )
        return result.returncode == 0

    def execute(self, package):
        """Ensure package is installed.

        Args:
            package (str): Package name

        Returns:
            bool: True if the package was installed now, False if it was already present

        Raises:
            PackageInstallFailed: If the package manager failed
        """
        try:
            if self.is_installed(package):
                self.log(f"{package} is already installed")
                return False

            result = self.run_command(
                [self.config.package_manager, 'install', '-y', package],
                capture_output=True, text=True,
            )
        except OSError as e:
            raise PackageInstallFailed(package, e.strerror or str(e)) from e

        if result.returncode != 0:
            reason = (result.stderr or '').strip().splitlines()
            raise PackageInstallFailed(
                package,
                reason[-1] if reason else f"exit status {result.returncode}",
            )
        self.log(f"Installed {package}")
        return True
