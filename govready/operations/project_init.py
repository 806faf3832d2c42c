"""Project scaffolding."""

import os

from govready.operations.base import Operation
from govready.utils.config import render_project_file, DEFAULT_SCAN_DIR


class ProjectInitializer(Operation):
    """Create the scan directory and a default GovReadyfile."""

    def execute(self, directory='.'):
        """Scaffold a project in directory.

        An existing project file is left untouched.

        Args:
            directory (str): Project root

        Returns:
            tuple: (project_file_path, created) where created is False when
                the project file already existed
        """
        project_file = os.path.join(directory, self.config.project_file)
        scan_dir = os.path.join(directory, DEFAULT_SCAN_DIR)

        os.makedirs(scan_dir, exist_ok=True)
        self.log(f"Ensured scan directory {scan_dir}")

        if os.path.exists(project_file):
            self.log(f"Project file {project_file} already exists, not overwriting")
            return project_file, False

        with open(project_file, 'w', encoding='utf-8') as f:
            f.write(render_project_file())
        self.log(f"Wrote default project file {project_file}")
        return project_file, True
