"""Readiness check for scanning the local host."""

import os
import shutil

from govready.operations.base import Operation
from govready.utils.config import load_project_config
from govready.utils.exceptions import ConfigMissing, ConfigIncomplete


class EnvironmentCheck(Operation):
    """Report whether a scan could run here."""

    def __init__(self, config, debug_logger=None, which=shutil.which):
        super().__init__(config, debug_logger=debug_logger)
        self.which = which

    def execute(self):
        """Run every check.

        Returns:
            list: (check_name, passed, detail) tuples, in check order
        """
        results = []

        engine = self.which(self.config.engine)
        results.append(('engine', bool(engine), engine or f"{self.config.engine} not found on PATH"))

        content = self.config.content_path
        results.append(('content', os.path.isfile(content), content))

        try:
            project = load_project_config(self.config.project_file, self.logger)
        except (ConfigMissing, ConfigIncomplete) as e:
            results.append(('project', False, e.message))
        else:
            results.append(('project', True, self.config.project_file))
            results.append(('cpe', os.path.isfile(project.cpe_dictionary_path),
                            project.cpe_dictionary_path))
            results.append(('scan_dir', os.path.isdir(project.scan_dir), project.scan_dir))

        for name, passed, detail in results:
            self.log(f"Check {name}: {'ok' if passed else 'FAILED'} ({detail})")
        return results
