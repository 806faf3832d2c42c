import os
from dotenv import load_dotenv

from govready.models.project_config import ProjectConfig
from govready.utils.exceptions import ConfigMissing, ConfigIncomplete

DEFAULT_PROJECT_FILE = "GovReadyfile"
DEFAULT_CONTENT_PATH = "/usr/share/xml/scap/ssg/content/ssg-rhel6-xccdf.xml"
DEFAULT_CPE_PATH = "/usr/share/xml/scap/ssg/content/ssg-rhel6-cpe-dictionary.xml"
DEFAULT_API_VERSION = "0.1.0"
DEFAULT_SCAN_DIR = "scans"
DEFAULT_PROFILE = "test"

# GovReadyfile key -> ProjectConfig field
PROJECT_KEYS = {
    'API_VERSION': 'api_version',
    'SCAN_DIR': 'scan_dir',
    'PROFILE': 'default_profile',
    'CPE': 'cpe_dictionary_path',
}


class Config:
    def __init__(self):
        """Initialize runtime settings with default values."""
        # General
        self.debug = False
        self.log_directory = None

        # Project
        self.project_file = DEFAULT_PROJECT_FILE

        # Evaluation engine
        self.engine = "oscap"
        self.content_path = DEFAULT_CONTENT_PATH
        self.fix_template = "urn:xccdf:fix:script:sh"

        # Package installation
        self.package_manager = "yum"
        self.package_query = "rpm"

    @classmethod
    def from_env(cls, env_file='.env'):
        """Create runtime settings from environment variables.

        Args:
            env_file (str): Path to environment file (default: '.env')
        """
        load_dotenv(env_file)  # Load specified .env file if it exists

        config = cls()
        config.debug = os.getenv('GOVREADY_DEBUG', '').lower() == 'true'

        if os.getenv('GOVREADY_CONFIG'):
            config.project_file = os.getenv('GOVREADY_CONFIG')
        if os.getenv('GOVREADY_CONTENT'):
            config.content_path = os.getenv('GOVREADY_CONTENT')
        if os.getenv('GOVREADY_ENGINE'):
            config.engine = os.getenv('GOVREADY_ENGINE')
        if os.getenv('GOVREADY_LOG_DIR'):
            config.log_directory = os.getenv('GOVREADY_LOG_DIR')

        return config

    def validate(self):
        """Validate the runtime settings.

        Returns:
            tuple: (bool, str) - (is_valid, error_message)
        """
        if not self.project_file:
            return False, "Project file path is required"
        if not self.engine:
            return False, "Evaluation engine name is required"
        if not self.content_path:
            return False, "Compliance content path is required"
        return True, None

    @property
    def required_utilities(self):
        """Utilities that must resolve on PATH before any command runs."""
        return (self.package_query, self.package_manager)


def load_project_config(path=DEFAULT_PROJECT_FILE, debug_logger=None):
    """Load and validate a GovReadyfile.

    The file holds ``KEY = value`` lines. Everything after the first '=' is
    the value, trimmed of surrounding whitespace; quotes and '#' inside a
    value are kept as written. Values are never interpolated or executed.
    When a key repeats the last value wins.

    Args:
        path (str): Path to the project file
        debug_logger (DebugLogger, optional): Debug logger instance

    Returns:
        ProjectConfig: The resolved project configuration

    Raises:
        ConfigMissing: If the file does not exist or is empty
        ConfigIncomplete: If a required key is absent or blank
    """
    if not os.path.isfile(path):
        raise ConfigMissing(path)

    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()
    if not content.strip():
        raise ConfigMissing(path)

    values = {}
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith('#') or '=' not in stripped:
            continue
        key, value = stripped.split('=', 1)
        key = key.strip()
        if key not in PROJECT_KEYS:
            if debug_logger:
                debug_logger.log(f"Ignoring unrecognized key '{key}' in {path}")
            continue
        values[PROJECT_KEYS[key]] = value.strip()

    missing = [key for key, field in PROJECT_KEYS.items() if not values.get(field)]
    if missing:
        raise ConfigIncomplete(path, missing)

    return ProjectConfig(**values)


def render_project_file(scan_dir=DEFAULT_SCAN_DIR, profile=DEFAULT_PROFILE,
                        cpe_path=DEFAULT_CPE_PATH, api_version=DEFAULT_API_VERSION):
    """Render the contents of a default GovReadyfile."""
    lines = [
        "# GovReady project configuration",
        "",
        f"API_VERSION = {api_version}",
        "",
        "# Directory receiving scan results and reports",
        f"SCAN_DIR = {scan_dir}",
        "",
        "# Profile used when 'govready scan' is run without one",
        f"PROFILE = {profile}",
        "",
        "# Platform enumeration dictionary passed to the evaluation engine",
        f"CPE = {cpe_path}",
    ]
    return "\n".join(lines) + "\n"
