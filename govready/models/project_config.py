"""Project configuration model."""

from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class ProjectConfig:
    """Resolved contents of a GovReadyfile. Immutable once loaded."""

    api_version: str
    scan_dir: str
    default_profile: str
    cpe_dictionary_path: str

    def to_dict(self):
        """Convert to dictionary."""
        return asdict(self)

    def __repr__(self):
        return f"ProjectConfig(scan_dir={self.scan_dir}, profile={self.default_profile})"
