"""Build metadata for redpower."""

from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version


DEV_VERSION = "dev (unreleased)"


@dataclass(frozen=True)
class BuildInfo:
    """Read-only build metadata.

    Attributes:
        version: Release version
        commit: Source revision the release was built from
        date: Build date
    """

    version: str = DEV_VERSION
    commit: str = ""
    date: str = ""

    def __str__(self) -> str:
        return f"redpower version: {self.version} ({self.commit}) build date: {self.date}"


def get_build_info(commit: str = "", date: str = "") -> BuildInfo:
    """Build metadata for the installed distribution."""
    try:
        release = version("redpower")
    except PackageNotFoundError:
        release = DEV_VERSION
    return BuildInfo(version=release, commit=commit, date=date)
