from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Tuple
import hashlib


@dataclass(frozen=True)
class Version:
    """
    Release of cm5probe that produced a set of reports.

    Two boards verified with the same release but different local patches
    report the same semver; the source hash tells them apart.
    """
    major: int
    minor: int
    patch: int
    hash: str
    date: datetime

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def full_version(self) -> str:
        """Semver followed by source hash and release date."""
        return f"{self} (hash: {self.hash_short()}, date: {self.date_string()})"

    def semver(self) -> Tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def hash_short(self, length: int = 8) -> str:
        return self.hash[:length]

    def date_string(self, fmt: str = "%Y-%m-%d") -> str:
        return self.date.strftime(fmt)

    def report_metadata(self) -> Dict[str, str]:
        """Fields stamped into every emitted report collection."""
        return {
            "cm5probe_version": str(self),
            "cm5probe_hash": self.hash_short(),
            "cm5probe_release_date": self.date_string(),
        }


def _source_hash(package_dir: Path) -> str:
    """SHA256 over the package's Python sources, in sorted path order.

    Paths are fed in alongside contents so a moved module changes the hash.
    """
    hasher = hashlib.sha256()
    for source in sorted(package_dir.rglob("*.py")):
        if "__pycache__" in source.parts:
            continue
        try:
            content = source.read_bytes()
        except OSError:
            continue
        hasher.update(source.relative_to(package_dir).as_posix().encode())
        hasher.update(content)
    return hasher.hexdigest()


CM5PROBE_VERSION = Version(
    major=1,
    minor=0,
    patch=0,
    hash=_source_hash(Path(__file__).resolve().parent.parent),
    date=datetime(2025, 11, 17),
)
