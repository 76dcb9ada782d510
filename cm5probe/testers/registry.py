"""Registry of peripheral testers.

Usage:
    from cm5probe.testers.registry import TesterRegistry

    registry = TesterRegistry(root="/")

    # All testers, instantiated with shared configuration
    testers = registry.create_all()

    # A specific tester by name
    gpio = registry.create("gpio")
"""

from pathlib import Path
from typing import Any, ClassVar

from cm5probe.models.constants import DEFAULT_ROOT
from cm5probe.testers.base import PeripheralTester
from cm5probe.testers.cpu import CPUTester
from cm5probe.testers.gpio import GPIOTester


class TesterRegistryError(Exception):
    """Base exception for registry errors."""

    pass


class TesterNotFoundError(TesterRegistryError):
    """Raised when a requested tester is not registered."""

    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        super().__init__(
            f"Unknown peripheral: '{name}'. Valid: {', '.join(known)}"
        )


class TesterRegistry:
    """Maps peripheral names to tester classes and builds instances.

    Example:
        >>> registry = TesterRegistry()
        >>> for tester in registry.create_all():
        ...     print(tester.get_peripheral_name(), tester.is_available())
    """

    DEFAULT_TESTERS: ClassVar[dict[str, type[PeripheralTester]]] = {
        "cpu": CPUTester,
        "gpio": GPIOTester,
    }

    def __init__(
        self,
        root: str | Path = DEFAULT_ROOT,
        tester_options: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            root: Filesystem root passed to every tester.
            tester_options: Extra constructor arguments per tester name,
                e.g. ``{"gpio": {"settle_seconds": 0.05}}``.
        """
        self.root = Path(root)
        self._testers: dict[str, type[PeripheralTester]] = dict(self.DEFAULT_TESTERS)
        self._options = tester_options or {}

    def register(self, name: str, tester_cls: type[PeripheralTester]) -> None:
        """Register an additional tester class under ``name``."""
        self._testers[name.lower()] = tester_cls

    @property
    def names(self) -> list[str]:
        """Registered peripheral names, in registration order."""
        return list(self._testers)

    def get_tester_class(self, name: str) -> type[PeripheralTester]:
        """Look up a tester class by (case-insensitive) name.

        Raises:
            TesterNotFoundError: If the name is not registered.
        """
        key = name.lower()
        if key not in self._testers:
            raise TesterNotFoundError(name, self.names)
        return self._testers[key]

    def create(self, name: str) -> PeripheralTester:
        """Instantiate the tester registered under ``name``."""
        tester_cls = self.get_tester_class(name)
        options = self._options.get(name.lower(), {})
        return tester_cls(root=self.root, **options)  # type: ignore[call-arg]

    def create_all(self, names: list[str] | None = None) -> list[PeripheralTester]:
        """Instantiate the named testers, or every registered tester."""
        return [self.create(name) for name in (names or self.names)]

    def availability(self) -> dict[str, bool]:
        """Report is_available() for every registered tester."""
        return {
            tester.get_peripheral_name(): tester.is_available()
            for tester in self.create_all()
        }

    def __len__(self) -> int:
        """Return number of registered testers."""
        return len(self._testers)

    def __contains__(self, name: str) -> bool:
        """Check if a tester is registered."""
        return name.lower() in self._testers
