"""
Scope configuration for ordered record types.

A scope is the ordered set of field or relation names whose values split the
records of one type into independently ordered groups. An empty scope keeps
every record of the type in a single global group.

Example:
    @ordered(scope="board")
    class Card(OrderedMixin, Base):
        ...

    scope_registry.configuration_for(Card).keys  # ("board",)
"""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import TypeVar

from scoped_ordering.domain.common.exceptions import (
    EntityNotFoundError,
    ScopeConfigurationError,
)

T = TypeVar("T", bound=type)

ScopeDeclaration = str | Iterable[str | None] | None


@dataclass(frozen=True)
class ScopeConfiguration:
    """Immutable, ordered set of scope keys for one record type."""

    keys: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for key in self.keys:
            if not isinstance(key, str) or not key.strip():
                raise ScopeConfigurationError("<unknown>", f"Invalid scope key: {key!r}")
        if len(set(self.keys)) != len(self.keys):
            raise ScopeConfigurationError("<unknown>", f"Duplicate scope keys: {self.keys}")

    @property
    def is_global(self) -> bool:
        """Whether all records of the type form a single group."""
        return not self.keys

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    @classmethod
    def normalize(cls, scope: ScopeDeclaration) -> "ScopeConfiguration":
        """
        Build a configuration from a loose declaration.

        Accepts None, a single name, or a sequence of names. None entries are
        dropped and repeated names keep their first occurrence.
        """
        if scope is None:
            return cls()
        names = [scope] if isinstance(scope, str) else list(scope)
        keys: list[str] = []
        for name in names:
            if name is None:
                continue
            if not isinstance(name, str) or not name.strip():
                raise ScopeConfigurationError("<unknown>", f"Invalid scope key: {name!r}")
            name = name.strip()
            if name not in keys:
                keys.append(name)
        return cls(tuple(keys))


class ScopeRegistry:
    """
    Maps ordered record types to their scope configuration.

    Configurations are looked up by type identity, walking the MRO so that
    subclasses of a registered type share its configuration and its groups.
    A type can be registered only once.
    """

    def __init__(self) -> None:
        self._configurations: dict[type, ScopeConfiguration] = {}

    def register(self, record_type: type, configuration: ScopeConfiguration) -> None:
        if record_type in self._configurations:
            raise ScopeConfigurationError(
                record_type.__name__, f"{record_type.__name__} is already ordered"
            )
        if any(t.__name__ == record_type.__name__ for t in self._configurations):
            # Names must stay unique for lookup()
            raise ScopeConfigurationError(
                record_type.__name__,
                f"Another ordered type is already registered as {record_type.__name__}",
            )
        self._configurations[record_type] = configuration

    def is_registered(self, record_type: type) -> bool:
        return self._find(record_type) is not None

    def ordered_type_for(self, record_type: type) -> type:
        """Return the registered class that declares the scope for record_type."""
        found = self._find(record_type)
        if found is None:
            raise ScopeConfigurationError(
                record_type.__name__, f"{record_type.__name__} is not an ordered type"
            )
        return found

    def configuration_for(self, record_or_type: object) -> ScopeConfiguration:
        record_type = record_or_type if isinstance(record_or_type, type) else type(record_or_type)
        return self._configurations[self.ordered_type_for(record_type)]

    def lookup(self, name: str) -> type:
        """Find a registered type by class name."""
        for record_type in self._configurations:
            if record_type.__name__ == name:
                return record_type
        raise EntityNotFoundError("OrderedType", name)

    def registered_types(self) -> list[type]:
        return list(self._configurations)

    def _find(self, record_type: type) -> type | None:
        for candidate in record_type.__mro__:
            if candidate in self._configurations:
                return candidate
        return None


scope_registry = ScopeRegistry()


def ordered(
    scope: ScopeDeclaration = None, *, registry: ScopeRegistry | None = None
) -> Callable[[T], T]:
    """
    Class decorator declaring the scope a record type is ordered within.

    A relationship scope is resolved through the holder's primary key, so the
    holder must be saved before the records ordered within it. Saving a
    record whose holder is still pending raises ValidationError.

    Args:
        scope: One or more column or many-to-one relationship names. None
            orders all records of the type in one group.
        registry: Registry to record the declaration in. Defaults to the
            module-level registry.
    """
    target = registry if registry is not None else scope_registry

    def decorator(record_type: T) -> T:
        try:
            configuration = ScopeConfiguration.normalize(scope)
        except ScopeConfigurationError as e:
            raise ScopeConfigurationError(record_type.__name__, e.message) from e
        target.register(record_type, configuration)
        return record_type

    return decorator
