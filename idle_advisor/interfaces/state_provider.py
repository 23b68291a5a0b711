"""State provider capability: read-only access to a raw game snapshot.

The live game exposes its state in whatever shape it likes. Some numbers are
stored fields, others are zero-argument accessors computed on demand
(``getPrice()``, ``cps()``). This module hides that difference behind
:class:`ValueSource` so that everything past normalization only sees floats.

Fields are looked up through alias lists, by mapping key when the object is a
mapping and by attribute otherwise. Nothing here calls a mutating method on the
source.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from idle_advisor.interfaces.errors import AdvisorError

logger = logging.getLogger(__name__)


class _Missing:
    """Sentinel type for a field that is absent from the source."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class ValueResolutionError(AdvisorError):
    """Raised when a value source cannot produce a usable number."""

    pass


def is_number(value: Any) -> bool:
    """Check for a real int/float that is not a bool and not NaN."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def is_accessor(value: Any) -> bool:
    """Check whether a field value looks like a zero-argument accessor."""
    return callable(value) and not isinstance(value, type)


class ValueSource(ABC):
    """A numeric field that is resolved once into a plain float."""

    @abstractmethod
    def resolve(self) -> float:
        """Produce the numeric value.

        Raises:
            ValueResolutionError: If the value is missing or not numeric.
        """
        ...


class StoredValue(ValueSource):
    """A value the source keeps as a plain field."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def resolve(self) -> float:
        if not is_number(self.value):
            raise ValueResolutionError(f"Stored value is not numeric: {self.value!r}")
        return float(self.value)

    def __repr__(self) -> str:
        return f"StoredValue({self.value!r})"


class ComputedValue(ValueSource):
    """A value the source computes through a zero-argument accessor."""

    __slots__ = ("accessor",)

    def __init__(self, accessor: Callable[[], Any]) -> None:
        self.accessor = accessor

    def resolve(self) -> float:
        try:
            value = self.accessor()
        except Exception as exc:
            raise ValueResolutionError(f"Accessor raised {type(exc).__name__}: {exc}") from exc
        if not is_number(value):
            raise ValueResolutionError(f"Accessor returned a non-numeric value: {value!r}")
        return float(value)

    def __repr__(self) -> str:
        return f"ComputedValue({self.accessor!r})"


def lookup_field(source: Any, names: Iterable[str]) -> Any:
    """Return the first present field among ``names``, or ``MISSING``.

    A field holding ``None`` counts as absent.
    """
    if source is None:
        return MISSING
    for name in names:
        if isinstance(source, Mapping):
            value = source.get(name)
        else:
            try:
                value = getattr(source, name, None)
            except Exception as exc:
                logger.debug("Reading %r from %s failed: %s", name, type(source).__name__, exc)
                value = None
        if value is not None:
            return value
    return MISSING


def value_source(source: Any, names: Iterable[str]) -> ValueSource | None:
    """Wrap the first present field among ``names`` as a :class:`ValueSource`.

    Returns None when the field is absent or is neither a number nor an accessor.
    """
    value = lookup_field(source, names)
    if value is MISSING:
        return None
    if is_accessor(value):
        return ComputedValue(value)
    if is_number(value):
        return StoredValue(value)
    return None
