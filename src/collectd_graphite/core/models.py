"""Core domain models for collectd value lists."""

import math
from dataclasses import dataclass, field
from enum import Enum

Number = int | float


class DSType(Enum):
    """Data source kind as declared in collectd's types.db."""

    GAUGE = "gauge"
    COUNTER = "counter"
    DERIVE = "derive"
    ABSOLUTE = "absolute"

    @classmethod
    def parse(cls, value: "str | DSType") -> "DSType":
        """Resolve a DSType from its name, case-insensitively.

        Args:
            value: A DSType or a name such as "COUNTER" or "derive".

        Raises:
            ValueError: If the name is not a known data source kind.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"unknown data source type: {value!r}") from None


@dataclass(frozen=True)
class DataSource:
    """One named value slot of a collectd type.

    Attributes:
        name: Data source name (e.g., "value", "rx").
        kind: How raw readings are turned into rates.
        min: Lower bound for the processed value, or None.
        max: Upper bound for the processed value, or None.
    """

    name: str
    kind: DSType = DSType.GAUGE
    min: float | None = None
    max: float | None = None

    def __post_init__(self) -> None:
        # collectd reports undefined bounds as NaN
        if self.min is not None and math.isnan(self.min):
            object.__setattr__(self, "min", None)
        if self.max is not None and math.isnan(self.max):
            object.__setattr__(self, "max", None)


@dataclass(frozen=True)
class ValueList:
    """A single measurement batch handed over by the host daemon.

    Attributes:
        host: Host the values were collected on.
        plugin: Collecting plugin (e.g., "cpu").
        type: collectd type name (e.g., "load").
        time: Unix timestamp in seconds.
        interval: Collection interval in seconds.
        values: Ordered (DataSource, raw value) pairs.
        plugin_instance: Optional plugin instance (None or "" when unset).
        type_instance: Optional type instance (None or "" when unset).
    """

    host: str
    plugin: str
    type: str
    time: float
    interval: float
    values: tuple[tuple[DataSource, Number], ...] = field(default_factory=tuple)
    plugin_instance: str | None = None
    type_instance: str | None = None
