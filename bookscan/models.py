"""Core data structures shared by the scheduler modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple


class DataIntegrityError(LookupError):
    """Raised when an item id has no value entry in the problem."""


@dataclass(frozen=True, slots=True)
class Source:
    source_id: int
    item_count: int
    setup: int
    throughput: int
    items: Tuple[int, ...]

    @property
    def full_harvest_duration(self) -> int:
        # ceil(item_count / throughput) without floats
        return self.setup + -(-self.item_count // self.throughput)


@dataclass(frozen=True, slots=True)
class Problem:
    item_values: Tuple[int, ...]
    sources: Tuple[Source, ...]
    deadline: int

    @property
    def item_total(self) -> int:
        return len(self.item_values)

    def value_map(self) -> Dict[int, int]:
        return dict(enumerate(self.item_values))

    def value_of(self, item_id: int) -> int:
        if not 0 <= item_id < len(self.item_values):
            raise DataIntegrityError(f"item {item_id} has no value entry")
        return self.item_values[item_id]

    def source_lookup(self) -> Dict[int, Source]:
        return {source.source_id: source for source in self.sources}


@dataclass(frozen=True, slots=True)
class Activation:
    source: Source
    items: Tuple[int, ...]

    @property
    def source_id(self) -> int:
        return self.source.source_id


@dataclass(frozen=True, slots=True)
class Schedule:
    activations: Tuple[Activation, ...] = ()

    def __len__(self) -> int:
        return len(self.activations)

    def __iter__(self):
        return iter(self.activations)

    def source_ids(self) -> List[int]:
        return [activation.source_id for activation in self.activations]

    def claimed_items(self) -> Iterable[int]:
        for activation in self.activations:
            yield from activation.items


@dataclass(slots=True)
class ScheduleBuilder:
    """Accumulates activations while a scheduler runs."""

    activations: List[Activation] = field(default_factory=list)

    def add(self, source: Source, items: Iterable[int]) -> Activation:
        activation = Activation(source=source, items=tuple(items))
        self.activations.append(activation)
        return activation

    def build(self) -> Schedule:
        return Schedule(activations=tuple(self.activations))
