# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Hierarchical performance counters.

Counters are reported as groups of named values:

    registry = CounterRegistry()
    group = registry.add_group("org.example.TaskCounter", "Task Counters")
    group.add_counter("SPILLED_RECORDS", value=10)

    registry.get_group("org.example.TaskCounter").find_counter("SPILLED_RECORDS").value  # 10
"""

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass
class Counter:
    """A single named counter value."""

    name: str
    display_name: str
    value: int = 0

    def increment(self, amount: int) -> None:
        self.value += amount


class CounterGroup:
    """Named group of counters, keyed by counter name in insertion order."""

    def __init__(self, name: str, display_name: str | None = None):
        self.name = name
        self.display_name = display_name or name
        self._counters: dict[str, Counter] = {}

    def add_counter(self, name: str, display_name: str | None = None, value: int = 0) -> Counter:
        """Add a counter, or overwrite the value of an existing one."""
        counter = self._counters.get(name)
        if counter is None:
            counter = Counter(name=name, display_name=display_name or name, value=value)
            self._counters[name] = counter
        else:
            counter.value = value
        return counter

    def find_counter(self, name: str) -> Counter | None:
        return self._counters.get(name)

    def __iter__(self) -> Iterator[Counter]:
        return iter(self._counters.values())

    def __len__(self) -> int:
        return len(self._counters)

    def __contains__(self, name: object) -> bool:
        return name in self._counters

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CounterGroup):
            return NotImplemented
        return (
            self.name == other.name
            and self.display_name == other.display_name
            and self._counters == other._counters
        )

    def __repr__(self) -> str:
        return f"CounterGroup(name={self.name!r}, counters={list(self._counters.values())!r})"


class CounterRegistry:
    """Two-level mapping: group name -> counter name -> value.

    Groups keep the order in which the service reported them. Equality is
    structural so registries parsed from equivalent documents compare equal.
    """

    def __init__(self) -> None:
        self._groups: dict[str, CounterGroup] = {}

    def add_group(self, name: str, display_name: str | None = None) -> CounterGroup:
        """Return the group with this name, creating it if needed."""
        group = self._groups.get(name)
        if group is None:
            group = CounterGroup(name, display_name)
            self._groups[name] = group
        return group

    def get_group(self, name: str) -> CounterGroup:
        """Return an existing group.

        Raises:
            KeyError: If no group with this name was reported
        """
        try:
            return self._groups[name]
        except KeyError:
            raise KeyError(f"Unknown counter group: {name}") from None

    def find_counter(self, group_name: str, counter_name: str) -> Counter | None:
        group = self._groups.get(group_name)
        if group is None:
            return None
        return group.find_counter(counter_name)

    def count_counters(self) -> int:
        """Total number of counters across all groups."""
        return sum(len(group) for group in self._groups.values())

    def merge(self, other: "CounterRegistry") -> None:
        """Add every counter of other into this registry, summing matching values."""
        for other_group in other:
            group = self.add_group(other_group.name, other_group.display_name)
            for other_counter in other_group:
                counter = group.find_counter(other_counter.name)
                if counter is None:
                    group.add_counter(other_counter.name, other_counter.display_name, other_counter.value)
                else:
                    counter.increment(other_counter.value)

    @property
    def group_names(self) -> list[str]:
        return list(self._groups)

    def __iter__(self) -> Iterator[CounterGroup]:
        return iter(self._groups.values())

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, name: object) -> bool:
        return name in self._groups

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CounterRegistry):
            return NotImplemented
        return self._groups == other._groups

    def __repr__(self) -> str:
        return f"CounterRegistry(groups={list(self._groups.values())!r})"
