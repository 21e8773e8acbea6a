"""
Copyright (c) 2025. All rights reserved.
"""

"""
Case registry.

Central registry mapping case names to the callables that run them. Names are
kept in ordinal order, so iteration is deterministic and a name whose group
starts with ``~`` sorts after every alphanumeric group.
"""

import fnmatch
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List

from lib.configs import HarnessConfig
from nn_harness.expect import DuplicateCaseError

CaseFn = Callable[[HarnessConfig], None]


@dataclass(frozen=True)
class Case:
    """A named, runnable check."""

    name: str
    fn: CaseFn

    def __call__(self, config: HarnessConfig) -> None:
        self.fn(config)


class CaseRegistry:
    """Ordered collection of uniquely named cases."""

    def __init__(self) -> None:
        self._cases: Dict[str, Case] = {}

    def add(self, name: str, fn: CaseFn) -> Case:
        """Register ``fn`` under ``name``.

        Raises:
            DuplicateCaseError: If ``name`` is already registered
        """
        if name in self._cases:
            raise DuplicateCaseError(f"Case already registered: {name}")
        case = Case(name=name, fn=fn)
        self._cases[name] = case
        return case

    def register(self, name: str) -> Callable[[CaseFn], CaseFn]:
        """Decorator form of add; returns the function unchanged."""

        def decorator(fn: CaseFn) -> CaseFn:
            self.add(name, fn)
            return fn

        return decorator

    def names(self) -> List[str]:
        return sorted(self._cases)

    def select(self, pattern: str) -> "CaseRegistry":
        """New registry holding the cases whose name matches a shell-style ``pattern``."""
        selected = CaseRegistry()
        for name in self.names():
            if fnmatch.fnmatchcase(name, pattern):
                selected._cases[name] = self._cases[name]
        return selected

    def __getitem__(self, name: str) -> Case:
        return self._cases[name]

    def __contains__(self, name: object) -> bool:
        return name in self._cases

    def __len__(self) -> int:
        return len(self._cases)

    def __iter__(self) -> Iterator[Case]:
        for name in self.names():
            yield self._cases[name]
