## minicalc — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Iterator, Mapping
from dataclasses import dataclass, field

from .errors import CalcNameError


@dataclass
class Environment:
    """Flat global namespace of one run: first write creates, later writes overwrite."""
    values: dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        # Copy so a seed mapping is never shared between runs.
        self.values = {name: float(value) for name, value in self.values.items()}

    @classmethod
    def from_mapping(cls, values: Mapping[str, float] | None = None) -> "Environment":
        return cls(dict(values or {}))

    def get(self, name: str) -> float:
        try:
            return self.values[name]
        except KeyError:
            raise CalcNameError(f"Undefined variable `{name}`.", name=name) from None

    def set(self, name: str, value: float) -> None:
        self.values[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def items(self):
        return self.values.items()

    def as_dict(self) -> dict[str, float]:
        return dict(self.values)

    def clear(self) -> None:
        self.values.clear()
