from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Optional


@dataclass(frozen=True)
class Spec:
    """Static description of a procedure, e.g. `/hello.v1.GreeterService/SayHello`."""

    procedure: str

    @property
    def service(self) -> str:
        return self.procedure.strip("/").split("/", 1)[0]

    @property
    def method(self) -> str:
        return self.procedure.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class UnaryRequest:
    spec: Spec
    message: Any
    headers: Mapping[str, str] = field(default_factory=dict)
    peer: Optional[str] = None
    # Deadline from the transport (seconds), carried through uninspected
    timeout: Optional[float] = None


UnaryFunc = Callable[[UnaryRequest], Awaitable[Any]]
