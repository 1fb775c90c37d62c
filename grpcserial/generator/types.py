"""Descriptor model consumed by the stub generator."""

from dataclasses import dataclass, field

from dataclasses_json import DataClassJsonMixin


@dataclass
class MethodUnit(DataClassJsonMixin):
    """One RPC method.

    ``input_type`` and ``output_type`` are fully-qualified message references
    exactly as protoc supplies them, e.g. ``.greet.HelloRequest``.
    """

    name: str
    input_type: str
    output_type: str
    client_streaming: bool = False
    server_streaming: bool = False
    comment: str | None = None


@dataclass
class ServiceUnit(DataClassJsonMixin):
    """One service declaration."""

    name: str
    package: str | None = None
    methods: list[MethodUnit] = field(default_factory=list)
    comment: str | None = None

    @property
    def full_name(self) -> str:
        if self.package:
            return f"{self.package}.{self.name}"
        return self.name


@dataclass
class FileUnit(DataClassJsonMixin):
    """One compiled .proto file.

    ``go_package`` holds the raw ``option go_package`` value, if any.
    """

    name: str
    package: str | None = None
    go_package: str | None = None
    services: list[ServiceUnit] = field(default_factory=list)


@dataclass(frozen=True)
class MessageRef(DataClassJsonMixin):
    """A message type known to the descriptor pool."""

    full_name: str
    go_name: str
    file: str


@dataclass(frozen=True)
class ResolvedName:
    """A Go identifier plus the package alias it is reached through."""

    name: str
    alias: str = ""

    @property
    def qualified(self) -> str:
        if self.alias:
            return f"{self.alias}.{self.name}"
        return self.name
