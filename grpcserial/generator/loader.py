"""Build the descriptor model from protoc's FileDescriptorProto messages."""

from collections.abc import Iterable, Sequence

from google.protobuf.descriptor_pb2 import DescriptorProto, FileDescriptorProto

from .names import camel_case_slice
from .types import FileUnit, MessageRef, MethodUnit, ServiceUnit

# Field numbers used in SourceCodeInfo location paths
_SERVICE_FIELD = 6  # FileDescriptorProto.service
_METHOD_FIELD = 2  # ServiceDescriptorProto.method


class UnresolvedTypeError(LookupError):
    """Raised when a method references a message the pool does not know."""


def _comments(proto: FileDescriptorProto) -> dict[tuple[int, ...], str]:
    result: dict[tuple[int, ...], str] = {}
    for location in proto.source_code_info.location:
        if location.leading_comments:
            result[tuple(location.path)] = location.leading_comments
    return result


def _walk_messages(
    messages: Iterable[DescriptorProto], prefix: Sequence[str]
) -> Iterable[tuple[list[str], DescriptorProto]]:
    for message in messages:
        path = [*prefix, message.name]
        yield path, message
        yield from _walk_messages(message.nested_type, path)


def load_file(proto: FileDescriptorProto) -> FileUnit:
    """Convert one FileDescriptorProto into a FileUnit."""
    comments = _comments(proto)
    package = proto.package or None
    services: list[ServiceUnit] = []

    for si, service in enumerate(proto.service):
        methods = [
            MethodUnit(
                name=method.name,
                input_type=method.input_type,
                output_type=method.output_type,
                client_streaming=method.client_streaming,
                server_streaming=method.server_streaming,
                comment=comments.get((_SERVICE_FIELD, si, _METHOD_FIELD, mi)),
            )
            for mi, method in enumerate(service.method)
        ]
        services.append(
            ServiceUnit(
                name=service.name,
                package=package,
                methods=methods,
                comment=comments.get((_SERVICE_FIELD, si)),
            )
        )

    go_package = None
    if proto.HasField("options") and proto.options.HasField("go_package"):
        go_package = proto.options.go_package

    return FileUnit(name=proto.name, package=package, go_package=go_package, services=services)


class DescriptorIndex:
    """Every file and message handed to the plugin, keyed by name."""

    def __init__(self) -> None:
        self.files: dict[str, FileUnit] = {}
        self.messages: dict[str, MessageRef] = {}

    @classmethod
    def from_files(cls, protos: Iterable[FileDescriptorProto]) -> "DescriptorIndex":
        index = cls()
        for proto in protos:
            index.add(proto)
        return index

    def add(self, proto: FileDescriptorProto) -> FileUnit:
        unit = load_file(proto)
        self.files[proto.name] = unit
        for path, _ in _walk_messages(proto.message_type, []):
            full_name = ".".join([proto.package, *path]) if proto.package else ".".join(path)
            self.messages[full_name] = MessageRef(
                full_name=full_name, go_name=camel_case_slice(path), file=proto.name
            )
        return unit

    def lookup(self, type_name: str) -> MessageRef:
        """Find a message by its (optionally dot-prefixed) fully-qualified name."""
        try:
            return self.messages[type_name.lstrip(".")]
        except KeyError:
            raise UnresolvedTypeError(f"can't find object with type {type_name}") from None

    def file_of(self, ref: MessageRef) -> FileUnit:
        return self.files[ref.file]
