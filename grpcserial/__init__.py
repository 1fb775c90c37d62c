"""grpcserial - protoc plugin emitting byte-serialized Go stubs for gRPC services."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("grpcserial")
except PackageNotFoundError:
    __version__ = "(local)"
