"""Unit tests configuration file."""

import pytest
from google.protobuf.descriptor_pb2 import FileDescriptorProto

from grpcserial.generator.loader import DescriptorIndex


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


def build_proto(name, package=None, messages=(), services=(), go_package=None, comments=None):
    """Build a FileDescriptorProto.

    ``services`` is a list of (service_name, methods) where each method is
    (name, input, output) or (name, input, output, client_streaming,
    server_streaming). Bare input/output names are qualified with the file's
    package. ``comments`` maps location paths to leading comments.
    """
    proto = FileDescriptorProto(name=name)
    if package:
        proto.package = package
    if go_package is not None:
        proto.options.go_package = go_package

    for message in messages:
        proto.message_type.add(name=message)

    def qualify(type_name):
        if type_name.startswith("."):
            return type_name
        return f".{package}.{type_name}" if package else f".{type_name}"

    for service_name, methods in services:
        service = proto.service.add(name=service_name)
        for method in methods:
            method_name, input_type, output_type, *streaming = method
            client_streaming, server_streaming = streaming or (False, False)
            service.method.add(
                name=method_name,
                input_type=qualify(input_type),
                output_type=qualify(output_type),
                client_streaming=client_streaming,
                server_streaming=server_streaming,
            )

    for path, text in (comments or {}).items():
        proto.source_code_info.location.add(path=list(path), leading_comments=text)

    return proto


@pytest.fixture
def make_proto():
    return build_proto


@pytest.fixture
def greeter_proto():
    return build_proto(
        "greet.proto",
        package="greet",
        messages=["HelloRequest", "HelloResponse", "GoodbyeRequest", "GoodbyeResponse"],
        services=[
            (
                "Greeter",
                [
                    ("Hello", "HelloRequest", "HelloResponse"),
                    ("Goodbye", "GoodbyeRequest", "GoodbyeResponse"),
                ],
            )
        ],
    )


@pytest.fixture
def greeter_index(greeter_proto):
    return DescriptorIndex.from_files([greeter_proto])
