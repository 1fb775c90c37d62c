"""Tests for the descriptor loader."""

import pytest
from google.protobuf.descriptor_pb2 import FileDescriptorProto

from grpcserial.generator.loader import DescriptorIndex, UnresolvedTypeError, load_file


def describe_load_file():
    def reads_services_in_declaration_order(expect, greeter_proto):
        unit = load_file(greeter_proto)
        expect(unit.name) == "greet.proto"
        expect(unit.package) == "greet"
        expect([s.name for s in unit.services]) == ["Greeter"]
        expect([m.name for m in unit.services[0].methods]) == ["Hello", "Goodbye"]
        expect(unit.services[0].methods[0].input_type) == ".greet.HelloRequest"

    def derives_full_service_name(expect, greeter_proto, make_proto):
        expect(load_file(greeter_proto).services[0].full_name) == "greet.Greeter"
        bare = make_proto("bare.proto", messages=["M"], services=[("Svc", [("Do", "M", "M")])])
        expect(load_file(bare).services[0].full_name) == "Svc"

    def reads_go_package_option(expect, make_proto):
        expect(load_file(make_proto("a.proto", go_package="a/b;c")).go_package) == "a/b;c"
        expect(load_file(make_proto("a.proto")).go_package) == None

    def reads_streaming_flags(expect, make_proto):
        proto = make_proto(
            "s.proto",
            package="s",
            messages=["M"],
            services=[("Svc", [("Watch", "M", "M", False, True), ("Chat", "M", "M", True, True)])],
        )
        methods = load_file(proto).services[0].methods
        expect((methods[0].client_streaming, methods[0].server_streaming)) == (False, True)
        expect((methods[1].client_streaming, methods[1].server_streaming)) == (True, True)

    def attaches_leading_comments(expect, make_proto):
        proto = make_proto(
            "c.proto",
            package="c",
            messages=["M"],
            services=[("Svc", [("Do", "M", "M")])],
            comments={(6, 0): " The service.\n", (6, 0, 2, 0): " Does it.\n"},
        )
        service = load_file(proto).services[0]
        expect(service.comment) == " The service.\n"
        expect(service.methods[0].comment) == " Does it.\n"

    def handles_files_without_services(expect):
        unit = load_file(FileDescriptorProto(name="empty.proto"))
        expect(unit.services) == []
        expect(unit.package) == None


def describe_descriptor_index():
    def indexes_messages_by_full_name(expect, greeter_index):
        ref = greeter_index.lookup(".greet.HelloRequest")
        expect(ref.go_name) == "HelloRequest"
        expect(ref.file) == "greet.proto"
        expect(greeter_index.lookup("greet.HelloRequest")) == ref

    def names_nested_messages(expect):
        proto = FileDescriptorProto(name="n.proto", package="n")
        outer = proto.message_type.add(name="Outer")
        outer.nested_type.add(name="Inner")
        index = DescriptorIndex.from_files([proto])
        expect(index.lookup(".n.Outer.Inner").go_name) == "Outer_Inner"

    def resolves_across_files(expect, make_proto):
        common = make_proto("common.proto", package="common", messages=["Empty"])
        api = make_proto(
            "api.proto",
            package="api",
            messages=["Req"],
            services=[("Api", [("Ping", "Req", ".common.Empty")])],
        )
        index = DescriptorIndex.from_files([common, api])
        ref = index.lookup(".common.Empty")
        expect(index.file_of(ref).name) == "common.proto"

    def raises_for_unknown_types(expect, greeter_index):
        with pytest.raises(UnresolvedTypeError, match="greet.Missing"):
            greeter_index.lookup(".greet.Missing")
