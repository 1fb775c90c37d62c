"""Generator host: drives registered plugins over a CodeGeneratorRequest."""

import posixpath
from collections.abc import Callable, Iterable

from google.protobuf.compiler.plugin_pb2 import CodeGeneratorRequest, CodeGeneratorResponse

from .emitter import env
from .loader import DescriptorIndex
from .names import clean_package_name
from .options import GeneratorOptions, OptionsError
from .packages import UniqueNames, go_package_name
from .plugin import Plugin, SerialPlugin
from .types import FileUnit

PROTO_PKG_PATH = "github.com/golang/protobuf/proto"
OUTPUT_SUFFIX = ".grpcserial.pb.go"

PLUGINS: dict[str, Callable[[], Plugin]] = {
    "grpcserial": SerialPlugin,
}

file_template = env.get_template("file.go.j2")


def select_plugins(names: Iterable[str]) -> list[Plugin]:
    """Instantiate the named plugins, in the order given."""
    plugins: list[Plugin] = []
    for name in names:
        if name not in PLUGINS:
            known = ", ".join(sorted(PLUGINS))
            raise OptionsError(f"unknown plugin {name!r} (available: {known})")
        plugins.append(PLUGINS[name]())
    return plugins


def output_name(proto_name: str) -> str:
    return proto_name.removesuffix(".proto") + OUTPUT_SUFFIX


class Generator:
    """Holds the state shared by plugins during one protoc invocation.

    Plugins write generated text through :meth:`write`; the host collects
    it per file and wraps it with the package clause and base imports.
    """

    def __init__(
        self, options: GeneratorOptions | None = None, plugins: Iterable[Plugin] | None = None
    ) -> None:
        self.options = options or GeneratorOptions()
        self.package_names = UniqueNames()
        self.proto_pkg = self.package_names.register("proto")
        self.index = DescriptorIndex()
        self._buf: list[str] = []

        if plugins is None:
            plugins = select_plugins(self.options.plugins)
        self.plugins = list(plugins)
        for plugin in self.plugins:
            plugin.init(self)

    def write(self, text: str) -> None:
        self._buf.append(text)

    def _capture(self, call: Callable[[Plugin], None]) -> str:
        self._buf = []
        for plugin in self.plugins:
            call(plugin)
        text = "".join(self._buf)
        self._buf = []
        return text

    def generate_file(self, file: FileUnit) -> str | None:
        """Generated Go source for ``file``, or None if no plugin had output."""
        body = self._capture(lambda plugin: plugin.generate(file))
        imports = self._capture(lambda plugin: plugin.generate_imports(file))
        if not body and not imports:
            return None

        package, _ = go_package_name(file)
        return file_template.render(
            source=file.name,
            package=clean_package_name(package),
            proto=self.proto_pkg,
            proto_path=posixpath.join(self.options.import_prefix, PROTO_PKG_PATH),
            imports=imports,
            body=body.rstrip("\n"),
        )

    def run(self, request: CodeGeneratorRequest) -> CodeGeneratorResponse:
        """Generate every requested file.

        Any failure yields a response carrying only the error, which makes
        protoc abort without writing partial output.
        """
        response = CodeGeneratorResponse()
        try:
            self.index = DescriptorIndex.from_files(request.proto_file)
            for name in request.file_to_generate:
                if name not in self.index.files:
                    raise LookupError(f"file not found in request: {name}")
                content = self.generate_file(self.index.files[name])
                if content is not None:
                    response.file.add(name=output_name(name), content=content)
        except (LookupError, OptionsError) as e:
            return CodeGeneratorResponse(error=str(e))
        return response


def generate(request: CodeGeneratorRequest) -> CodeGeneratorResponse:
    """Handle a complete protoc plugin request."""
    try:
        options = GeneratorOptions.from_parameter(request.parameter)
        gen = Generator(options)
    except OptionsError as e:
        return CodeGeneratorResponse(error=str(e))
    return gen.run(request)
