"""The grpcserial plugin, as seen by the generator host."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from .driver import ServiceDriver, SupportPackages

if TYPE_CHECKING:
    from .host import Generator
    from .types import FileUnit


class Plugin(Protocol):
    """Capabilities the host expects from a registered plugin."""

    def name(self) -> str: ...

    def init(self, gen: Generator) -> None: ...

    def generate(self, file: FileUnit) -> None: ...

    def generate_imports(self, file: FileUnit) -> None: ...


class SerialPlugin:
    """Generates byte-serialized stubs for every service method."""

    def __init__(self) -> None:
        self.gen: Generator | None = None
        self.driver = ServiceDriver()

    def name(self) -> str:
        return "grpcserial"

    def init(self, gen: Generator) -> None:
        self.gen = gen
        support = SupportPackages(
            context=gen.package_names.register("context"),
            grpc=gen.package_names.register("grpc"),
            import_prefix=gen.options.import_prefix,
        )
        self.driver = ServiceDriver(gen.options.mode, support, gen.package_names)

    def _host(self) -> Generator:
        if self.gen is None:
            raise RuntimeError("plugin used before init()")
        return self.gen

    def generate(self, file: FileUnit) -> None:
        gen = self._host()
        gen.write(self.driver.generate(file, gen.index))

    def generate_imports(self, file: FileUnit) -> None:
        gen = self._host()
        gen.write(self.driver.generate_imports(file, gen.index))
