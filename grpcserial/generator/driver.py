"""Per-file orchestration of stub emission."""

import posixpath
from dataclasses import dataclass
from enum import StrEnum, auto

from .emitter import comment_lines, env, render_stub
from .loader import DescriptorIndex
from .names import GO_KEYWORDS, STUB_LOCALS, camel_case, exported_name
from .packages import AliasRegistry, UniqueNames, go_package_name, import_path
from .types import FileUnit, MethodUnit, ResolvedName, ServiceUnit

# Bumped whenever generated code needs a newer grpc package.
GENERATED_CODE_VERSION = 4

CONTEXT_PKG_PATH = "golang.org/x/net/context"
GRPC_PKG_PATH = "google.golang.org/grpc"


class EmissionMode(StrEnum):
    """How stub blocks are wrapped in the generated file."""

    ANNOTATED = auto()  # Inert example code inside a block comment
    FULL = auto()  # Live stubs in the generated package


# Alias the file's own package is imported under, per mode
LOCAL_ALIAS = {
    EmissionMode.ANNOTATED: "pb",
    EmissionMode.FULL: "",
}

preamble_template = env.get_template("preamble.go.j2")
imports_template = env.get_template("imports.go.j2")
service_templates = {
    EmissionMode.ANNOTATED: env.get_template("service_annotated.go.j2"),
    EmissionMode.FULL: env.get_template("service_full.go.j2"),
}


@dataclass(frozen=True)
class SupportPackages:
    """Aliases the host assigned to the packages every generated file uses."""

    context: str = "context"
    grpc: str = "grpc"
    import_prefix: str = ""

    def imports(self) -> list[tuple[str, str]]:
        return [
            (self.context, posixpath.join(self.import_prefix, CONTEXT_PKG_PATH)),
            (self.grpc, posixpath.join(self.import_prefix, GRPC_PKG_PATH)),
        ]


class ServiceDriver:
    """Emit stubs for every service of a file in the configured mode.

    ``names`` is the host-wide package name registry; aliases minted per file
    never reuse a name it holds.
    """

    def __init__(
        self,
        mode: EmissionMode = EmissionMode.ANNOTATED,
        support: SupportPackages | None = None,
        names: UniqueNames | None = None,
    ) -> None:
        self.mode = mode
        self.support = support or SupportPackages()
        self.names = names

    def _registry(self, file: FileUnit) -> AliasRegistry:
        reserved = set(GO_KEYWORDS | STUB_LOCALS)
        if self.names is not None:
            reserved |= self.names.in_use()
        return AliasRegistry(import_path(file), LOCAL_ALIAS[self.mode], reserved)

    def _import(self, path: str) -> str:
        return posixpath.join(self.support.import_prefix, path)

    def _resolve(
        self, type_name: str, index: DescriptorIndex, registry: AliasRegistry
    ) -> tuple[ResolvedName, str]:
        ref = index.lookup(type_name)
        owner = index.file_of(ref)
        path = import_path(owner)
        alias = registry.alias_for(path, go_package_name(owner)[0])
        return ResolvedName(ref.go_name, alias), path

    def _stub(
        self,
        method: MethodUnit,
        index: DescriptorIndex,
        registry: AliasRegistry,
        used: dict[str, str],
        func_names: set[str],
    ) -> str:
        input_type, input_path = self._resolve(method.input_type, index, registry)
        output_type, output_path = self._resolve(method.output_type, index, registry)
        for resolved, path in ((input_type, input_path), (output_type, output_path)):
            if resolved.alias:
                used.setdefault(path, resolved.alias)

        name = exported_name(method.name)
        if self.mode == EmissionMode.FULL:
            # Stubs of all services share one Go package
            while name in func_names:
                name += "_"
            func_names.add(name)

        return render_stub(
            method, input_type, output_type, name=name, block=self.mode == EmissionMode.ANNOTATED
        )

    def _service(
        self,
        service: ServiceUnit,
        index: DescriptorIndex,
        registry: AliasRegistry,
        func_names: set[str],
    ) -> str:
        used: dict[str, str] = {}
        stubs = [self._stub(m, index, registry, used, func_names) for m in service.methods]
        return service_templates[self.mode].render(
            name=camel_case(service.name),
            full_name=service.full_name,
            comments=comment_lines(service.comment),
            imports=[(alias, self._import(path)) for path, alias in used.items()],
            stubs=stubs,
        )

    def generate(self, file: FileUnit, index: DescriptorIndex) -> str:
        """Body text for ``file``; empty when it declares no services."""
        if not file.services:
            return ""

        registry = self._registry(file)
        # Messages of the same Go package are declared beside the stubs
        local_path = import_path(file)
        func_names = {
            ref.go_name
            for ref in index.messages.values()
            if import_path(index.file_of(ref)) == local_path
        }
        parts = [
            preamble_template.render(
                context=self.support.context,
                grpc=self.support.grpc,
                version=GENERATED_CODE_VERSION,
            )
        ]
        for service in file.services:
            parts.append(self._service(service, index, registry, func_names))
        return "".join(parts)

    def generate_imports(self, file: FileUnit, index: DescriptorIndex) -> str:
        """Import block for ``file``; empty when it declares no services."""
        if not file.services:
            return ""

        imports = self.support.imports()
        if self.mode == EmissionMode.FULL:
            registry = self._registry(file)
            for service in file.services:
                for method in service.methods:
                    self._resolve(method.input_type, index, registry)
                    self._resolve(method.output_type, index, registry)
            imports += [(alias, self._import(path)) for alias, path in registry.foreign_imports()]

        return imports_template.render(imports=imports)
