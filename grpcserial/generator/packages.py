"""Go package resolution and import alias bookkeeping."""

from collections.abc import Iterable

from .names import clean_package_name
from .types import FileUnit


def base_name(name: str) -> str:
    """Last path element of ``name`` with the last dotted suffix removed."""
    slash = name.rfind("/")
    if slash >= 0:
        name = name[slash + 1 :]
    dot = name.rfind(".")
    if dot >= 0:
        name = name[:dot]
    return name


def go_package_option(file: FileUnit) -> tuple[str, str, bool]:
    """Interpret the file's go_package option.

    Returns ``("", "", False)`` when there is no option, ``("", pkg, True)``
    for a bare name and ``(import_path, pkg, True)`` when the option implies
    an import path. The ``;name`` override is only honoured after a slash, so
    ``"foo;bar"`` comes back unchanged.
    """
    pkg = file.go_package or ""
    if not pkg:
        return "", "", False

    slash = pkg.rfind("/")
    if slash < 0:
        return "", pkg, True

    imp_path, pkg = pkg, pkg[slash + 1 :]
    semi = imp_path.find(";")
    if semi < 0:
        return imp_path, pkg, True
    return imp_path[:semi], imp_path[semi + 1 :], True


def go_package_name(file: FileUnit) -> tuple[str, bool]:
    """Go package name for the file and whether it came from go_package.

    Precedence: the go_package option, then the proto package clause, then
    the base name of the file.
    """
    _, pkg, ok = go_package_option(file)
    if ok:
        return pkg, True
    if file.package:
        return file.package, False
    return base_name(file.name), False


def import_path(file: FileUnit) -> str:
    """Import path the file's generated Go package is reached through."""
    imp_path, _, _ = go_package_option(file)
    if imp_path:
        return imp_path
    return go_package_name(file)[0]


class UniqueNames:
    """Registry handing out package names that are not yet in use."""

    def __init__(self, taken: Iterable[str] = ()) -> None:
        self._in_use: set[str] = set(taken)

    def register(self, desired: str) -> str:
        """Reserve ``desired`` (cleaned), appending 1, 2, ... on collision."""
        name = orig = clean_package_name(desired)
        i = 1
        while name in self._in_use:
            name = f"{orig}{i}"
            i += 1
        self._in_use.add(name)
        return name

    def in_use(self) -> frozenset[str]:
        return frozenset(self._in_use)

    def __contains__(self, name: object) -> bool:
        return name in self._in_use


class AliasRegistry:
    """Per-file mapping of import paths to unique package aliases.

    The file's own package is reached through ``local_alias``; an empty
    alias means types are referenced unqualified. Every other import path
    gets its cleaned package name, made unique against ``reserved`` and the
    aliases handed out so far.
    """

    def __init__(self, local_path: str, local_alias: str, reserved: Iterable[str] = ()) -> None:
        self._names = UniqueNames(reserved)
        self._local_path = local_path
        self._aliases: dict[str, str] = {}
        if local_alias:
            self._aliases[local_path] = self._names.register(local_alias)
        else:
            self._aliases[local_path] = ""

    def alias_for(self, path: str, package: str) -> str:
        if path not in self._aliases:
            self._aliases[path] = self._names.register(package)
        return self._aliases[path]

    def foreign_imports(self) -> list[tuple[str, str]]:
        """(alias, path) for every package other than the local one, in first-use order."""
        return [(alias, path) for path, alias in self._aliases.items() if path != self._local_path]
