"""Identifier resolution for generated Go code."""

from collections.abc import Iterable

# Exported names that would shadow the proto runtime entry points or the
# method set of generated messages in the consuming package.
RESERVED_NAMES = frozenset(
    [
        "Descriptor",
        "Marshal",
        "ProtoMessage",
        "Reset",
        "String",
        "Unmarshal",
    ]
)

GO_KEYWORDS = frozenset(
    [
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
    ]
)

# Names bound inside every stub body
STUB_LOCALS = frozenset(["input", "output", "err", "proto"])


def _is_lower(c: str) -> bool:
    return "a" <= c <= "z"


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def camel_case(s: str) -> str:
    """Convert a proto identifier to an exported Go identifier.

    Underscores before a lowercase letter are word boundaries, as are digits:
    the letter following either starts a new capitalised word. A leading
    underscore becomes ``X`` so the result stays exported.
    """
    if not s:
        return ""

    out: list[str] = []
    i = 0
    if s[0] == "_":
        out.append("X")
        i = 1

    while i < len(s):
        c = s[i]
        nxt = s[i + 1] if i + 1 < len(s) else ""
        if c in "._" and _is_lower(nxt):
            i += 1
            continue
        if c == ".":
            out.append("_")
            i += 1
            continue
        if _is_digit(c):
            out.append(c)
            i += 1
            continue
        out.append(c.upper() if _is_lower(c) else c)
        i += 1
        while i < len(s) and _is_lower(s[i]):
            out.append(s[i])
            i += 1

    return "".join(out)


def camel_case_slice(elems: Iterable[str]) -> str:
    """Go name for a nested declaration path, e.g. ["Outer", "Inner"]."""
    return camel_case("_".join(elems))


def unexport(s: str) -> str:
    return s[:1].lower() + s[1:]


def exported_name(raw: str) -> str:
    """Exported stub identifier for a declared service or method name."""
    name = camel_case(raw)
    if name in RESERVED_NAMES:
        name += "_"
    return name


def private_name(raw: str) -> str:
    return unexport(camel_case(raw))


def local_name(type_name: str, taken: set[str]) -> str:
    """Pick a stub-local variable name for a value of ``type_name``.

    The chosen name is added to ``taken``.
    """
    name = unexport(type_name)
    while name in GO_KEYWORDS or name in STUB_LOCALS or name in taken:
        name += "_"
    taken.add(name)
    return name


def clean_package_name(name: str) -> str:
    """Make a package name usable as a Go identifier."""
    cleaned = "".join(c if c.isalnum() or c == "_" else "_" for c in name)
    if not cleaned or _is_digit(cleaned[0]):
        cleaned = "_" + cleaned
    return cleaned
