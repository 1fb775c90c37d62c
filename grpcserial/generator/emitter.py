"""Stub emission for a single RPC method."""

from jinja2 import Environment, PackageLoader

from .names import exported_name, local_name
from .types import MethodUnit, ResolvedName

# Scanned for by goprotopy; must stay byte-for-byte stable.
ANNOTATION_MARKER = "// @protopy"
MARKER_TOKEN = ANNOTATION_MARKER.removeprefix("// ")

env = Environment(
    loader=PackageLoader("grpcserial.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("stub.go.j2")


def comment_lines(comment: str | None, block: bool = False) -> list[str]:
    """Split a leading source comment into lines for ``//`` output.

    Marker tokens are broken up so the marker only ever precedes a stub
    declaration. With ``block`` set, ``*/`` is broken up as well since the
    text ends up inside a block comment.
    """
    if not comment:
        return []
    lines = comment.removesuffix("\n").split("\n")
    lines = [line.replace(MARKER_TOKEN, "@ protopy") for line in lines]
    if block:
        lines = [line.replace("*/", "* /") for line in lines]
    return lines


def render_stub(
    method: MethodUnit,
    input_type: ResolvedName,
    output_type: ResolvedName,
    name: str | None = None,
    block: bool = False,
) -> str:
    """Render the serialized stub for ``method``.

    ``name`` overrides the exported function name; the driver uses it to
    keep names unique within a file.
    """
    taken: set[str] = {a for a in (input_type.alias, output_type.alias) if a}
    in_var = local_name(input_type.name, taken)
    out_var = local_name(output_type.name, taken)

    return template.render(
        comments=comment_lines(method.comment, block=block),
        name=name or exported_name(method.name),
        input=input_type.qualified,
        output=output_type.qualified,
        in_var=in_var,
        out_var=out_var,
        marker=ANNOTATION_MARKER,
    )
