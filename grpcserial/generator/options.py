"""Generator options from the protoc parameter string."""

from dataclasses import dataclass, field

from .driver import EmissionMode

DEFAULT_PLUGINS = ("grpcserial",)


class OptionsError(ValueError):
    """Raised for parameters the generator cannot honour."""


@dataclass
class GeneratorOptions:
    """Settings passed with ``--grpcserial_opt`` or ``--grpcserial_out=<params>:dir``.

    Keys other than the ones below are kept in ``params`` for plugins.
    """

    plugins: list[str] = field(default_factory=lambda: list(DEFAULT_PLUGINS))
    import_prefix: str = ""
    mode: EmissionMode = EmissionMode.ANNOTATED
    params: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_parameter(cls, parameter: str) -> "GeneratorOptions":
        """Parse ``key=value`` pairs separated by commas.

        ``plugins`` takes a ``+``-separated list of plugin names.
        """
        options = cls()
        for chunk in parameter.split(","):
            if not chunk:
                continue
            key, _, value = chunk.partition("=")
            key = key.strip()
            value = value.strip()
            if key == "plugins":
                options.plugins = [p for p in value.split("+") if p]
            elif key == "import_prefix":
                options.import_prefix = value
            elif key == "mode":
                options.mode = parse_mode(value)
            elif key:
                options.params[key] = value
        return options

    def to_parameter(self) -> str:
        """Inverse of from_parameter."""
        pairs = [f"plugins={'+'.join(self.plugins)}", f"mode={self.mode}"]
        if self.import_prefix:
            pairs.append(f"import_prefix={self.import_prefix}")
        pairs += [f"{k}={v}" for k, v in self.params.items()]
        return ",".join(pairs)


def parse_mode(value: str) -> EmissionMode:
    try:
        return EmissionMode(value)
    except ValueError:
        choices = ", ".join(m.value for m in EmissionMode)
        raise OptionsError(f"unknown mode {value!r} (expected one of: {choices})") from None
