"""grpcserial stub generator."""

from .driver import EmissionMode as EmissionMode
from .driver import ServiceDriver as ServiceDriver
from .emitter import ANNOTATION_MARKER as ANNOTATION_MARKER
from .host import Generator as Generator
from .host import generate as generate
from .loader import DescriptorIndex as DescriptorIndex
from .loader import UnresolvedTypeError as UnresolvedTypeError
from .options import GeneratorOptions as GeneratorOptions
from .options import OptionsError as OptionsError
from .plugin import SerialPlugin as SerialPlugin
from .types import *
