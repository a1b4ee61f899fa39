import logging

from .config import get_settings
from . import api
from .api import (
    ConversionOptions,
    ConversionOutcome,
    ConversionResult,
    DEFAULT_OPTIONS,
    convert,
    try_convert,
)
from .converter import Converter, ConverterOptions, ConverterResult
from .errors import G4VGError, RuntimeErrorDetails, build_runtime_error_msg
from .naming import make_gdml_name
from .opaque_id import OpaqueId, VolumeId
from .soft_equal import SoftEqual, soft_equal

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())
if get_settings().log_level is not None:
    _LOGGER.setLevel(get_settings().log_level)

__all__ = [
    "api",
    "convert",
    "try_convert",
    "ConversionOptions",
    "ConversionOutcome",
    "ConversionResult",
    "DEFAULT_OPTIONS",
    "Converter",
    "ConverterOptions",
    "ConverterResult",
    "G4VGError",
    "RuntimeErrorDetails",
    "build_runtime_error_msg",
    "make_gdml_name",
    "OpaqueId",
    "VolumeId",
    "SoftEqual",
    "soft_equal",
]
