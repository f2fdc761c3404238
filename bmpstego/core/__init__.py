# bmpstego Core Module
# Pipelines and supporting services for BMP steganography
#
# This package provides:
# - BMP header geometry (bmp)
# - Capacity planning (capacity)
# - Secret/output file naming (naming)
# - Encode and decode pipelines (encoder, decoder)
# - Result-returning facade over both pipelines (manager)

from ..config import DEFAULT_CONFIG, StegoConfig
from ..errors import (
    ArgumentError,
    CorruptContainerError,
    EmptySecretFileError,
    EncodeError,
    ErrorKind,
    ExtensionTooLongError,
    FileOpenError,
    InsufficientCapacityError,
    InvalidInputError,
    NotSteganographicImageError,
    StegoError,
    StegoIOError,
    TruncatedReadError,
    TruncatedStegoImageError,
)
from .bmp import BmpGeometry, describe_image, read_geometry
from .capacity import CapacityReport, check_capacity, ensure_capacity, plan_capacity
from .decoder import DecodeSummary, decode_file
from .encoder import EncodeSummary, encode_file
from .manager import StegoManager, StegoResult
from .naming import resolve_output_name, secret_extension

__all__ = [
    # Configuration
    'DEFAULT_CONFIG',
    'StegoConfig',
    # Errors
    'ArgumentError',
    'CorruptContainerError',
    'EmptySecretFileError',
    'EncodeError',
    'ErrorKind',
    'ExtensionTooLongError',
    'FileOpenError',
    'InsufficientCapacityError',
    'InvalidInputError',
    'NotSteganographicImageError',
    'StegoError',
    'StegoIOError',
    'TruncatedReadError',
    'TruncatedStegoImageError',
    # Geometry and capacity
    'BmpGeometry',
    'describe_image',
    'read_geometry',
    'CapacityReport',
    'check_capacity',
    'ensure_capacity',
    'plan_capacity',
    # Naming
    'resolve_output_name',
    'secret_extension',
    # Pipelines
    'DecodeSummary',
    'decode_file',
    'EncodeSummary',
    'encode_file',
    'StegoManager',
    'StegoResult',
]
