"""
certbatch - batch certificate generation.

Place one name on a template image for every row of a spreadsheet and get
back a zip of single-page A4 PDFs.
"""

from .archive import build_archive, sanitize_filename, save_archive
from .batch import CertificateGenerator, can_generate, generate_certificates
from .config import GeneratorConfig
from .errors import (
    BatchCancelledError,
    CertificateError,
    DecodeError,
    InvalidDimensionsError,
    PackageError,
    ParseError,
    PreconditionError,
    RenderError,
)
from .models import (
    FONT_FAMILIES,
    FONT_SIZE_MAX,
    FONT_SIZE_MIN,
    CertificateBatch,
    FontSettings,
    GenerationRequest,
    NameEntry,
    Position,
    RenderJob,
    TemplateImage,
)
from .names import parse_names
from .position import clamp_position, default_position, move_position
from .renderer import SUPERSAMPLE, render_certificate
from .session import CertificateSession
from .template import TemplateLoader, decode_template, suggest_font_color

__version__ = "0.2.0"

__all__ = [
    "BatchCancelledError",
    "CertificateBatch",
    "CertificateError",
    "CertificateGenerator",
    "CertificateSession",
    "DecodeError",
    "FONT_FAMILIES",
    "FONT_SIZE_MAX",
    "FONT_SIZE_MIN",
    "FontSettings",
    "GenerationRequest",
    "GeneratorConfig",
    "InvalidDimensionsError",
    "NameEntry",
    "PackageError",
    "ParseError",
    "Position",
    "PreconditionError",
    "RenderError",
    "RenderJob",
    "SUPERSAMPLE",
    "TemplateImage",
    "TemplateLoader",
    "build_archive",
    "can_generate",
    "clamp_position",
    "decode_template",
    "default_position",
    "generate_certificates",
    "move_position",
    "parse_names",
    "render_certificate",
    "sanitize_filename",
    "save_archive",
    "suggest_font_color",
]
