"""Data model shared by the ingestor, renderer and batch orchestrator."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from PIL import Image

FONT_FAMILIES = (
    "Arial",
    "Times New Roman",
    "Helvetica",
    "Georgia",
    "Verdana",
    "Trebuchet MS",
    "Impact",
    "Comic Sans MS",
    "Courier New",
    "Palatino",
)

FONT_SIZE_MIN = 12
FONT_SIZE_MAX = 120


@dataclass(frozen=True, eq=False)
class TemplateImage:
    """Decoded certificate background. Only the dimensions matter for layout."""
    image: Image.Image
    width: int
    height: int
    format: Optional[str] = None

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height


@dataclass(frozen=True)
class NameEntry:
    name: str
    source_row: int  # 1-based row in the source sheet


@dataclass(frozen=True)
class Position:
    """Text anchor in template pixel space (center of the rendered name)."""
    x: float
    y: float


@dataclass(frozen=True)
class FontSettings:
    family: str = "Arial"
    size: float = 48
    color: str = "#000000"


@dataclass(frozen=True)
class RenderJob:
    """Everything needed to render one certificate. Jobs share no mutable state."""
    template: TemplateImage
    name: str
    position: Position
    font: FontSettings

    @property
    def template_width(self) -> int:
        return self.template.width

    @property
    def template_height(self) -> int:
        return self.template.height


@dataclass(frozen=True)
class RenderedCertificate:
    name: str
    filename: str
    data: bytes


@dataclass
class CertificateBatch:
    """Rendered documents of one generation run, in input order."""
    certificates: List[RenderedCertificate] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.certificates)

    def entries(self) -> List[Tuple[str, bytes]]:
        return [(cert.filename, cert.data) for cert in self.certificates]


@dataclass(frozen=True)
class GenerationRequest:
    """Immutable snapshot of the application state taken when a batch starts."""
    template: Optional[TemplateImage]
    names: Tuple[NameEntry, ...]
    position: Position
    font: FontSettings
