"""
Single certificate rendering.

A certificate is drawn on a raster SUPERSAMPLE times larger than the
template, flattened to JPEG and placed as the only page of an A4 PDF.
All coordinates passed in are template pixels.
"""

import io
import logging
from typing import Tuple

from PIL import Image, ImageColor, ImageDraw, ImageFilter, ImageFont
from reportlab.lib.pagesizes import A4, landscape, portrait
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .config import PAGE_FIT_CONTAIN, PAGE_FIT_STRETCH, GeneratorConfig
from .errors import RenderError
from .models import FontSettings, Position, RenderJob, TemplateImage

logger = logging.getLogger(__name__)

SUPERSAMPLE = 3

# Shadow values are surface pixels and do not scale with SUPERSAMPLE
SHADOW_OPACITY = 0.3
SHADOW_BLUR = 2
SHADOW_OFFSET = (1, 1)

BACKGROUND = (255, 255, 255)


def load_font(family: str, size: float) -> ImageFont.FreeTypeFont:
    """Resolve a font family name or font file path at size pixels."""
    if size <= 0:
        raise ValueError(f"Font size must be positive, got {size}")
    try:
        return ImageFont.truetype(family, size)
    except OSError:
        logger.warning("Font %r not found, using the default font", family)
        return ImageFont.load_default(size)


def _page_size(width: int, height: int) -> Tuple[float, float]:
    return landscape(A4) if width > height else portrait(A4)


def compose_certificate(
    template: TemplateImage,
    name: str,
    position: Position,
    font: FontSettings,
) -> Image.Image:
    """Draw name onto a supersampled copy of the template and return the raster."""
    scale = SUPERSAMPLE
    size = (template.width * scale, template.height * scale)

    source = template.image.convert("RGBA").resize(size, Image.LANCZOS)
    surface = Image.new("RGB", size, BACKGROUND)
    surface.paste(source, (0, 0), source)

    text_font = load_font(font.family, font.size * scale)
    fill = ImageColor.getrgb(font.color)
    anchor_x = position.x * scale
    anchor_y = position.y * scale

    shadow = Image.new("L", size, 0)
    ImageDraw.Draw(shadow).text(
        (anchor_x + SHADOW_OFFSET[0], anchor_y + SHADOW_OFFSET[1]),
        name,
        font=text_font,
        fill=255,
        anchor="mm",
    )
    # canvas shadowBlur is twice the gaussian standard deviation
    shadow = shadow.filter(ImageFilter.GaussianBlur(SHADOW_BLUR / 2))
    shadow = shadow.point(lambda v: int(v * SHADOW_OPACITY))
    surface.paste((0, 0, 0), (0, 0, size[0], size[1]), shadow)

    ImageDraw.Draw(surface).text(
        (anchor_x, anchor_y), name, font=text_font, fill=fill[:3], anchor="mm"
    )
    return surface


def encode_jpeg(raster: Image.Image, quality: int = 100) -> bytes:
    buf = io.BytesIO()
    raster.save(buf, "JPEG", quality=quality)
    return buf.getvalue()


def build_pdf(jpeg: bytes, width: int, height: int, page_fit: str = PAGE_FIT_STRETCH) -> bytes:
    """Wrap a JPEG as the single page of an A4 document."""
    page_w, page_h = _page_size(width, height)
    if page_fit == PAGE_FIT_CONTAIN:
        ratio = min(page_w / width, page_h / height)
        draw_w, draw_h = width * ratio, height * ratio
    else:
        draw_w, draw_h = page_w, page_h
    x = (page_w - draw_w) / 2
    y = (page_h - draw_h) / 2

    buf = io.BytesIO()
    # invariant: no timestamps or random ids, identical input gives identical bytes
    pdf = canvas.Canvas(buf, pagesize=(page_w, page_h), invariant=1)
    pdf.drawImage(ImageReader(io.BytesIO(jpeg)), x, y, width=draw_w, height=draw_h)
    pdf.showPage()
    pdf.save()
    return buf.getvalue()


def render_certificate(job: RenderJob, config: GeneratorConfig = GeneratorConfig()) -> bytes:
    """Render one certificate to PDF bytes. Any failure is raised as RenderError."""
    try:
        raster = compose_certificate(job.template, job.name, job.position, job.font)
        jpeg = encode_jpeg(raster, config.jpeg_quality)
        data = build_pdf(jpeg, job.template_width, job.template_height, config.page_fit)
    except Exception as e:
        raise RenderError(job.name, e) from e
    logger.debug("Rendered certificate for %r (%d bytes)", job.name, len(data))
    return data
