"""Generator settings."""

from dataclasses import dataclass

PAGE_FIT_STRETCH = "stretch"
PAGE_FIT_CONTAIN = "contain"
PAGE_FITS = (PAGE_FIT_STRETCH, PAGE_FIT_CONTAIN)

DEFAULT_ARCHIVE_NAME = "certificates.zip"


@dataclass(frozen=True)
class GeneratorConfig:
    """
    Options for a generation run.

    page_fit controls how the rendered raster is placed on the A4 page:
    "stretch" fills the whole page whatever the template's aspect ratio,
    "contain" keeps the aspect ratio and centers the image.
    """
    page_fit: str = PAGE_FIT_STRETCH
    jpeg_quality: int = 100
    max_workers: int = 1
    archive_name: str = DEFAULT_ARCHIVE_NAME

    def __post_init__(self):
        if self.page_fit not in PAGE_FITS:
            raise ValueError(f"page_fit must be one of {PAGE_FITS}, got {self.page_fit!r}")
        if not 1 <= self.jpeg_quality <= 100:
            raise ValueError(f"jpeg_quality must be between 1 and 100, got {self.jpeg_quality}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
        if not self.archive_name:
            raise ValueError("archive_name must not be empty")
