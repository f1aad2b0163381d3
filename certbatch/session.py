"""Mutable application state behind an interactive certificate editor."""

import threading
from dataclasses import replace
from typing import List, Optional

from .batch import ProgressCallback, can_generate, generate_certificates
from .config import GeneratorConfig
from .models import FontSettings, GenerationRequest, NameEntry, Position, TemplateImage
from .names import NameSource, parse_names
from .position import clamp_position, default_position, move_position
from .template import TemplateLoader


DEFAULT_POSITION = Position(400, 300)


class CertificateSession:
    """
    Template, names, anchor position and font chosen by the user.

    Failed uploads leave the previous template or names in place. generate()
    works on a snapshot, so later edits never reach a running batch.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self.loader = TemplateLoader()
        self.names: List[NameEntry] = []
        self.position = DEFAULT_POSITION
        self.font = FontSettings()
        self._lock = threading.Lock()

    @property
    def template(self) -> Optional[TemplateImage]:
        return self.loader.current

    def upload_template(self, data: bytes) -> Optional[TemplateImage]:
        """Load a new template and recenter the anchor on it."""
        template = self.loader.load(data)
        if template is not None:
            with self._lock:
                self.position = default_position(template)
        return template

    def upload_names(self, source: NameSource) -> List[NameEntry]:
        names = parse_names(source)
        with self._lock:
            self.names = names
        return names

    def set_position(self, x: float, y: float, clamp: bool = True) -> Position:
        position = Position(x, y)
        template = self.template
        if clamp and template is not None:
            position = clamp_position(position, template)
        with self._lock:
            self.position = position
        return position

    def move_position(self, dx: float, dy: float, scale: float = 1.0) -> Position:
        template = self.template
        if template is None:
            return self.position
        with self._lock:
            self.position = move_position(self.position, dx, dy, template, scale)
            return self.position

    def reset_position(self) -> Position:
        template = self.template
        with self._lock:
            self.position = default_position(template) if template is not None else DEFAULT_POSITION
            return self.position

    def set_font(self, **changes) -> FontSettings:
        """Update font fields, e.g. set_font(size=60, color="#1a1a1a")."""
        with self._lock:
            self.font = replace(self.font, **changes)
            return self.font

    def snapshot(self) -> GenerationRequest:
        with self._lock:
            return GenerationRequest(
                template=self.loader.current,
                names=tuple(self.names),
                position=self.position,
                font=self.font,
            )

    def can_generate(self) -> bool:
        return can_generate(self.snapshot())

    def generate(
        self,
        progress: Optional[ProgressCallback] = None,
        cancel: Optional[threading.Event] = None,
    ) -> bytes:
        request = self.snapshot()
        return generate_certificates(
            request.template,
            request.names,
            request.position,
            request.font,
            progress=progress,
            config=self.config,
            cancel=cancel,
        )
