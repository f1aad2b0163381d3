"""Batch generation: one PDF per name, packaged into one archive."""

import logging
import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Callable, List, Optional, Sequence

from .archive import build_archive, sanitize_filename
from .config import GeneratorConfig
from .errors import BatchCancelledError, PreconditionError, RenderError
from .models import (
    CertificateBatch,
    FontSettings,
    GenerationRequest,
    NameEntry,
    Position,
    RenderedCertificate,
    RenderJob,
    TemplateImage,
)
from .renderer import render_certificate

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def check_ready(request: GenerationRequest):
    """Raise PreconditionError unless the request has a usable template and names."""
    template = request.template
    if template is None or template.width <= 0 or template.height <= 0:
        raise PreconditionError("Please upload a certificate template before generating")
    if not request.names:
        raise PreconditionError("Please upload a names list before generating")


def can_generate(request: GenerationRequest) -> bool:
    try:
        check_ready(request)
    except PreconditionError:
        return False
    return True


class CertificateGenerator:
    """
    Renders every name of a GenerationRequest and zips the results.

    Rendering is fail-fast: the first RenderError stops the batch and no
    archive is produced. With max_workers > 1 jobs run on a thread pool;
    the output order always follows the input names.
    """

    def __init__(self, request: GenerationRequest, config: Optional[GeneratorConfig] = None):
        check_ready(request)
        self.request = request
        self.config = config or GeneratorConfig()

    def _jobs(self) -> List[RenderJob]:
        return [
            RenderJob(
                template=self.request.template,
                name=entry.name,
                position=self.request.position,
                font=self.request.font,
            )
            for entry in self.request.names
        ]

    def _render(self, job: RenderJob) -> RenderedCertificate:
        data = render_certificate(job, self.config)
        return RenderedCertificate(name=job.name, filename=sanitize_filename(job.name), data=data)

    def _render_sequential(self, jobs, progress, cancel) -> List[RenderedCertificate]:
        results = []
        for idx, job in enumerate(jobs, 1):
            if cancel is not None and cancel.is_set():
                raise BatchCancelledError(f"Cancelled after {idx - 1} of {len(jobs)} certificates")
            results.append(self._render(job))
            if progress is not None:
                progress(idx, len(jobs))
        return results

    def _render_parallel(self, jobs, progress, cancel) -> List[RenderedCertificate]:
        total = len(jobs)
        results: List[Optional[RenderedCertificate]] = [None] * total
        executor = ThreadPoolExecutor(max_workers=self.config.max_workers)
        try:
            futures = {executor.submit(self._render, job): idx for idx, job in enumerate(jobs)}
            pending = set(futures)
            completed = 0
            while pending:
                if cancel is not None and cancel.is_set():
                    raise BatchCancelledError(f"Cancelled after {completed} of {total} certificates")
                done, pending = wait(pending, timeout=0.1, return_when=FIRST_EXCEPTION)
                for future in sorted(done, key=futures.get):
                    # raises the job's RenderError; remaining results are dropped
                    results[futures[future]] = future.result()
                    completed += 1
                    if progress is not None:
                        progress(completed, total)
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
        return results

    def render_all(
        self,
        progress: Optional[ProgressCallback] = None,
        cancel: Optional[threading.Event] = None,
    ) -> CertificateBatch:
        """Render all certificates in input order."""
        jobs = self._jobs()
        logger.info("Generating %d certificates", len(jobs))
        try:
            if self.config.max_workers > 1 and len(jobs) > 1:
                certificates = self._render_parallel(jobs, progress, cancel)
            else:
                certificates = self._render_sequential(jobs, progress, cancel)
        except RenderError as e:
            logger.error("Batch aborted: %s", e)
            raise
        return CertificateBatch(certificates)

    def generate(
        self,
        progress: Optional[ProgressCallback] = None,
        cancel: Optional[threading.Event] = None,
    ) -> bytes:
        """Render all certificates and return the zip archive bytes."""
        batch = self.render_all(progress, cancel)
        archive = build_archive(batch.entries())
        logger.info("Generated %d certificates (%d bytes)", len(batch), len(archive))
        return archive


def generate_certificates(
    template: Optional[TemplateImage],
    names: Sequence[NameEntry],
    position: Position,
    font: FontSettings,
    progress: Optional[ProgressCallback] = None,
    config: Optional[GeneratorConfig] = None,
    cancel: Optional[threading.Event] = None,
) -> bytes:
    """Generate one PDF per name and return them zipped, in name order.

    Args:
        template: Loaded template; None fails with PreconditionError
        names: Names to render, at least one
        position: Anchor for the name center, in template pixels
        font: Font family, size in template pixels and color
        progress: Optional callback receiving (completed, total) after each job
        config: Generator options, defaults to GeneratorConfig()
        cancel: Optional event that stops the batch when set

    Returns:
        Zip archive bytes with one {sanitized_name}.pdf entry per name
    """
    request = GenerationRequest(
        template=template,
        names=tuple(names),
        position=position,
        font=font,
    )
    return CertificateGenerator(request, config).generate(progress, cancel)
