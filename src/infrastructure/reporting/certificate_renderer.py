"""PDF certificate renderer writing files to the local upload directory."""

import asyncio
import secrets
from datetime import datetime
from pathlib import Path
from typing import Optional

from application.interfaces import ICertificateRenderer, RenderError
from domain.entities import ApplicationRecord
from infrastructure.config import get_logger
from infrastructure.reporting.pdf_generator import CertificatePDFGenerator


class PDFCertificateRenderer(ICertificateRenderer):
    """
    Render certificates with reportlab.

    Every render writes a new file, so the reference changes on each
    regeneration. Older files stay on disk until ``discard`` is called for
    them.
    """

    def __init__(
        self,
        output_dir: str,
        url_prefix: str,
        generator: Optional[CertificatePDFGenerator] = None,
        issuer: str = "Nikah Registry",
    ):
        self.output_dir = Path(output_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.generator = generator or CertificatePDFGenerator(issuer=issuer)
        self.logger = get_logger(self.__class__.__name__)

    async def render(self, snapshot: ApplicationRecord) -> str:
        try:
            return await asyncio.to_thread(self._render_sync, snapshot)
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(f"Could not write certificate for {snapshot.application_number}: {e}") from e

    async def discard(self, certificate_ref: str) -> None:
        await asyncio.to_thread(self._remove, certificate_ref)

    def _render_sync(self, snapshot: ApplicationRecord) -> str:
        self.output_dir.mkdir(parents=True, exist_ok=True)

        filename = self._filename(snapshot)
        output_path = self.output_dir / filename
        try:
            self.generator.generate(snapshot, output_path)
        except Exception:
            output_path.unlink(missing_ok=True)
            raise

        if not output_path.exists():
            raise RenderError(f"Certificate file was not created: {output_path}")

        return f"{self.url_prefix}/{filename}"

    @staticmethod
    def _filename(snapshot: ApplicationRecord) -> str:
        issued_at = snapshot.certificate_generated_at or datetime.utcnow()
        timestamp = int(issued_at.timestamp() * 1_000_000)
        return f"cert-{snapshot.id}-{timestamp}-{secrets.token_hex(4)}.pdf"

    def path_for(self, certificate_ref: str) -> Path:
        """Local file behind a reference; only the file name is trusted."""
        return self.output_dir / Path(certificate_ref).name

    def _remove(self, certificate_ref: str) -> None:
        path = self.path_for(certificate_ref)
        if not path.exists():
            return
        try:
            path.unlink()
            self.logger.info(f"🗑️ Removed certificate {path.name}")
        except OSError as e:
            self.logger.warning(f"⚠️ Could not remove certificate {path}: {e}")
