"""Certificate renderer interface for dependency inversion."""

from abc import ABC, abstractmethod

from domain.entities import ApplicationRecord


class RenderError(Exception):
    """Raised by renderers when no certificate artifact could be produced."""


class ICertificateRenderer(ABC):
    """
    Abstract interface for certificate rendering.

    Allows the workflow to issue certificates without depending on a
    specific document format or storage location. Rendering only ever adds
    an artifact; the caller decides which artifact to discard once it knows
    whether the record pointing at it was saved.
    """

    @abstractmethod
    async def render(self, snapshot: ApplicationRecord) -> str:
        """
        Render a certificate for the application snapshot.

        Args:
            snapshot: Record as it will be persisted after issuance

        Returns:
            Reference (URL or path) of the new certificate artifact

        Raises:
            RenderError: If rendering failed
        """
        pass

    @abstractmethod
    async def discard(self, certificate_ref: str) -> None:
        """
        Remove an artifact no stored record points to anymore.

        A missing artifact is not an error.

        Args:
            certificate_ref: Reference previously returned by ``render``
        """
        pass
