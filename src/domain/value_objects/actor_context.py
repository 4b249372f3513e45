"""Identity of whoever requests a workflow action."""

from dataclasses import dataclass

from domain.enums import ActorRole


@dataclass(frozen=True)
class ActorContext:
    """
    Immutable value object describing the acting user.

    Attributes:
        actor_id: Admin identifier, or "applicant" for the applicant portal
        role: Admin or applicant
    """

    actor_id: str
    role: ActorRole = ActorRole.ADMIN

    def __post_init__(self) -> None:
        """Validate actor."""
        if not self.actor_id or not self.actor_id.strip():
            raise ValueError("Actor id cannot be empty")

    @classmethod
    def applicant(cls) -> "ActorContext":
        return cls(actor_id="applicant", role=ActorRole.APPLICANT)

    @classmethod
    def admin(cls, admin_id: str) -> "ActorContext":
        return cls(actor_id=admin_id, role=ActorRole.ADMIN)

    @property
    def is_admin(self) -> bool:
        return self.role == ActorRole.ADMIN

    def __str__(self) -> str:
        return f"{self.role.value}:{self.actor_id}"
