"""Roles of the people acting on applications."""

from enum import Enum


class ActorRole(str, Enum):
    ADMIN = "admin"
    APPLICANT = "applicant"

    def __str__(self) -> str:
        return self.value
