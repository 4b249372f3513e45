"""Pytest configuration and shared fixtures."""

import asyncio
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional
from uuid import UUID

import pytest

from application.interfaces import ICertificateRenderer, INotificationDispatcher, RenderError
from application.services import BackgroundNotifier
from application.use_cases import WorkflowService
from domain.entities import ApplicationRecord, Notification
from domain.enums import PaymentChoice
from domain.exceptions import (
    ApplicationNotFoundError,
    ConcurrentModificationError,
    DuplicateApplicationNumberError,
)
from domain.repositories import IApplicationRepository, INotificationRepository
from domain.services import TransitionEngine
from domain.value_objects import (
    ActorContext,
    ApproveApplication,
    ChoosePayment,
    NotifyCommand,
    SubmitReceipt,
    VerifyDocuments,
    VerifyPayment,
    WorkflowConfig,
)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = datetime(2024, 5, 1, 10, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1) -> None:
        self.now += timedelta(seconds=seconds)


class InMemoryApplicationRepository(IApplicationRepository):
    """Compare-and-swap store; reads yield to the loop so requests interleave."""

    def __init__(self):
        self.records: dict[UUID, ApplicationRecord] = {}
        self.save_calls = 0
        self.save_error: Optional[Exception] = None

    async def create(self, record: ApplicationRecord) -> ApplicationRecord:
        if any(r.application_number == record.application_number for r in self.records.values()):
            raise DuplicateApplicationNumberError(record.application_number)
        self.records[record.id] = record
        return record.copy_with()

    async def get_by_id(self, application_id: UUID) -> Optional[ApplicationRecord]:
        record = self.records.get(application_id)
        await asyncio.sleep(0)
        return record.copy_with() if record else None

    async def save(self, record: ApplicationRecord, expected_version: int) -> ApplicationRecord:
        self.save_calls += 1
        if self.save_error is not None:
            raise self.save_error
        current = self.records.get(record.id)
        if current is None:
            raise ApplicationNotFoundError(record.id)
        if current.version != expected_version:
            raise ConcurrentModificationError(record.id, expected_version)
        saved = record.copy_with(version=expected_version + 1)
        self.records[record.id] = saved
        return saved.copy_with()

    async def list_applications(self, status=None, search=None, limit=20, offset=0):
        matching = [r for r in self.records.values() if status is None or r.status == status]
        if search:
            needle = search.lower()
            matching = [
                r for r in matching
                if any(needle in (value or "").lower()
                       for value in (r.application_number, r.groom_full_name, r.bride_full_name))
            ]
        matching.sort(key=lambda r: r.created_at, reverse=True)
        return [r.copy_with() for r in matching[offset:offset + limit]], len(matching)


class AlwaysConflictingRepository(InMemoryApplicationRepository):
    async def save(self, record: ApplicationRecord, expected_version: int) -> ApplicationRecord:
        self.save_calls += 1
        raise ConcurrentModificationError(record.id, expected_version)


class InMemoryNotificationRepository(INotificationRepository):
    def __init__(self):
        self.notifications: list[Notification] = []

    async def add(self, notification: Notification) -> Notification:
        self.notifications.append(notification)
        return notification

    async def list_for_application(self, application_id, audience, limit=50):
        matching = [
            n for n in self.notifications
            if n.application_id == application_id and n.audience == audience
        ]
        return sorted(matching, key=lambda n: n.created_at, reverse=True)[:limit]

    async def mark_all_read(self, application_id, audience):
        changed = 0
        for n in self.notifications:
            if n.application_id == application_id and n.audience == audience and not n.is_read:
                n.mark_read()
                changed += 1
        return changed


class FakeCertificateRenderer(ICertificateRenderer):
    def __init__(self):
        self.rendered: list[ApplicationRecord] = []
        self.refs: list[str] = []
        self.discarded: list[str] = []

    async def render(self, snapshot: ApplicationRecord) -> str:
        self.rendered.append(snapshot)
        ref = f"/certificates/cert-{snapshot.id}-{len(self.rendered)}.pdf"
        self.refs.append(ref)
        return ref

    async def discard(self, certificate_ref: str) -> None:
        self.discarded.append(certificate_ref)

    @property
    def kept(self) -> list[str]:
        """References rendered and never discarded."""
        return [ref for ref in self.refs if ref not in self.discarded]


class FailingCertificateRenderer(ICertificateRenderer):
    async def render(self, snapshot: ApplicationRecord) -> str:
        raise RenderError("disk full")

    async def discard(self, certificate_ref: str) -> None:
        pass


class RecordingDispatcher(INotificationDispatcher):
    def __init__(self):
        self.sent: list[NotifyCommand] = []

    async def send(self, command: NotifyCommand) -> None:
        self.sent.append(command)


class FailingDispatcher(INotificationDispatcher):
    def __init__(self):
        self.attempts = 0

    async def send(self, command: NotifyCommand) -> None:
        self.attempts += 1
        raise ConnectionError("SMTP server unreachable")


class BlockingDispatcher(INotificationDispatcher):
    """Holds every delivery until ``release`` is set."""

    def __init__(self):
        self.release = asyncio.Event()
        self.sent: list[NotifyCommand] = []

    async def send(self, command: NotifyCommand) -> None:
        await self.release.wait()
        self.sent.append(command)


def drive(engine: TransitionEngine, record: ApplicationRecord, *actions, config: Optional[WorkflowConfig] = None):
    """Apply actions in order through the engine and return the final record."""
    config = config or WorkflowConfig()
    actor = ActorContext.admin("admin-1")
    for action in actions:
        record = engine.attempt(record, action, actor, config).record
    return record


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(clock):
    return TransitionEngine(clock=clock)


@pytest.fixture
def workflow_config():
    return WorkflowConfig(
        default_deposit_amount=Decimal("200"),
        admin_recipients=("admin@registry.test",),
        portal_url="https://portal.registry.test",
        total_fee=Decimal("450"),
    )


@pytest.fixture
def admin():
    return ActorContext.admin("admin-1")


@pytest.fixture
def applicant():
    return ActorContext.applicant()


@pytest.fixture
def submitted_record():
    """Fixture for a freshly submitted application."""
    return ApplicationRecord(
        application_number="NKH-12345678-001",
        applicant_email="couple@example.com",
        groom_full_name="Yusuf Rahman",
        bride_full_name="Aisha Karim",
    )


@pytest.fixture
def approved_record(engine, submitted_record):
    return drive(engine, submitted_record, ApproveApplication())


@pytest.fixture
def receipt_pending_record(engine, submitted_record):
    """Approved, applicant chose to pay and uploaded a receipt."""
    return drive(
        engine,
        submitted_record,
        ApproveApplication(),
        ChoosePayment(choice=PaymentChoice.WILL_PAY),
        SubmitReceipt(receipt_ref="/uploads/receipts/r1.jpg"),
    )


@pytest.fixture
def ready_for_certificate_record(engine, submitted_record):
    """Pay path with documents required, every gate satisfied."""
    return drive(
        engine,
        submitted_record,
        ApproveApplication(documents_required=True),
        ChoosePayment(choice=PaymentChoice.WILL_PAY),
        SubmitReceipt(receipt_ref="/uploads/receipts/r1.jpg"),
        VerifyPayment(),
        VerifyDocuments(),
    )


@pytest.fixture
def repository():
    return InMemoryApplicationRepository()


@pytest.fixture
def renderer():
    return FakeCertificateRenderer()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def notifier(dispatcher):
    return BackgroundNotifier(dispatcher)


@pytest.fixture
def workflow_service(repository, renderer, dispatcher, notifier, workflow_config, engine):
    return WorkflowService(
        repository=repository,
        renderer=renderer,
        dispatcher=dispatcher,
        config=workflow_config,
        engine=engine,
        notifier=notifier,
    )


@pytest.fixture
def notification_repository():
    return InMemoryNotificationRepository()
