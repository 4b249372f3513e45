"""Tests for application intake and listing use cases."""

from datetime import datetime, timedelta

import pytest
from conftest import InMemoryApplicationRepository
from application.use_cases import (
    ListApplicationsUseCase,
    ListNotificationsUseCase,
    SubmitApplicationUseCase,
    submit_application,
)
from domain.entities import ApplicationRecord, Notification
from domain.enums import ApplicationStatus, NotificationAudience, NotificationTemplate
from domain.exceptions import DuplicateApplicationNumberError


class CollidingRepository(InMemoryApplicationRepository):
    """Reports the application number as taken for the first ``collisions`` creates."""

    def __init__(self, collisions: int):
        super().__init__()
        self.collisions = collisions
        self.create_calls = 0

    async def create(self, record):
        self.create_calls += 1
        if self.create_calls <= self.collisions:
            raise DuplicateApplicationNumberError(record.application_number)
        return await super().create(record)


class TestSubmitApplication:
    """Test SubmitApplicationUseCase."""

    @pytest.mark.asyncio
    async def test_creates_submitted_record(self, repository, notifier, dispatcher, workflow_config):
        use_case = SubmitApplicationUseCase(repository, notifier, workflow_config)

        record = await use_case.execute(
            applicant_email="couple@example.com",
            groom_full_name="Yusuf Rahman",
            bride_full_name="Aisha Karim",
        )
        await notifier.drain()

        assert record.status == ApplicationStatus.SUBMITTED
        assert record.version == 0
        assert record.application_number.startswith("NKH-")
        assert record.id in repository.records

        assert [(c.audience, c.template) for c in dispatcher.sent] == [
            (NotificationAudience.APPLICANT, NotificationTemplate.APPLICATION_RECEIVED),
            (NotificationAudience.ADMINS, NotificationTemplate.ADMIN_NEW_APPLICATION),
        ]
        assert dispatcher.sent[0].recipients == ("couple@example.com",)
        assert dispatcher.sent[1].recipients == ("admin@registry.test",)
        assert dispatcher.sent[0].payload["application_number"] == record.application_number

    @pytest.mark.asyncio
    async def test_keeps_given_application_number(self, repository, notifier, workflow_config):
        use_case = SubmitApplicationUseCase(repository, notifier, workflow_config)

        record = await use_case.execute(
            applicant_email="couple@example.com",
            groom_full_name="Yusuf Rahman",
            bride_full_name="Aisha Karim",
            application_number="NKH-00000001-007",
        )
        await notifier.drain()

        assert record.application_number == "NKH-00000001-007"

    @pytest.mark.asyncio
    async def test_given_number_already_taken(self, repository, notifier, dispatcher, workflow_config, submitted_record):
        repository.records[submitted_record.id] = submitted_record
        use_case = SubmitApplicationUseCase(repository, notifier, workflow_config)

        with pytest.raises(DuplicateApplicationNumberError):
            await use_case.execute(
                applicant_email="other@example.com",
                groom_full_name="Omar Siddiqui",
                bride_full_name="Layla Hassan",
                application_number=submitted_record.application_number,
            )
        await notifier.drain()

        assert len(repository.records) == 1
        assert dispatcher.sent == []

    @pytest.mark.asyncio
    async def test_generated_number_collision_is_retried(self, notifier, workflow_config, monkeypatch):
        repository = CollidingRepository(collisions=1)
        monkeypatch.setattr(submit_application, "generate_application_number", lambda: "NKH-99999999-123")
        use_case = SubmitApplicationUseCase(repository, notifier, workflow_config)

        record = await use_case.execute(
            applicant_email="couple@example.com",
            groom_full_name="Yusuf Rahman",
            bride_full_name="Aisha Karim",
        )
        await notifier.drain()

        assert record.application_number == "NKH-99999999-123"
        assert repository.create_calls == 2
        assert list(repository.records) == [record.id]

    @pytest.mark.asyncio
    async def test_gives_up_after_repeated_collisions(self, notifier, dispatcher, workflow_config):
        repository = CollidingRepository(collisions=SubmitApplicationUseCase.MAX_NUMBER_ATTEMPTS)
        use_case = SubmitApplicationUseCase(repository, notifier, workflow_config)

        with pytest.raises(DuplicateApplicationNumberError):
            await use_case.execute(
                applicant_email="couple@example.com",
                groom_full_name="Yusuf Rahman",
                bride_full_name="Aisha Karim",
            )
        await notifier.drain()

        assert repository.create_calls == SubmitApplicationUseCase.MAX_NUMBER_ATTEMPTS
        assert repository.records == {}
        assert dispatcher.sent == []


class TestListApplications:
    """Test ListApplicationsUseCase."""

    @pytest.fixture
    def stored_applications(self, repository):
        start = datetime(2024, 5, 1, 9, 0, 0)
        people = [
            ("NKH-10000000-001", "Yusuf Rahman", "Aisha Karim", ApplicationStatus.SUBMITTED),
            ("NKH-10000000-002", "Omar Siddiqui", "Layla Hassan", ApplicationStatus.CANCELLED),
            ("NKH-10000000-003", "Bilal Ahmed", "Maryam Yusuf", ApplicationStatus.SUBMITTED),
        ]
        for offset, (number, groom, bride, status) in enumerate(people):
            created_at = start + timedelta(hours=offset)
            record = ApplicationRecord(
                application_number=number,
                groom_full_name=groom,
                bride_full_name=bride,
                status=status,
                cancelled_at=created_at if status == ApplicationStatus.CANCELLED else None,
                created_at=created_at,
                updated_at=created_at,
            )
            repository.records[record.id] = record

    @pytest.mark.asyncio
    async def test_newest_first_with_pages(self, repository, stored_applications):
        result = await ListApplicationsUseCase(repository).execute(page=1, limit=2)

        assert [r.application_number for r in result["applications"]] == ["NKH-10000000-003", "NKH-10000000-002"]
        assert (result["total"], result["page"], result["limit"], result["pages"]) == (3, 1, 2, 2)

    @pytest.mark.asyncio
    async def test_status_and_search_filters(self, repository, stored_applications):
        use_case = ListApplicationsUseCase(repository)

        submitted = await use_case.execute(status=ApplicationStatus.SUBMITTED)
        by_name = await use_case.execute(search="  yusuf ")

        assert {r.application_number for r in submitted["applications"]} == {"NKH-10000000-001", "NKH-10000000-003"}
        assert by_name["total"] == 2

    @pytest.mark.asyncio
    async def test_rejects_invalid_page(self, repository):
        with pytest.raises(ValueError):
            await ListApplicationsUseCase(repository).execute(page=0)


class TestListNotifications:
    """Test ListNotificationsUseCase."""

    @pytest.fixture
    def stored_notifications(self, notification_repository, submitted_record):
        start = datetime(2024, 5, 1, 9, 0, 0)
        for offset, template in enumerate(
            [NotificationTemplate.APPLICATION_RECEIVED, NotificationTemplate.APPLICATION_APPROVED]
        ):
            notification_repository.notifications.append(
                Notification(
                    application_id=submitted_record.id,
                    audience=NotificationAudience.APPLICANT,
                    template=template,
                    title=template.value,
                    message="body",
                    created_at=start + timedelta(minutes=offset),
                )
            )
        notification_repository.notifications.append(
            Notification(
                application_id=submitted_record.id,
                audience=NotificationAudience.ADMINS,
                template=NotificationTemplate.ADMIN_NEW_APPLICATION,
                title="admin",
                message="body",
            )
        )
        return notification_repository

    @pytest.mark.asyncio
    async def test_lists_newest_first_per_audience(self, stored_notifications, submitted_record):
        use_case = ListNotificationsUseCase(stored_notifications)

        result = await use_case.execute(submitted_record.id, NotificationAudience.APPLICANT)

        assert [n.template for n in result["notifications"]] == [
            NotificationTemplate.APPLICATION_APPROVED,
            NotificationTemplate.APPLICATION_RECEIVED,
        ]
        assert result["unread_count"] == 2

    @pytest.mark.asyncio
    async def test_mark_read(self, stored_notifications, submitted_record):
        use_case = ListNotificationsUseCase(stored_notifications)

        first = await use_case.execute(submitted_record.id, NotificationAudience.APPLICANT, mark_read=True)
        second = await use_case.execute(submitted_record.id, NotificationAudience.APPLICANT)
        admins = await use_case.execute(submitted_record.id, NotificationAudience.ADMINS)

        assert first["unread_count"] == 2
        assert second["unread_count"] == 0
        assert admins["unread_count"] == 1
