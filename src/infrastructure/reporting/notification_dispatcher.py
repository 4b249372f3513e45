"""Notification dispatcher storing in-app notifications and sending e-mail."""

import asyncio
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from application.interfaces import INotificationDispatcher
from domain.entities import Notification
from domain.value_objects import NotifyCommand
from infrastructure.config import Settings, get_logger
from infrastructure.database.repositories import SQLAlchemyNotificationRepository
from infrastructure.reporting.email_templates import render_message
from infrastructure.reporting.smtp_client import is_smtp_configured, send_email


class EmailNotificationDispatcher(INotificationDispatcher):
    """
    Deliver notify commands.

    Each command becomes one in-app notification row (when the payload
    names an application) and one e-mail to the resolved recipients.
    E-mail is retried with exponential backoff; the last error is raised
    to the caller once the attempts are used up.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Settings,
        email_sender: Optional[Callable[..., None]] = None,
    ):
        self.session_factory = session_factory
        self.settings = settings
        self.email_sender = email_sender or send_email
        self.logger = get_logger(self.__class__.__name__)

    async def send(self, command: NotifyCommand) -> None:
        title, body = render_message(command.template, command.payload)

        await self._store_in_app(command, title, body)
        await self._send_email(command, title, body)

    async def _store_in_app(self, command: NotifyCommand, title: str, body: str) -> None:
        application_id = command.payload.get("application_id")
        if not application_id:
            return

        notification = Notification(
            application_id=UUID(str(application_id)),
            audience=command.audience,
            template=command.template,
            title=title,
            message=body,
        )
        try:
            async with self.session_factory() as session:
                await SQLAlchemyNotificationRepository(session).add(notification)
                await session.commit()
        except SQLAlchemyError as e:
            # E-mail delivery still goes ahead.
            self.logger.error(f"❌ Could not store in-app notification '{title}': {str(e)}", exc_info=True)
            return

        self.logger.debug(f"In-app notification stored for {command.audience.value}: {title}")

    async def _send_email(self, command: NotifyCommand, subject: str, body: str) -> None:
        if not command.recipients:
            self.logger.info(f"No e-mail recipients for '{command.template.value}', skipping e-mail")
            return
        if self.email_sender is send_email and not is_smtp_configured(self.settings):
            self.logger.warning(f"⚠️ SMTP not configured, e-mail '{subject}' not sent")
            return

        max_attempts = max(1, self.settings.notification_max_attempts)
        delay = self.settings.notification_retry_backoff_seconds

        for attempt in range(1, max_attempts + 1):
            try:
                await asyncio.to_thread(
                    self.email_sender,
                    list(command.recipients),
                    subject,
                    body,
                    settings=self.settings,
                )
                self.logger.info(f"📧 E-mail '{subject}' sent to {', '.join(command.recipients)}")
                return
            except Exception as e:
                if attempt == max_attempts:
                    self.logger.error(f"❌ E-mail '{subject}' failed after {attempt} attempts: {str(e)}")
                    raise
                self.logger.warning(f"⚠️ E-mail attempt {attempt} for '{subject}' failed: {str(e)}, retrying in {delay}s")
                await asyncio.sleep(delay)
                delay *= 2
