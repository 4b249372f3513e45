"""Fire-and-forget delivery of notification commands."""

import asyncio
from typing import Optional, Sequence

from application.interfaces import INotificationDispatcher
from domain.value_objects import NotifyCommand
from infrastructure.config import get_logger


class BackgroundNotifier:
    """
    Hands notification commands to the dispatcher without blocking callers.

    Commands of one batch are delivered sequentially in the order given.
    A failing command is logged and does not stop the rest of the batch.
    """

    def __init__(self, dispatcher: INotificationDispatcher):
        self.dispatcher = dispatcher
        self._tasks: set[asyncio.Task] = set()
        self.logger = get_logger(self.__class__.__name__)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def schedule(self, commands: Sequence[NotifyCommand]) -> Optional[asyncio.Task]:
        """
        Start delivering a batch of commands in the background.

        Args:
            commands: Notifications in delivery order

        Returns:
            The delivery task, or None when there is nothing to send
        """
        if not commands:
            return None

        task = asyncio.create_task(self._deliver(list(commands)))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every scheduled delivery to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _deliver(self, commands: list[NotifyCommand]) -> None:
        for command in commands:
            try:
                await self.dispatcher.send(command)
            except Exception as e:
                self.logger.error(
                    f"❌ Notification '{command.template.value}' to {command.audience.value} failed: {str(e)}",
                    exc_info=True,
                )
