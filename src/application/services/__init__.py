"""Application services shared by use cases."""

from .background_notifier import BackgroundNotifier

__all__ = ["BackgroundNotifier"]
