# pocketcashier/api/deps.py
from fastapi import Depends

from pocketcashier.services.notification_service import NotificationService
from pocketcashier.services.square_client import SquareClient
from pocketcashier.utils.settings import Settings, get_settings


def get_notifier() -> NotificationService:
    return NotificationService()


def get_square_client(settings: Settings = Depends(get_settings)) -> SquareClient:
    return SquareClient(settings)
