import os
import yaml
import logging
from typing import List, Optional
from pydantic import ValidationError
from profilegen.core.config import settings
from profilegen.schemas.registry import Subscription

logger = logging.getLogger(__name__)

class SubscriptionRepo:
    """
    Read-only registry of the host application's subscriptions, keyed by id.
    Backed by the host's subscription list file, or by an explicit list.
    """
    def __init__(self, path: Optional[str] = None, subscriptions: Optional[List[Subscription]] = None):
        self.path = path if path is not None else os.path.join(settings.BASE_DIR, settings.SUBSCRIBES_FILE)
        self._subscriptions = subscriptions

    def load_subscriptions(self) -> List[Subscription]:
        if self._subscriptions is not None:
            return list(self._subscriptions)

        if not os.path.exists(self.path):
            logger.warning(f"Subscription list not found: {self.path}")
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as file:
                raw = yaml.safe_load(file) or []
        except Exception as e:
            logger.error(f"Error loading subscription list {self.path}: {e}")
            return []

        subscriptions = []
        for item in raw:
            try:
                subscriptions.append(Subscription(**item))
            except (ValidationError, TypeError) as e:
                logger.warning(f"Invalid subscription entry: {e}")
        return subscriptions

    def snapshot(self) -> "SubscriptionRepo":
        """Returns a registry pinned to the current contents of the list."""
        return SubscriptionRepo(path=self.path, subscriptions=self.load_subscriptions())

    def get_subscription_by_id(self, id: str) -> Optional[Subscription]:
        return next((s for s in self.load_subscriptions() if s.id == id), None)

subscription_repo = SubscriptionRepo()
