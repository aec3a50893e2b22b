import os
import yaml
import logging
from typing import List, Optional
from pydantic import ValidationError
from profilegen.core.config import settings
from profilegen.schemas.registry import Ruleset

logger = logging.getLogger(__name__)

class RulesetRepo:
    """Read-only registry of rule-sets, keyed by id."""
    def __init__(self, path: Optional[str] = None, rulesets: Optional[List[Ruleset]] = None):
        self.path = path if path is not None else os.path.join(settings.BASE_DIR, settings.RULESETS_FILE)
        self._rulesets = rulesets

    def load_rulesets(self) -> List[Ruleset]:
        if self._rulesets is not None:
            return list(self._rulesets)

        if not os.path.exists(self.path):
            logger.warning(f"Rule-set list not found: {self.path}")
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as file:
                raw = yaml.safe_load(file) or []
        except Exception as e:
            logger.error(f"Error loading rule-set list {self.path}: {e}")
            return []

        rulesets = []
        for item in raw:
            try:
                rulesets.append(Ruleset(**item))
            except (ValidationError, TypeError) as e:
                logger.warning(f"Invalid rule-set entry: {e}")
        return rulesets

    def snapshot(self) -> "RulesetRepo":
        return RulesetRepo(path=self.path, rulesets=self.load_rulesets())

    def get_ruleset_by_id(self, id: str) -> Optional[Ruleset]:
        return next((r for r in self.load_rulesets() if r.id == id), None)

ruleset_repo = RulesetRepo()
