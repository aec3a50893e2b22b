import logging
from typing import List, Optional
import yaml
from profilegen.core.config import settings
from profilegen.repos.file_repo import FileRepo, file_repo
from profilegen.schemas.generated import RulesetCategory
from profilegen.services.config_generator_service import dump_yaml

logger = logging.getLogger(__name__)

class RulesetService:
    def __init__(self, files: Optional[FileRepo] = None):
        self.files = files or file_repo

    def ruleset_path(self, category: RulesetCategory) -> str:
        return f"{settings.RULESETS_DIR}/{RulesetCategory(category).value}.yaml"

    async def add_to_ruleset(self, category: RulesetCategory, payload: str) -> List[str]:
        """
        Prepends an entry to one of the built-in rule-set lists and drops duplicates.
        A missing or unreadable list file counts as empty.
        Raises:
            ValueError: If the existing file holds a payload that is not a list.
        Returns:
            List[str]: The payload list as written.
        """
        path = self.ruleset_path(category)
        try:
            content = await self.files.read_file(path)
        except Exception as e:
            logger.info(f"Rule-set list {path} not readable, starting empty: {e}")
            content = ""

        data = yaml.safe_load(content or "{}")
        if not isinstance(data, dict):
            logger.warning(f"Rule-set list {path} is not a mapping, starting empty.")
            data = {}

        existing = data.get("payload")
        if existing is None:
            existing = []
        elif not isinstance(existing, list):
            raise ValueError(f"Rule-set list {path} has a non-list payload ({type(existing).__name__}), refusing to overwrite it.")
        entries = list(existing)
        entries.insert(0, payload)
        entries = list(dict.fromkeys(entries))

        await self.files.write_file(path, dump_yaml({"payload": entries}))
        logger.info(f"Added '{payload}' to {RulesetCategory(category).value} rule-set ({len(entries)} entries)")
        return entries

ruleset_service = RulesetService()

def get_ruleset_service() -> RulesetService:
    return ruleset_service
