import os
import anyio
import logging
from profilegen.core.config import settings

logger = logging.getLogger(__name__)

class FileRepo:
    """
    Async text file access rooted at the application directory.
    Paths are the same relative paths the host application stores
    (e.g. "data/subscribes/xxx.yaml").
    """
    def __init__(self, base_dir: str = None):
        self.base_dir = base_dir if base_dir is not None else settings.BASE_DIR

    def _get_path(self, path: str) -> anyio.Path:
        return anyio.Path(os.path.join(self.base_dir, path))

    async def read_file(self, path: str) -> str:
        '''
        Read a text file.
        Args:
            path (str): Path relative to the base directory.
        Returns:
            str: The file content.
        Raises:
            FileNotFoundError: If the file does not exist.
            IOError: If the file cannot be read.
        '''
        return await self._get_path(path).read_text(encoding="utf-8")

    async def write_file(self, path: str, content: str) -> None:
        '''
        Overwrite a text file, creating parent directories as needed.
        Args:
            path (str): Path relative to the base directory.
            content (str): The full file content.
        Raises:
            IOError: If the file cannot be written.
        '''
        target = self._get_path(path)
        await target.parent.mkdir(parents=True, exist_ok=True)
        await target.write_text(content, encoding="utf-8")
        logger.debug(f"Wrote {len(content)} characters to {target}")

file_repo = FileRepo()
