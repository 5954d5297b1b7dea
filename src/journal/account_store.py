# src/journal/account_store.py
"""Account store for persisting the account collection to JSON."""
import json
import logging
from pathlib import Path

import aiofiles

from src.journal.accounts import Account
from src.journal.settings import JournalSettings

logger = logging.getLogger(__name__)


class AccountStore:
    """Store for persisting accounts to a JSON file.

    Stores every account with its trades and goals in
    {data_dir}/{accounts_file}. Reports are never stored.
    """

    def __init__(self, settings: JournalSettings) -> None:
        """Initialize the account store.

        Args:
            settings: Journal configuration settings.
        """
        self._settings = settings
        self._data_dir = Path(settings.data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def file_path(self) -> Path:
        return self._data_dir / self._settings.accounts_file

    async def load_accounts(self) -> list[Account]:
        """Load every stored account.

        Returns:
            Stored accounts in saved order, or an empty list when nothing is
            stored or the file cannot be parsed.
        """
        if not self.file_path.exists():
            return []

        try:
            async with aiofiles.open(self.file_path, "r", encoding="utf-8") as f:
                content = await f.read()
            return [Account.from_dict(a) for a in json.loads(content)]
        except (json.JSONDecodeError, UnicodeDecodeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Failed to load accounts from {self.file_path}: {e}")
            return []

    async def save_accounts(self, accounts: list[Account]) -> None:
        """Write the full account collection.

        Args:
            accounts: Accounts to persist, replacing what was stored.
        """
        payload = [a.to_dict() for a in accounts]
        async with aiofiles.open(self.file_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(payload, indent=2, default=str))
        logger.info(f"Saved {len(accounts)} accounts to {self.file_path}")
