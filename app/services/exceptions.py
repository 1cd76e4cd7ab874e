class JournalError(Exception):
    """Base class for journal core errors."""


class ValidationError(JournalError):
    """Missing emotion or empty note."""


class NotFoundError(JournalError):
    def __init__(self, entry_id: str):
        super().__init__(f"Entry not found: {entry_id}")
        self.entry_id = entry_id


class PersistenceError(JournalError):
    """Underlying storage read or write failed."""
