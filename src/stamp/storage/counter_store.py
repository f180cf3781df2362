"""JSON file persistence for counter state."""

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from stamp.core.types import CounterState

logger = logging.getLogger(__name__)

# Counter file permissions (user read/write only)
FILE_MODE = 0o600


class CounterError(Exception):
    """Base error for counter persistence."""

    pass


class CounterFileCorruptedError(CounterError):
    """Raised when the counter file exists but cannot be parsed."""

    pass


class CounterStore:
    """Loads and saves CounterState as a single JSON file.

    The file is rewritten in full on every save, through a temp file in the
    same directory and os.replace, so readers never observe a partial write.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> CounterState:
        """
        Read counter state from disk.

        Returns:
            Parsed CounterState

        Raises:
            FileNotFoundError: If the file doesn't exist
            CounterFileCorruptedError: If the content isn't a valid counter record
            OSError: For any other read failure
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CounterFileCorruptedError(f"{self.path}: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CounterFileCorruptedError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise CounterFileCorruptedError(
                f"{self.path} must contain an object, got {type(data).__name__}"
            )

        try:
            state = CounterState.model_validate(data)
        except ValidationError as e:
            raise CounterFileCorruptedError(
                f"Invalid counter data in {self.path}: {e}"
            ) from e

        logger.debug("Loaded counters from %s", self.path)
        return state

    def save(self, state: CounterState) -> None:
        """
        Write counter state to disk atomically.

        Raises:
            OSError: If the directory or file cannot be written
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(state.model_dump(mode="json"), indent=2) + "\n"

        fd, temp_name = tempfile.mkstemp(
            prefix=".tmp-", suffix=".json", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.chmod(temp_name, FILE_MODE)
            os.replace(temp_name, self.path)
        finally:
            if os.path.exists(temp_name):
                os.unlink(temp_name)

        logger.debug("Saved counters to %s", self.path)
