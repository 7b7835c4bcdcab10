"""Host capabilities for running the client outside a browser."""

from pathlib import Path

from loguru import logger

from yan_notes.config import FALLBACK_DOWNLOAD_NAME, LOGIN_PATH


class LogNotifier:
    """Show transient messages through the log."""

    def success(self, message: str) -> None:
        logger.success(message)

    def error(self, message: str) -> None:
        logger.error(message)


class ConsoleNavigator:
    """Track the current entry point; a terminal cannot really redirect."""

    def __init__(self, current_path: str = "/") -> None:
        self._current_path = current_path
        self.history: list[str] = []

    @property
    def current_path(self) -> str:
        return self._current_path

    def redirect(self, path: str) -> None:
        self.history.append(path)
        self._current_path = path
        if path == LOGIN_PATH:
            logger.warning("Not logged in. Run 'yan-notes login' to start a new session.")
        else:
            logger.debug("Navigated to {}", path)


class DiskFileSaver:
    """Save downloaded payloads into a directory without overwriting files."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        self.saved: list[Path] = []

    def make_unique_path(self, filename: str) -> Path:
        """Append -N to the stem until the name does not collide."""
        # Only the last component is used, so a suggested name cannot escape the directory.
        name = Path(filename).name.strip() or FALLBACK_DOWNLOAD_NAME
        if name in (".", ".."):
            name = FALLBACK_DOWNLOAD_NAME
        candidate = self.directory / name
        stem, suffix = candidate.stem, candidate.suffix
        count = 0
        while candidate.exists():
            count += 1
            candidate = self.directory / f"{stem}-{count}{suffix}"
        return candidate

    def save(self, filename: str, payload: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.make_unique_path(filename)
        target.write_bytes(payload)
        self.saved.append(target)
        logger.debug("Saved {} bytes to {}", len(payload), target)
