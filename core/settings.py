"""
settings.py - Settings Persistence

User preferences kept in a small SQLite key-value table. A missing or broken
database never stops the application; defaults are used instead.
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Optional
import logging
import sqlite3

from .config import MAX_PADDING, MAX_PATTERN_LENGTH, MAX_TEMPLATE_LENGTH, PLACEHOLDER

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Initial parameter values and display preferences"""
    dark_mode: bool = True
    regex_mode: bool = False
    case_sensitive: bool = True
    template: str = PLACEHOLDER
    start_number: int = 1
    padding: int = 3

    def sanitize(self) -> None:
        """Clamp values to the configured limits"""
        self.template = self.template[:MAX_TEMPLATE_LENGTH]
        self.start_number = max(0, self.start_number)
        self.padding = max(0, min(self.padding, MAX_PADDING))


def _parse_bool(value: str) -> bool:
    return value == "true"


def _format(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class SettingsStore:
    """SQLite-backed settings storage"""

    def __init__(self, db_path: Path) -> None:
        self._db_path = Path(db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self._db_path)
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def _read_all(self) -> Dict[str, str]:
        conn = self._connect()
        try:
            rows = conn.execute("SELECT key, value FROM settings").fetchall()
        finally:
            conn.close()
        return dict(rows)

    def load(self) -> Settings:
        """Load settings, falling back to defaults per key"""
        settings = Settings()
        try:
            stored = self._read_all()
        except (sqlite3.Error, OSError) as e:
            logger.warning("Could not load settings from %s: %s", self._db_path, e)
            return settings

        for f in fields(Settings):
            raw: Optional[str] = stored.get(f.name)
            if raw is None:
                continue
            if f.type in (bool, "bool"):
                setattr(settings, f.name, _parse_bool(raw))
            elif f.type in (int, "int"):
                try:
                    setattr(settings, f.name, int(raw))
                except ValueError:
                    logger.warning("Ignoring invalid %s setting: %r", f.name, raw)
            else:
                setattr(settings, f.name, raw)

        settings.sanitize()
        return settings

    def save(self, settings: Settings) -> bool:
        """
        Save all settings

        Returns:
            Whether the write succeeded
        """
        settings.sanitize()
        values = [
            (f.name, _format(getattr(settings, f.name))[:MAX_PATTERN_LENGTH])
            for f in fields(Settings)
        ]
        try:
            conn = self._connect()
            try:
                with conn:
                    conn.executemany(
                        "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                        values,
                    )
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as e:
            logger.warning("Could not save settings to %s: %s", self._db_path, e)
            return False
        return True
