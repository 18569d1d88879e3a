"""
vault_log.py
---------------------------------------------------
Per-game guess log. One file per session:
  data/logs/<YYYY-MM-DD_HH-mm-ss>_<Secret_Name>.txt
Each line: <ISO local datetime> | <guess> | <outcome>
---------------------------------------------------
"""

from datetime import datetime
from pathlib import Path
from typing import Callable
import logging, os

log = logging.getLogger("lucky_vault.log")

STAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def log_file_name(secret: str, when: datetime, n: int = 0) -> str:
    """File name for a session; n > 0 disambiguates a collision."""
    base = f"{when.strftime(STAMP_FORMAT)}_{secret.replace(' ', '_')}"
    return f"{base}-{n}.txt" if n else f"{base}.txt"


class SessionLogger:
    """Append-only guess log, closed on exit from a with-block."""

    def __init__(self, secret: str, logs_dir, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock
        logs_dir = Path(logs_dir)
        os.makedirs(logs_dir, exist_ok=True)
        when, n = clock(), 0
        while True:
            self.path = logs_dir / log_file_name(secret, when, n)
            try:
                self._f = open(self.path, "x", encoding="utf-8", newline="\n")
                break
            except FileExistsError:
                n += 1
        log.debug("Session log opened: %s", self.path)

    def log_guess(self, guess: str, outcome: str):
        """Write one entry and flush it to disk."""
        self._f.write(f"{self.clock().isoformat()} | {guess} | {outcome}\n")
        self._f.flush()

    def close(self):
        if not self._f.closed:
            self._f.close()
            log.debug("Session log closed: %s", self.path)

    @property
    def closed(self) -> bool:
        return self._f.closed

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
