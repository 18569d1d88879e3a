"""
Game session for Lucky Vault: setup, guess loop, teardown.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, TextIO
import logging, random, sys

from lucky_vault.vault_core import (
    CATEGORY, CORRECT, MIN_VALID_SCORE, QUIT, VaultConfig, Secret, HighScoreStore,
    classify_guess, feedback, outcome_tag, is_new_best, load_countries, pick_secret,
)
from lucky_vault.vault_log import SessionLogger

log = logging.getLogger("lucky_vault.session")

BANNER = "LUCKY VAULT — COUNTRY MODE. Type QUIT to exit."
PROMPT = "Your guess: "


@dataclass
class SessionResult:
    """How a session ended."""
    secret: Secret
    attempts: int = 0
    won: bool = False
    quit: bool = False
    new_best: bool = False


class GameSession:
    """
    One interactive game against a terminal.
    Every collaborator is injectable so tests can seed the secret,
    pin the clock and script the input.
    """

    def __init__(self, config: Optional[VaultConfig] = None,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], datetime] = datetime.now,
                 stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None):
        self.config = config or VaultConfig()
        self.rng = rng or random.Random()
        self.clock = clock
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.store = HighScoreStore(self.config.highscore_path)

    def say(self, line: str = ""):
        print(line, file=self.stdout)

    def read_line(self) -> Optional[str]:
        """Prompt and read one line; None at end of input."""
        self.stdout.write(PROMPT)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def run(self) -> SessionResult:
        """Play a full session. Raises ConfigError or OSError."""
        countries = load_countries(self.config.countries_path)
        secret = pick_secret(countries, self.rng)
        best = self.store.read_best()
        log.debug("Secret chosen (%d letters), current best=%s", secret.length, best)

        self.say(BANNER)
        self.say(f"Secret word length: {secret.length}")
        self.say(f"Current best: {best} attempts" if best is not None else "Current best: —")

        result = SessionResult(secret)
        with SessionLogger(secret.word, self.config.logs_dir, self.clock) as logger:
            self._loop(secret, best, logger, result)

        self.say("The end")
        return result

    def _loop(self, secret: Secret, best: Optional[int], logger: SessionLogger, result: SessionResult):
        while True:
            raw = self.read_line()
            if raw is None:
                # End of input ends the game like QUIT, without a log record
                self.say()
                self.say("Bye!")
                result.quit = True
                log.debug("End of input after %d attempts", result.attempts)
                return

            v = classify_guess(raw, secret)
            if v.scored:
                result.attempts += 1
            log.debug("Input classified as %s (attempts=%d)", v.kind, result.attempts)

            self.say(feedback(v, result.attempts, secret))
            logger.log_guess(v.logged, outcome_tag(v, result.attempts))

            if v.kind == QUIT:
                result.quit = True
                return

            if v.kind == CORRECT:
                result.won = True
                if is_new_best(best, result.attempts):
                    result.new_best = True
                    self.say(f"NEW BEST for {CATEGORY} mode!")
                    if result.attempts > MIN_VALID_SCORE:
                        self.store.write_best(result.attempts)
                    else:
                        # a one-attempt win is stored but reads back as no best
                        self.store.write_record(result.attempts)
                return
