"""
vault_core.py
---------------------------------------------------
Core logic for Lucky Vault (Country Edition).
Includes:
 - Secret selection + guess classification
 - Feedback / log outcome strings
 - Country dictionary loading
 - High score persistence
---------------------------------------------------
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple
import logging, os, random, re

log = logging.getLogger("lucky_vault.core")

# Verdict kinds
EMPTY, QUIT, WRONG_LENGTH, CORRECT, WRONG = "empty", "quit", "wrong_length", "correct", "wrong"
SCORED = (WRONG_LENGTH, CORRECT, WRONG)

CATEGORY = "COUNTRY"
QUIT_WORD = "QUIT"
MIN_VALID_SCORE = 1

_INT_RE = re.compile(r"[+-]?[0-9]+")


class ConfigError(Exception):
    """Raised when the game cannot start (missing or empty dictionary)."""


def normalize(w: str) -> str:
    """Case-fold a word. str.lower() never consults the system locale."""
    return w.lower()


def count_matches(secret: str, guess: str) -> int:
    """
    Count positions where the case-folded guess and secret agree.
    Only the common prefix length is compared.
    """
    s, g = normalize(secret), normalize(guess)
    return sum(1 for i in range(min(len(s), len(g))) if s[i] == g[i])


def is_new_best(best: Optional[int], attempts: int) -> bool:
    return best is None or attempts < best


# ---------------- Config & Secret ---------------- #

@dataclass
class VaultConfig:
    """File locations, all relative to data_dir."""
    data_dir: Path = Path("data")

    @property
    def countries_path(self) -> Path:
        return Path(self.data_dir) / "countries.txt"

    @property
    def highscore_path(self) -> Path:
        return Path(self.data_dir) / "highscore.txt"

    @property
    def logs_dir(self) -> Path:
        return Path(self.data_dir) / "logs"


@dataclass(frozen=True)
class Secret:
    """The session's country: original case for display, folded for matching."""
    word: str
    lower: str
    length: int

    @classmethod
    def of(cls, word: str) -> "Secret":
        return cls(word, normalize(word), len(word))


def pick_secret(countries: Sequence[str], rng: random.Random) -> Secret:
    """Pick one country uniformly at random."""
    if not countries:
        raise ConfigError("no countries to choose from")
    return Secret.of(countries[rng.randrange(len(countries))])


# ---------------- Guess classification ---------------- #

@dataclass(frozen=True)
class Verdict:
    """
    Classification of one input line.
    kind is one of EMPTY, QUIT, WRONG_LENGTH, CORRECT, WRONG.
    """
    kind: str
    raw: str
    guess: str
    matches: int = 0

    @property
    def scored(self) -> bool:
        """True when the line counts as an attempt."""
        return self.kind in SCORED

    @property
    def logged(self) -> str:
        """Value written to the session log."""
        return self.raw if self.kind in (EMPTY, QUIT) else self.guess


def classify_guess(raw: str, secret: Secret) -> Verdict:
    """
    Classify a raw input line against the secret.
    Checks run in order: empty, quit, length, exact match, positional matches.
    """
    guess = raw.strip()
    if not guess:
        return Verdict(EMPTY, raw, guess)
    if normalize(guess) == normalize(QUIT_WORD):
        return Verdict(QUIT, raw, guess)
    if len(guess) != secret.length:
        return Verdict(WRONG_LENGTH, raw, guess)
    if normalize(guess) == secret.lower:
        return Verdict(CORRECT, raw, guess, secret.length)
    return Verdict(WRONG, raw, guess, count_matches(secret.lower, guess))


def feedback(v: Verdict, attempts: int, secret: Secret) -> str:
    """User-facing line for a verdict."""
    if v.kind == EMPTY:
        return "Empty guess. Try again."
    if v.kind == QUIT:
        return "Bye!"
    if v.kind == WRONG_LENGTH:
        return f"Wrong length ({len(v.guess)}). Need {secret.length}."
    if v.kind == CORRECT:
        return f"Correct in {attempts} attempts! Word was: {secret.word}"
    return f"Not it. {v.matches} letter(s) correct (right position)."


def outcome_tag(v: Verdict, attempts: int) -> str:
    """Outcome tag for the third field of a log line."""
    if v.kind == CORRECT:
        return f"CORRECT in {attempts}"
    if v.kind == WRONG:
        return f"matches={v.matches}"
    return v.kind


# ---------------- Dictionary ---------------- #

def load_countries(path) -> Tuple[str, ...]:
    """Load non-empty, stripped lines from the countries file (UTF-8)."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8-sig") as f:
            countries = tuple(x.strip() for x in f if x.strip())
    except FileNotFoundError:
        raise ConfigError(f"countries file not found: {path}") from None
    except UnicodeDecodeError as e:
        raise ConfigError(f"countries file is not valid UTF-8: {path} ({e})") from e
    if not countries:
        raise ConfigError(f"countries file is empty: {path}")
    log.debug("Loaded %d countries from %s", len(countries), path)
    return countries


# ---------------- High score ---------------- #

class HighScoreStore:
    """
    Best (fewest) attempts for the COUNTRY category.
    File format: a single line "COUNTRY=<n>".
    """
    prefix = f"{CATEGORY}="

    def __init__(self, path):
        self.path = Path(path)

    def read_best(self) -> Optional[int]:
        """Stored best, or None if absent, malformed, unreadable, or <= 1."""
        try:
            with open(self.path, encoding="utf-8") as f:
                line = f.readline().strip()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            log.warning("Cannot read high score %s: %s", self.path, e)
            return None
        if not line.startswith(self.prefix):
            return None
        number = line[len(self.prefix):].strip()
        if not _INT_RE.fullmatch(number):
            return None
        value = int(number)
        if value <= MIN_VALID_SCORE:
            return None
        return value

    def write_best(self, attempts: int):
        """Persist a best score; only values read_best can return are accepted."""
        if attempts <= MIN_VALID_SCORE:
            raise ValueError(f"best score must be greater than {MIN_VALID_SCORE}, got {attempts}")
        self.write_record(attempts)

    def write_record(self, attempts: int):
        """
        Overwrite the file with "COUNTRY=<attempts>".
        A record of 1 is written but reads back as None.
        """
        if attempts < MIN_VALID_SCORE:
            raise ValueError(f"attempts must be positive, got {attempts}")
        os.makedirs(self.path.parent, exist_ok=True)
        with open(self.path, "w", encoding="utf-8", newline="\n") as f:
            f.write(f"{self.prefix}{attempts}\n")
        log.info("High score %s%d written to %s", self.prefix, attempts, self.path)
