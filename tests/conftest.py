import io
from datetime import datetime

import pytest

from lucky_vault.vault_core import VaultConfig
from lucky_vault.session import GameSession

FIXED_NOW = datetime(2025, 3, 14, 9, 26, 53)
COUNTRIES = ["Canada", "Brazil", "Japan"]


class FixedRandom:
    """Stands in for random.Random; always picks the given index."""

    def __init__(self, index=0):
        self.index = index

    def randrange(self, *args, **kwargs):
        return self.index


@pytest.fixture()
def config(tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    (data / "countries.txt").write_text("\n".join(COUNTRIES) + "\n", encoding="utf-8")
    return VaultConfig(data)


@pytest.fixture()
def play(config):
    """Run a session with secret Canada on scripted input; returns (result, stdout text)."""
    def _play(text, rng=None):
        out = io.StringIO()
        game = GameSession(config, rng=rng or FixedRandom(0), clock=lambda: FIXED_NOW,
                           stdin=io.StringIO(text), stdout=out)
        result = game.run()
        return result, out.getvalue()
    return _play


def log_lines(config):
    files = sorted(config.logs_dir.iterdir())
    assert len(files) == 1
    return files[0].read_text(encoding="utf-8").splitlines()
