"""Terminal entry point for Lucky Vault (Country Edition)."""

import logging
import sys

from lucky_vault.vault_core import ConfigError, VaultConfig
from lucky_vault.session import GameSession


def setup_logging(level=logging.WARNING):
    """Diagnostics go to stderr only; stdout carries the game transcript."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger = logging.getLogger("lucky_vault")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def use_utf8(*streams):
    """Terminal I/O is UTF-8 whatever the locale says; bad bytes raise."""
    for s in streams:
        reconfigure = getattr(s, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(encoding="utf-8", errors="strict")


def main() -> int:
    setup_logging()
    use_utf8(sys.stdin, sys.stdout)
    game = GameSession(VaultConfig())
    try:
        game.run()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except (OSError, UnicodeError) as e:
        print(f"Unexpected I/O error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print()
        return 130
    return 0


if __name__ == '__main__':
    sys.exit(main())
