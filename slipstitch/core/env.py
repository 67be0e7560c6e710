"""Configuration for slipstitch: environment variables and .env loading.

Load order (first wins):
  1. Existing OS environment variables. Never overwritten.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Recognised keys:
  SLIPSTITCH_LOG_LEVEL         logging level name (default WARNING)
  SLIPSTITCH_DEFAULT_ROWS      rows for `slipstitch new` (default 10)
  SLIPSTITCH_DEFAULT_STITCHES  stitches for `slipstitch new` (default 10)
  SLIPSTITCH_RENDER_SCALE      pixels per stitch for `render --out` (default 20)
"""

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = 'SLIPSTITCH_'


@dataclass(frozen=True)
class Settings:
    log_level: str = 'WARNING'
    default_rows: int = 10
    default_stitches: int = 10
    render_scale: int = 20


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git can be a dir (normal clone) or a file (worktree)
        if (current / '.git').exists():
            return None
        if current.parent == current:
            return None
        current = current.parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse a .env file into a dict. Handles KEY=value and KEY="value"."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip()
        if key.startswith('export '):
            key = key[len('export ') :].strip()
        if key:
            result[key] = raw_value.strip().strip('"').strip("'")
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def _int_setting(name: str, default: int) -> int:
    raw = os.environ.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f'{ENV_PREFIX}{name} must be an integer, got {raw!r}') from e
    if value < 1:
        raise ValueError(f'{ENV_PREFIX}{name} must be >= 1, got {value}')
    return value


def load_settings() -> Settings:
    """Read SLIPSTITCH_* settings from os.environ (call load_env first)."""
    defaults = Settings()
    return Settings(
        log_level=os.environ.get(ENV_PREFIX + 'LOG_LEVEL', defaults.log_level).strip().upper() or defaults.log_level,
        default_rows=_int_setting('DEFAULT_ROWS', defaults.default_rows),
        default_stitches=_int_setting('DEFAULT_STITCHES', defaults.default_stitches),
        render_scale=_int_setting('RENDER_SCALE', defaults.render_scale),
    )
