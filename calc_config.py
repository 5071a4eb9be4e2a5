import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_HISTORY_LIMIT = 5
DEFAULT_PROMPT = "calc> "


@dataclass
class CalcConfig:
    debug: bool = False
    history_limit: int = DEFAULT_HISTORY_LIMIT
    prompt: str = DEFAULT_PROMPT
    quiet: bool = False


def load_env():
    """Load environment variables from .env file."""
    # Try current directory first, then script directory
    script_dir = Path(__file__).parent
    env_paths = [
        Path.cwd() / ".env",  # Current working directory
        script_dir / ".env"   # accucalc script directory
    ]

    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path)
            if os.environ.get('CALC_DEBUG') == 'true':
                print(f"accucalc: Loaded .env from {env_path}", file=sys.stderr)
            return env_path

    if os.environ.get('CALC_DEBUG') == 'true':
        print(f"accucalc: No .env file found in {[str(p) for p in env_paths]}", file=sys.stderr)
    return None


def load_config(quiet: bool = False) -> CalcConfig:
    """Build a CalcConfig from CALC_* environment variables."""
    history_limit = DEFAULT_HISTORY_LIMIT
    raw_limit = os.environ.get('CALC_HISTORY_LIMIT')
    if raw_limit:
        try:
            history_limit = int(raw_limit)
            if history_limit < 0:
                raise ValueError(raw_limit)
        except ValueError:
            if not quiet:
                print(f"accucalc: Warning: Invalid CALC_HISTORY_LIMIT '{raw_limit}', using {DEFAULT_HISTORY_LIMIT}",
                      file=sys.stderr)
            history_limit = DEFAULT_HISTORY_LIMIT

    return CalcConfig(
        debug=os.environ.get('CALC_DEBUG') == 'true',
        history_limit=history_limit,
        prompt=os.environ.get('CALC_PROMPT', DEFAULT_PROMPT),
        quiet=quiet,
    )
