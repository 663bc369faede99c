"""
State file persistence — atomic read/write for BuildState.

Writes are atomic (write to temp file, then rename) so an interrupted
build never leaves a half-written state behind.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from jooqbuild.core.models.state import BuildState

logger = logging.getLogger(__name__)

DEFAULT_STATE_FILE = "tasks.json"


def default_state_path(state_dir: Path) -> Path:
    """Get the default state file path inside a state directory."""
    return state_dir / DEFAULT_STATE_FILE


def load_state(path: Path) -> BuildState:
    """Load build state from a JSON file.

    Returns:
        BuildState. A missing or unreadable file yields a fresh state,
        which only means every task runs again.
    """
    if not path.is_file():
        logger.debug("No state file at %s — starting fresh", path)
        return BuildState()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        state = BuildState.model_validate(data)
        logger.debug("Loaded state from %s (updated_at=%s)", path, state.updated_at)
        return state
    except json.JSONDecodeError as e:
        logger.warning("Corrupt state file %s: %s — starting fresh", path, e)
        return BuildState()
    except Exception as e:
        logger.warning("Cannot load state from %s: %s — starting fresh", path, e)
        return BuildState()


def save_state(state: BuildState, path: Path) -> None:
    """Save build state to a JSON file (atomic write)."""
    state.touch()
    path.parent.mkdir(parents=True, exist_ok=True)

    content = json.dumps(state.model_dump(mode="json"), indent=2, ensure_ascii=False) + "\n"

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".state_", suffix=".tmp")
    tmp = Path(tmp_path)
    try:
        with open(fd, "w", encoding="utf-8") as f:
            f.write(content)
        tmp.replace(path)
        logger.debug("State saved to %s", path)
    except Exception:
        tmp.unlink(missing_ok=True)
        logger.error("Failed to save state to %s", path)
        raise
