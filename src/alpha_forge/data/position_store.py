import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from alpha_forge.models.performance import PortfolioSnapshot
from alpha_forge.models.position import Position

logger = logging.getLogger(__name__)

_snapshots = TypeAdapter(list[PortfolioSnapshot])


def _read_json(path: Path) -> object:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return json.loads(path.read_text())


def parse_positions(raw: object, strict: bool = True) -> list[Position]:
    """Validate a JSON payload into positions.

    Accepts either a bare list or an object with a ``positions`` key. With
    ``strict=False`` invalid rows are logged and skipped instead of raising.
    """
    if isinstance(raw, dict):
        raw = raw.get("positions", [])
    if not isinstance(raw, list):
        raise ValueError("Expected a list of positions")

    positions: list[Position] = []
    for i, item in enumerate(raw):
        try:
            positions.append(Position.model_validate(item))
        except ValidationError:
            if strict:
                raise
            logger.warning("Skipping invalid position at index %d", i)
    return positions


def load_positions(path: Path, strict: bool = True) -> list[Position]:
    positions = parse_positions(_read_json(path), strict=strict)
    logger.info("Loaded %d position(s) from %s", len(positions), path)
    return positions


def load_history(path: Path) -> list[PortfolioSnapshot]:
    raw = _read_json(path)
    if isinstance(raw, dict):
        raw = raw.get("snapshots", [])
    history = _snapshots.validate_python(raw)
    return sorted(history, key=lambda s: s.timestamp)


def save_history(path: Path, history: list[PortfolioSnapshot]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(_snapshots.dump_json(history, indent=2))
