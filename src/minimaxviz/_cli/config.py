"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from minimaxviz._direction import Direction


class ConfigError(Exception):
    """Error in minimaxviz configuration."""


@dataclass(slots=True, frozen=True)
class MinimaxVizConfig:
    """Configuration loaded from the ``[tool.minimaxviz]`` table.

    Relative paths are resolved from the project root (directory containing pyproject.toml).
    Unset fields are None so that command-line defaults apply.
    """

    input: Path | None = None
    direction: Direction | None = None
    maximizing_at_root: bool | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def parse_start(value: object) -> bool:
    """Parse a starting role (``"max"`` or ``"min"``) into ``maximizing_at_root``.

    Raises:
        ConfigError: If the value is neither ``"max"`` nor ``"min"``.

    """
    if value == "max":
        return True
    if value == "min":
        return False
    msg = f"Invalid start {value!r}: expected 'max' or 'min'"
    raise ConfigError(msg)


def _parse_direction(value: object) -> Direction:
    valid = ", ".join(repr(d.value) for d in Direction)
    if not isinstance(value, str):
        msg = f"Invalid [tool.minimaxviz].direction: expected one of {valid}"
        raise ConfigError(msg)
    try:
        return Direction(value)
    except ValueError as e:
        msg = f"Invalid [tool.minimaxviz].direction {value!r}: expected one of {valid}"
        raise ConfigError(msg) from e


def load_config(pyproject_path: Path) -> MinimaxVizConfig:
    """Load and validate [tool.minimaxviz] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed MinimaxVizConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("minimaxviz", {})

    if not section:
        return MinimaxVizConfig(project_root=project_root)

    unknown = sorted(set(section) - {"input", "direction", "start"})
    if unknown:
        msg = f"Unknown [tool.minimaxviz] keys: {', '.join(unknown)}"
        raise ConfigError(msg)

    input_path: Path | None = None
    if "input" in section:
        input_value = section["input"]
        if not isinstance(input_value, str):
            msg = "Invalid [tool.minimaxviz].input: expected string path"
            raise ConfigError(msg)
        input_path = Path(input_value)
        if not input_path.is_absolute():
            input_path = project_root / input_path

    direction = _parse_direction(section["direction"]) if "direction" in section else None
    maximizing = parse_start(section["start"]) if "start" in section else None

    return MinimaxVizConfig(
        input=input_path,
        direction=direction,
        maximizing_at_root=maximizing,
        project_root=project_root,
    )


def get_config() -> MinimaxVizConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        MinimaxVizConfig (may be empty if no pyproject.toml or no [tool.minimaxviz] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return MinimaxVizConfig()
    return load_config(pyproject_path)
