"""pickview configuration and settings.

Configuration is stored in ~/.config/pickview/config.toml. Every field
has a default, so the file is optional and may be partial.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pickview.core.paths import get_config_path
from pickview.errors import ConfigError, ConfigNotFoundError, ConfigParseError
from pickview.filesystem.models import SortOrder
from pickview.picker.command import DEFAULT_LINES, DEFAULT_SELECTOR_COMMAND, SelectorCommand

logger = logging.getLogger(__name__)


class PickviewConfig(BaseModel):
    """Configuration for the open pipeline.

    Attributes:
        selector_command: Argv template for the selector (see picker.command).
        prompt_suffix: Appended to the viewer name to form the pick prompt.
        confirm_prompt: Prompt for the removal confirmation.
        lines: Selector height; None means use the terminal height.
        sort: Default candidate ordering.
        keep_root: Never prune the scan root itself.
    """

    model_config = ConfigDict(extra="forbid")

    selector_command: Annotated[
        list[str],
        Field(min_length=1, description="Selector argv template"),
    ] = list(DEFAULT_SELECTOR_COMMAND)
    prompt_suffix: Annotated[
        str,
        Field(description="Text appended to the viewer name in the prompt"),
    ] = " "
    confirm_prompt: Annotated[
        str,
        Field(min_length=1, description="Prompt for removal confirmation"),
    ] = "Remove? "
    lines: Annotated[
        int | None,
        Field(ge=1, le=1000, description="Selector height (None = terminal height)"),
    ] = None
    sort: Annotated[
        SortOrder,
        Field(description="Candidate ordering"),
    ] = SortOrder.NAME
    keep_root: Annotated[
        bool,
        Field(description="Do not prune the scan root"),
    ] = False

    def selector(self, terminal_lines: int = DEFAULT_LINES) -> SelectorCommand:
        """Build the selector command.

        Args:
            terminal_lines: Height to use when ``lines`` is not configured.

        Returns:
            SelectorCommand for the configured template.
        """
        return SelectorCommand(
            template=tuple(self.selector_command),
            lines=self.lines or terminal_lines,
        )


def load_config(path: Path | None = None) -> PickviewConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated PickviewConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return PickviewConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def load_config_or_default(path: Path | None = None) -> PickviewConfig:
    """Load configuration, falling back to defaults if no file exists.

    An explicitly given path must exist.

    Raises:
        ConfigError: If the file exists but is invalid, or ``path`` is missing.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        if path is not None:
            raise
        logger.debug("No config file, using defaults")
        return PickviewConfig()


def save_config(config: PickviewConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The PickviewConfig object to save.
        path: Path to save the config. If None, uses default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: PickviewConfig) -> dict[str, object]:
    """Convert PickviewConfig to a dictionary for TOML serialization.

    ``lines`` is omitted when unset since TOML has no null.
    """
    result: dict[str, object] = {
        "selector_command": list(config.selector_command),
        "prompt_suffix": config.prompt_suffix,
        "confirm_prompt": config.confirm_prompt,
        "sort": config.sort.value,
        "keep_root": config.keep_root,
    }
    if config.lines is not None:
        result["lines"] = config.lines
    return result
