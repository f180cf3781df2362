"""Factory for building the application context with all dependencies wired.

The CLI calls build_context() once per process and passes the result down
through the typer context instead of keeping module-level instances.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from stamp.core.config import ConfigError, StampConfig, load_config
from stamp.core.counters import CounterManager
from stamp.core.generator import Generator, LayoutOverrides
from stamp.vault.detect import detect

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Objects shared by every CLI command."""

    config: StampConfig
    counters: CounterManager
    generator: Generator
    config_file: Path | None = None


def build_context(
    config_file: Path | str | None = None,
    working_dir: Path | str | None = None,
) -> AppContext:
    """
    Build a fully configured AppContext.

    Args:
        config_file: Config path (defaults to ~/.stamp/config.yaml)
        working_dir: Directory used for vault detection (defaults to cwd)

    Returns:
        AppContext with config, counter manager and generator

    Raises:
        OSError: If the counter file cannot be initialized
        GeneratorError: If the configured timezone is invalid
    """
    try:
        config = load_config(config_file)
    except ConfigError as e:
        logger.warning("Using default configuration: %s", e)
        config = StampConfig()

    counters = CounterManager(config.counter_file, project_start=config.project_start)
    generator = Generator(config.timezone)

    cwd = Path(working_dir) if working_dir else Path.cwd()
    try:
        result = detect(cwd)
    except OSError as e:
        logger.warning("Obsidian detection warning: %s", e)
    else:
        if result.in_vault:
            generator.apply_layouts(
                LayoutOverrides(
                    default=result.layouts.default,
                    daily=result.layouts.daily,
                )
            )

    return AppContext(
        config=config,
        counters=counters,
        generator=generator,
        config_file=Path(config_file).expanduser() if config_file else None,
    )
