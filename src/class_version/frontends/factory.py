#!/usr/bin/env python3

"""Builds the declaration source selected by the run configuration."""

from ..domain.services.traversal import DeclarationSource
from ..infrastructure.config import Config, get_config
from ..infrastructure.logging import ProgressTracker, get_logger

logger = get_logger(__name__)


def create_declaration_source(config: Config, progress: ProgressTracker | None = None) -> DeclarationSource:
    """Instantiate the front end named by ``config.frontend``.

    Front-end modules are imported lazily so the dwarf front end does not need
    libclang and vice versa.

    Args:
        config: Validated run configuration
        progress: Tracker handed to the source

    Returns:
        An unopened DeclarationSource

    Raises:
        ValueError: For an unknown front end or an unusable compilation database
    """
    tuning = get_config()
    logger.debug(f"Front end: {config.frontend}, tuning: {tuning}")

    if config.frontend == "clang":
        from .clang import ClangDeclarationSource, CompileArguments, configure_libclang

        configure_libclang(tuning["LIBCLANG_FILE"], tuning["LIBCLANG_PATH"])
        return ClangDeclarationSource(
            config.sources,
            arguments=CompileArguments(config.build_path, config.extra_args),
            progress=progress,
            include_forward_declarations=tuning["INCLUDE_FORWARD_DECLARATIONS"],
            skip_function_bodies=tuning["SKIP_FUNCTION_BODIES"],
        )

    if config.frontend == "dwarf":
        from .dwarf import DwarfDeclarationSource

        if config.build_path is not None or config.extra_args:
            logger.warning("Compilation database and compiler arguments are ignored by the dwarf front end")
        return DwarfDeclarationSource(
            config.sources,
            progress=progress,
            include_forward_declarations=tuning["INCLUDE_FORWARD_DECLARATIONS"],
        )

    raise ValueError(f"Unknown front end: {config.frontend}")
