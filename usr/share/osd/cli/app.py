#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# cli/app.py - CLI application orchestrator
#

"""
Runs the subtitle pipeline for one movie and turns errors into
messages and exit codes.

There is no recovery here: if the selection dialog is missing or the
user cancels it, the run fails instead of falling back to automatic
selection.
"""

from pathlib import Path
from typing import Optional, Union

from ..core.errors import (
    ChooserUnavailable,
    ConfigurationError,
    OsdError,
    RemoteError,
    SelectionCancelled,
)
from ..core.pipeline import SubtitlePipeline
from ..core.resolver import Chooser
from ..ui.choosers import create_chooser
from ..utils.config import Config, get_config
from ..utils.config_manager import ConfigManager
from ..utils.logger import set_logger, get_logger, Logger
from ..utils.i18n import _

EXIT_INTERRUPTED = 130


def describe_error(error: OsdError, config: Config) -> str:
    """User-facing message for a pipeline error"""
    if isinstance(error, RemoteError):
        if error.status == 401:
            return _("Authentication failed (401). Check your API key, username and password.")
        if error.status == 406:
            return _("Download quota exceeded (406): %s") % error.body
        return _("Request Error: %s") % error
    if isinstance(error, SelectionCancelled):
        return _("Movie not selected.")
    if isinstance(error, ChooserUnavailable):
        return _("%s Install zenity or kdialog, or use --terminal.") % error
    if isinstance(error, ConfigurationError):
        config_path = ConfigManager(config.config_dir).get_config_path()
        return _("%s (edit %s)") % (error, config_path)
    return str(error)


def run_cli(movie: Union[str, Path], config: Optional[Config] = None,
            chooser: Optional[Chooser] = None) -> int:
    """
    Main CLI entry point.

    Args:
        movie: Movie file to find a subtitle for
        config: Settings (the global config by default)
        chooser: Selection backend (built from config.gui_mode by default)

    Returns:
        Process exit code
    """
    config = config or get_config()

    logger_instance = Logger(
        log_file=config.log_file,
        verbose=config.verbose,
        quiet=config.quiet
    )
    set_logger(logger_instance)
    logger = get_logger()

    try:
        if config.use_gui and chooser is None:
            chooser = create_chooser(config.gui_mode or "gtk")

        pipeline = SubtitlePipeline(config, chooser=chooser)
        pipeline.run(movie)

    except KeyboardInterrupt:
        logger.info(_("Operation cancelled by user"))
        return EXIT_INTERRUPTED

    except OsdError as e:
        logger.error(describe_error(e, config))
        return e.exit_code

    return 0
