#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# main.py - Entry point for osd CLI
#

"""
osd - OpenSubtitles downloader

Finds the subtitle that matches a movie file on OpenSubtitles and saves
it next to the movie.
"""

import sys
import argparse
from pathlib import Path

# Add parent directory to path for relative imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from osd.utils.config import Config, set_config, APP_VERSION
from osd.utils.config_manager import ConfigManager
from osd.utils.logger import get_logger
from osd.core.errors import ConfigurationError
from osd.cli import run_cli
from rich.console import Console
from rich.text import Text


def show_help():
    """Display help using Rich"""
    console = Console()

    console.print()
    title = Text()
    title.append("osd", style="bold magenta")
    title.append(" - OpenSubtitles downloader ", style="cyan")
    title.append(f"v{APP_VERSION}", style="dim")
    console.print(title)
    console.print()

    console.print("[bold cyan]USAGE[/bold cyan]")
    console.print("  [yellow]osd[/yellow] [OPTIONS] [yellow]MOVIE[/yellow]")
    console.print()

    console.print("[bold cyan]OPTIONS[/bold cyan]")
    console.print("  [green]-h, --help[/green]              Show this help message and exit")
    console.print("  [green]--version[/green]               Show program version and exit")
    console.print("  [green]-v, --verbose[/green]           Print verbose information")
    console.print("  [green]-q, --quiet[/green]             Quiet mode (errors only)")
    console.print("  [green]-g, --gui[/green]               Select subtitle from a dialog (zenity or kdialog)")
    console.print("  [green]--terminal[/green]              Select subtitle from a terminal menu")
    console.print("  [green]-c, --custom-title[/green] [yellow]TITLE[/yellow] Search for TITLE instead of the file name")
    console.print("  [green]--no-hash[/green]               Do not send the movie hash with the search")
    console.print("  [green]-l, --language[/green] [yellow]LANG[/yellow]     Subtitle language (default from config, 'en')")
    console.print("  [green]--log[/green] [yellow]FILE[/yellow]              Save log to file")
    console.print("  [green]--timeout[/green] [yellow]SECONDS[/yellow]       Per-request timeout (default: 30)")
    console.print()

    console.print("[bold cyan]EXAMPLES[/bold cyan]")
    console.print("  [dim]# Best match (hash match first, else first result)[/dim]")
    console.print("  [yellow]osd[/yellow] Some.Movie.2019.1080p.mkv")
    console.print()
    console.print("  [dim]# Choose from a dialog[/dim]")
    console.print("  [yellow]osd[/yellow] -g Some.Movie.2019.1080p.mkv")
    console.print()
    console.print("  [dim]# Search by another title[/dim]")
    console.print("  [yellow]osd[/yellow] -c \"Some Movie\" --no-hash movie.mkv")
    console.print()

    console.print("[bold cyan]CONFIGURATION[/bold cyan]")
    console.print(f"  Config file: [cyan]{ConfigManager().get_config_path()}[/cyan]")
    console.print("  - api_key, username, password, language, user_agent")
    console.print("  - Environment: OSD_API_KEY, OSD_USERNAME, OSD_PASSWORD, OSD_LANGUAGE, OSD_USER_AGENT")
    console.print()


def parse_args(argv=None):
    """Parse command-line arguments"""
    argv = sys.argv[1:] if argv is None else argv
    if '-h' in argv or '--help' in argv:
        show_help()
        sys.exit(0)

    parser = argparse.ArgumentParser(
        prog='osd',
        description='OpenSubtitles downloader',
        add_help=False
    )

    parser.add_argument('--version', action='version',
                        version=f'osd {APP_VERSION}')

    verbosity_group = parser.add_mutually_exclusive_group()
    verbosity_group.add_argument('-v', '--verbose', action='store_true',
                                 help='Print verbose information')
    verbosity_group.add_argument('-q', '--quiet', action='store_true',
                                 help='Quiet mode (errors only)')

    selection_group = parser.add_mutually_exclusive_group()
    selection_group.add_argument('-g', '--gui', action='store_true',
                                 help='Select subtitle from a dialog')
    selection_group.add_argument('--terminal', action='store_true',
                                 help='Select subtitle from a terminal menu')

    parser.add_argument('-c', '--custom-title', type=str, metavar='TITLE',
                        help='Use a custom title instead of the file name')
    parser.add_argument('--no-hash', action='store_true',
                        help='Do not search by movie hash')
    parser.add_argument('-l', '--language', type=str, metavar='LANG',
                        help='Subtitle language')
    parser.add_argument('--log', type=str, metavar='FILE',
                        help='Save log to file')
    parser.add_argument('--timeout', type=float, default=30.0, metavar='SECONDS',
                        help='Per-request timeout')
    parser.add_argument('movie', help='Movie file')

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point"""
    args = parse_args(argv)

    try:
        config = Config(
            language=args.language or "",
            timeout=args.timeout,
            custom_title=args.custom_title,
            use_hash=not args.no_hash,
            use_gui=args.gui or args.terminal,
            gui_mode="terminal" if args.terminal else None,
            verbose=args.verbose,
            quiet=args.quiet,
            log_file=Path(args.log) if args.log else None,
        )
    except ConfigurationError as e:
        get_logger().error(str(e))
        return e.exit_code
    set_config(config)

    return run_cli(args.movie, config)


if __name__ == '__main__':
    sys.exit(main())
