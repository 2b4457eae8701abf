#!/usr/bin/env python3
"""
Interactive command-line seam editor.

Usage:
    seamgraph [image] [--output-dir DIR] [--no-snapshots] [--log-level LEVEL]

Menu:
    b - Highlight the bluest seam
    e - Highlight the lowest energy seam
    d - Remove the highlighted seam
    u - Undo previous edit
    q - Quit and save the final image
"""

import argparse
import logging
import sys
from typing import Callable, Optional

from .config import DEFAULT_OUTPUT_DIR, SessionConfig
from .errors import ExportError, ImageLoadError
from .session import ImageSession

logger = logging.getLogger(__name__)

Reader = Callable[[], str]
Writer = Callable[[str], None]


def _read_line(prompt: str = '') -> str:
    try:
        return input(prompt)
    except EOFError:
        return 'q'


def open_session(config: SessionConfig, path: Optional[str] = None,
                 read: Reader = _read_line, write: Writer = print) -> Optional[ImageSession]:
    """Open a session, prompting until a readable image path is given.

    Returns None if the user quits instead of giving a path.
    """
    if path is None:
        write("Welcome! Please enter a file path.")
        path = read().strip()
    while True:
        if path.lower() == 'q':
            return None
        try:
            return ImageSession(path, config)
        except ImageLoadError as exc:
            logger.debug("%s", exc)
            write("Invalid path. Please enter the exact path to the file.")
            path = read().strip()


def print_menu(session: ImageSession, write: Writer = print):
    write(f"Current width: {session.width}")
    write("Please choose an option")
    write("b - Highlight the bluest seam")
    write("e - Highlight the lowest energy seam")
    if session.can_delete:
        write("d - Remove the seam from the image")
    if session.can_undo:
        write("u - Undo previous edit")
    write("q - Quit")


def handle_choice(session: ImageSession, choice: str, write: Writer = print) -> bool:
    """
    Apply one menu choice to the session.

    A pending highlight is cancelled by any choice other than 'd', so the
    image never keeps a highlight past the next command.

    Returns:
        False once the user has quit, True otherwise
    """
    choice = choice.strip().lower()

    if session.highlighted and choice != 'd':
        session.undo()
        write("Highlight removed.")

    if choice == 'b':
        session.highlight_bluest()
        write("Ready to remove the bluest seam, as highlighted. "
              "Type 'd' to confirm, any other letter to cancel.")
    elif choice == 'e':
        session.highlight_lowest_energy()
        write("Ready to remove the lowest energy seam, as highlighted. "
              "Type 'd' to confirm, any other letter to cancel.")
    elif choice == 'd':
        if session.width <= 1:
            write("We cannot remove the last seam in the image. Please either undo or quit.")
        elif not session.highlighted:
            write("There is no highlighted seam to remove. Please highlight a seam first.")
        else:
            session.delete_highlighted()
            write("Seam removed.")
    elif choice == 'u':
        if not session.can_undo:
            write("There are no edits to undo! Please try a different command.")
        else:
            session.undo()
            write("Last edit restored")
    elif choice == 'q':
        write("Quitting...")
        path = session.finish()
        logger.info("Final image written to %s", path)
        return False
    else:
        write("That is not a valid option. "
              "Selections must be one of the singular characters listed.")
    return True


def run(session: ImageSession, read: Reader = _read_line, write: Writer = print):
    write("Welcome to Image Compression!")
    keep_running = True
    while keep_running:
        print_menu(session, write)
        keep_running = handle_choice(session, read(), write)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Interactive seam carving editor')
    parser.add_argument('image', nargs='?', default=None,
                        help='Image to edit (prompted for if omitted)')
    parser.add_argument('--output-dir', default=DEFAULT_OUTPUT_DIR,
                        help='Directory for snapshots and the final image')
    parser.add_argument('--no-snapshots', action='store_true',
                        help='Do not write an image after every edit')
    parser.add_argument('--log-level', default='WARNING',
                        help='Logging level (DEBUG, INFO, WARNING, ...)')
    return parser.parse_args(argv)


def main(argv=None, read: Reader = _read_line, write: Writer = print) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format='%(levelname)s %(name)s: %(message)s',
    )

    config = SessionConfig(output_dir=args.output_dir,
                           save_snapshots=not args.no_snapshots)
    session = open_session(config, args.image, read, write)
    if session is None:
        return 0

    try:
        run(session, read, write)
    except ExportError as exc:
        logger.error("%s", exc)
        write("Failed to export image")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
