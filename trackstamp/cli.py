#!/usr/bin/env python3
"""
Command-line interface for trackstamp.
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import DEFAULT_GPX_SEARCH_PATH, ProcessingOptions
from .core import PhotoProcessor
from .exceptions import TrackstampError

logger = logging.getLogger("trackstamp")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trackstamp",
        description="Geotag photos from GPS tracks and rename them in chronological order",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  trackstamp --find-gpx *.jpg
  trackstamp --gpx 2023-02-01_trip.gpx --time-add +01:00 *.jpg
  trackstamp --gpx-path ~/tracks --months-back 2 --dry-run DCIM/*

The tool will:
1. Rotate photos according to their EXIF orientation
2. Remove GPS tags written by unreliable camera receivers
3. Geotag photos from the GPS tracks, grouped by UTC offset
4. Rename files as: YYYYMMDD_HHMMSS-originalname.ext

Tracks are searched in the current directory and {DEFAULT_GPX_SEARCH_PATH}
unless --gpx-path is given.
        """
    )

    parser.add_argument(
        'files',
        nargs='+',
        help='Photo and video files to process'
    )
    parser.add_argument(
        '-g', '--gpx',
        dest='gpx_files',
        action='append',
        default=[],
        metavar='FILE',
        help='GPX track to correlate against (repeatable)'
    )
    parser.add_argument(
        '-f', '--find-gpx',
        action='store_true',
        help='Search for GPX tracks matching the photo dates'
    )
    parser.add_argument(
        '-p', '--gpx-path',
        dest='gpx_search_paths',
        action='append',
        metavar='DIR',
        help='Directory to search for GPX tracks (repeatable, implies --find-gpx)'
    )
    parser.add_argument(
        '-m', '--months-back',
        type=int,
        metavar='N',
        help='Use tracks from the last N months instead of the photo dates'
    )
    parser.add_argument(
        '-z', '--time-add',
        metavar='+HH:MM',
        help='UTC offset for photos without timezone metadata'
    )
    parser.add_argument(
        '-Z', '--time-add-force',
        metavar='+HH:MM',
        help='UTC offset for all photos, ignoring timezone metadata'
    )
    parser.add_argument(
        '--no-rotate',
        dest='rotate',
        action='store_false',
        help='Do not rotate photos'
    )
    parser.add_argument(
        '--no-strip-gps',
        dest='strip_gps',
        action='store_false',
        help='Keep GPS tags written by the camera'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be done without changing any file'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug output'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    return parser


def options_from_args(args: argparse.Namespace) -> ProcessingOptions:
    return ProcessingOptions(
        time_add=args.time_add,
        time_add_force=args.time_add_force,
        gpx_files=args.gpx_files,
        find_gpx=args.find_gpx,
        gpx_search_paths=args.gpx_search_paths,
        months_back=args.months_back,
        verbose=args.verbose,
        dry_run=args.dry_run,
        rotate=args.rotate,
        strip_gps=args.strip_gps,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the trackstamp command."""
    args = build_parser().parse_args(argv)
    options = options_from_args(args)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
        stream=sys.stderr,
    )

    try:
        PhotoProcessor(options, log=logger).run(args.files)
    except KeyboardInterrupt:
        logger.error("Operation cancelled by user.")
        return 1
    except (TrackstampError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
