#!/usr/bin/env python3
"""
bmpstego Command Line Interface

Hide a file inside a 24-bit BMP image and get it back.

Usage:
    bmpstego encode COVER.bmp SECRET [STEGO.bmp]
    bmpstego decode STEGO.bmp [OUTPUT]
    bmpstego info IMAGE.bmp
    bmpstego --version
    bmpstego --help
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .core import ArgumentError, StegoManager, StegoResult


class BMPStegoCLI:
    """Main CLI application for bmpstego."""

    def __init__(self, manager: Optional[StegoManager] = None):
        self.manager = manager or StegoManager()

    def run(self, args: List[str]) -> int:
        """Run the CLI with given arguments."""
        parser = self.create_parser()
        parsed = parser.parse_args(args)
        self.configure_logging(parsed.verbose, parsed.quiet)

        if hasattr(parsed, 'func'):
            try:
                return parsed.func(parsed)
            except ArgumentError as e:
                print(f"Error: {e.message}", file=sys.stderr)
                parser.print_usage(sys.stderr)
                return 1
        else:
            parser.print_help()
            return 1

    @staticmethod
    def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
        level = logging.INFO
        if verbose:
            level = logging.DEBUG
        elif quiet:
            level = logging.WARNING
        logging.basicConfig(level=level, format="%(levelname)s: %(message)s", force=True)

    def create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog="bmpstego",
            description="Hide files in 24-bit BMP images using LSB substitution",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
    bmpstego encode beautiful.bmp secret.txt
    bmpstego encode beautiful.bmp notes.pdf hidden.bmp
    bmpstego decode stego.bmp
    bmpstego decode hidden.bmp recovered
    bmpstego info beautiful.bmp
            """
        )

        parser.add_argument(
            '--version',
            action='version',
            version=f'bmpstego v{__version__}'
        )
        verbosity = parser.add_mutually_exclusive_group()
        verbosity.add_argument('--verbose', '-v', action='store_true',
                               help='Show decoded field values')
        verbosity.add_argument('--quiet', '-q', action='store_true',
                               help='Only report warnings and errors')

        subparsers = parser.add_subparsers(title='commands', dest='command')

        self.add_encode_command(subparsers)
        self.add_decode_command(subparsers)
        self.add_info_command(subparsers)

        return parser

    def add_encode_command(self, subparsers):
        """Add encode command to parser."""
        default_stego = self.manager.config.default_stego_name
        cmd = subparsers.add_parser('encode', help='Hide a file in a BMP image')
        cmd.add_argument('cover', help='Cover image (.bmp)')
        cmd.add_argument('secret', help='File to hide')
        cmd.add_argument('stego', nargs='?', default=default_stego,
                         help=f'Output image (.bmp, default: {default_stego})')
        cmd.set_defaults(func=self.handle_encode)

    def add_decode_command(self, subparsers):
        """Add decode command to parser."""
        default_stem = self.manager.config.default_output_stem
        cmd = subparsers.add_parser('decode', help='Recover a file hidden in a BMP image')
        cmd.add_argument('stego', help='Stego image (.bmp)')
        cmd.add_argument('output', nargs='?', default=None,
                         help=f'Output base name, extension is restored (default: {default_stem})')
        cmd.set_defaults(func=self.handle_decode)

    def add_info_command(self, subparsers):
        """Add info command to parser."""
        cmd = subparsers.add_parser('info', help='Show image format and hiding capacity')
        cmd.add_argument('image', help='Image to inspect')
        cmd.set_defaults(func=self.handle_info)

    @staticmethod
    def require_bmp(path: str, role: str) -> None:
        if ".bmp" not in path:
            raise ArgumentError(f"{role} file should be .bmp: {path}")

    @staticmethod
    def report(result: StegoResult, failure_label: str) -> int:
        if result.success:
            print(result.message)
            return 0
        stage = f" at {result.stage}" if result.stage else ""
        print(f"ERROR: {failure_label}{stage}: {result.message}", file=sys.stderr)
        return 1

    # Command handlers

    def handle_encode(self, args) -> int:
        """Handle encode command."""
        self.require_bmp(args.cover, "Source image")
        self.require_bmp(args.stego, "Stego image")
        result = self.manager.embed(args.cover, args.secret, args.stego)
        return self.report(result, "ENCODING FAILED")

    def handle_decode(self, args) -> int:
        """Handle decode command."""
        self.require_bmp(args.stego, "Stego image")
        result = self.manager.extract(args.stego, args.output)
        return self.report(result, "DECODING FAILED")

    def handle_info(self, args) -> int:
        """Handle info command."""
        result = self.manager.inspect(args.image)
        if not result.success:
            return self.report(result, "INSPECTION FAILED")

        info = result.details
        print(f"File:            {info['path']}")
        print(f"Format:          {info['format'] or 'unknown'} ({info['mode'] or '-'})")
        print(f"Dimensions:      {info['width']} x {info['height']}")
        print(f"Pixel bytes:     {info['pixel_capacity']:,}")
        print(f"Usable bytes:    {info['usable_bytes']:,}")
        print(f"Max secret size: {info['max_secret_size']:,} bytes")
        return 0


def main():
    """Main entry point."""
    cli = BMPStegoCLI()
    sys.exit(cli.run(sys.argv[1:]))


if __name__ == "__main__":
    main()
