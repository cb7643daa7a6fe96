"""Main CLI entry point for the xml-mapper command-line tool.

Loads XML files into node trees and runs the structural comparison
operations (intersect, diff, equal) or a normalizing round trip.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from xml_mapper import __version__
from xml_mapper.api import compare, parse_file, to_string
from xml_mapper.shared import ConfigError, MapperConfig, XMLMapperError
from xml_mapper.shared.logging import configure_logging, get_logger

EXIT_OK = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2
EXIT_INTERRUPTED = 130

COMPARE_COMMANDS = ["intersect", "diff", "equal"]
PRESETS = ["default", "compact", "readable"]


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self):
        self.mapper_config = MapperConfig()
        self.output_format = "text"

    def apply_preset(self, preset: str) -> None:
        """Replace the mapper configuration with a named preset."""
        if preset == "compact":
            self.mapper_config = MapperConfig.compact()
        elif preset == "readable":
            self.mapper_config = MapperConfig.readable()
        else:
            self.mapper_config = MapperConfig()

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        Recognized keys: ``preset``, ``output_format`` and ``mapper`` (a
        MapperConfig dictionary, applied after the preset).
        """
        config = cls()
        if not config_path.exists():
            return config

        try:
            with config_path.open() as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("the file must contain a JSON object")
            if "preset" in data:
                config.apply_preset(data["preset"])
            if "mapper" in data:
                config.mapper_config = merge_mapper_settings(config.mapper_config, data["mapper"])
            config.output_format = data.get("output_format", config.output_format)
        except (OSError, ValueError, ConfigError) as e:
            print(f"Warning: Could not load config file: {e}", file=sys.stderr)
            return cls()

        return config


def merge_mapper_settings(base: MapperConfig, settings: Any) -> MapperConfig:
    """Apply a MapperConfig dictionary on top of base, field by field."""
    if not isinstance(settings, dict):
        raise ValueError("'mapper' must be a JSON object")
    merged = base.to_dict()
    for key, value in settings.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return MapperConfig.from_dict(merged)


class TreeProcessor:
    """Core file processing logic for CLI operations."""

    def __init__(self, config: CLIConfig):
        self.config = config
        self.logger = get_logger(__name__, None, "cli_processor")

    def compare_files(
        self,
        left_path: Path,
        right_path: Path,
        operation: str,
        skip_empty: bool = True
    ) -> Dict[str, Any]:
        """Load two files and compare their trees."""
        mapper_config = self.config.mapper_config
        left = parse_file(left_path, config=mapper_config)
        right = parse_file(right_path, config=mapper_config)

        result = compare(left, right, operation, skip_empty=skip_empty, config=mapper_config)

        report = result.to_dict()
        report["left"] = str(left_path)
        report["right"] = str(right_path)
        return report

    def normalize_file(self, path: Path) -> str:
        """Round-trip a file through the node model."""
        node = parse_file(path, config=self.config.mapper_config)
        self.logger.debug("Normalized file", extra={"file": str(path)})
        return to_string(node, self.config.mapper_config)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xml-mapper",
        description="Convert XML to object trees and compare them structurally"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    descriptions = {
        "intersect": "Show what LEFT and RIGHT have in common",
        "diff": "Show the part of LEFT not matched by RIGHT",
        "equal": "Check whether LEFT and RIGHT serialize identically",
    }
    for command in COMPARE_COMMANDS:
        command_parser = subparsers.add_parser(command, help=descriptions[command])
        command_parser.add_argument("left", type=Path, help="First XML file")
        command_parser.add_argument("right", type=Path, help="Second XML file")
        _add_output_options(command_parser)
        if command == "intersect":
            command_parser.add_argument(
                "--keep-empty",
                action="store_true",
                help="Return an empty element instead of nothing when there is no overlap"
            )

    normalize_parser = subparsers.add_parser(
        "normalize", help="Round-trip an XML file through the object model"
    )
    normalize_parser.add_argument("path", type=Path, help="XML file")
    normalize_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    normalize_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )
    normalize_parser.add_argument(
        "--preset",
        choices=PRESETS,
        help="Configuration preset"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def _add_output_options(command_parser: argparse.ArgumentParser) -> None:
    command_parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default=None,
        help="Output format (default: text)"
    )
    command_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    command_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )
    command_parser.add_argument(
        "--preset",
        choices=PRESETS,
        help="Configuration preset"
    )


def format_report(report: Dict[str, Any], format_type: str) -> str:
    """Format a comparison report for output."""
    if format_type == "json":
        return json.dumps(report, indent=2)

    operation = report["operation"]
    if operation == "equal":
        return "equal" if report["equal"] else "not equal"
    if report["result"] is None:
        return "no overlap" if operation == "intersect" else "no differences"
    return report["result"].rstrip("\n")


def _load_config(args: argparse.Namespace) -> CLIConfig:
    config = CLIConfig()
    if args.config:
        config = CLIConfig.from_file(args.config)
    if args.preset:
        config.apply_preset(args.preset)
    return config


def _logging_level(args: argparse.Namespace, config: CLIConfig) -> str:
    if args.verbose:
        return "DEBUG"
    if args.quiet:
        return "ERROR"
    return config.mapper_config.global_.logging_level


def _write_output(text: str, output: Optional[Path]) -> int:
    if output:
        try:
            output.write_text(text + "\n")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return EXIT_ERROR
        print(f"Results written to {output}", file=sys.stderr)
    else:
        print(text)
    return EXIT_OK


def cmd_compare(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle intersect, diff and equal commands."""
    if args.format:
        config.output_format = args.format

    processor = TreeProcessor(config)
    skip_empty = not getattr(args, "keep_empty", False)
    try:
        report = processor.compare_files(args.left, args.right, args.command, skip_empty)
    except XMLMapperError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    status = _write_output(format_report(report, config.output_format), args.output)
    if status != EXIT_OK:
        return status
    return EXIT_OK if report["success"] else EXIT_DIFFERENT


def cmd_normalize(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle normalize command."""
    processor = TreeProcessor(config)
    try:
        text = processor.normalize_file(args.path)
    except XMLMapperError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    return _write_output(text.rstrip("\n"), args.output)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_DIFFERENT

    config = _load_config(args)
    configure_logging(_logging_level(args, config))

    try:
        if args.command in COMPARE_COMMANDS:
            return cmd_compare(args, config)
        if args.command == "normalize":
            return cmd_normalize(args, config)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return EXIT_ERROR

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
