#!/usr/bin/env python3
"""
EBP Reader - Command line entry point

Usage:
    # Summary of a project file
    python -m ebp_reader project.ebp

    # Decoded components as JSON
    python -m ebp_reader project.ebp --section components --format json

    # Structural check only
    python -m ebp_reader project.ebp --validate-only
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import yaml

from .models.ebp import NOT_AVAILABLE, EbpProject
from .models.modules import generate_bom
from .models.settings_manager import OUTPUT_FORMATS, SECTIONS, SettingsManager
from .models.statistics import get_statistics, get_visible_channel_groups
from .utils.ebp_parser import EbpParser
from .utils.error_handler import EbpError, ErrorCategory, get_error_handler
from .utils.logger import setup_logger
from .utils.validation import validate_ebp

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="ebp-reader",
        description="Decode EBP marine electronics project files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s project.ebp                              # Text summary
  %(prog)s project.ebp --section alarms             # Only alarms
  %(prog)s project.ebp --section all --format yaml  # Everything as YAML
  %(prog)s project.ebp --validate-only              # Structural check
"""
    )

    parser.add_argument("file", help="EBP project file to decode")
    parser.add_argument("-s", "--section", choices=SECTIONS, help="Part of the project to output")
    parser.add_argument("-f", "--format", choices=OUTPUT_FORMATS, help="Output format")
    parser.add_argument("--validate-only", action="store_true", help="Only run structural validation")
    parser.add_argument("-c", "--config", metavar="FILE", help="Settings file (JSON or YAML)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    return parser.parse_args(argv)


def build_section(project: EbpProject, section: str) -> Any:
    """Serializable data for one section of a decoded project."""
    if section == "metadata":
        return project.metadata.to_dict() if project.metadata else None
    if section == "units":
        return [u.to_dict() for u in project.units]
    if section == "alarms":
        return [a.to_dict() for a in project.alarms]
    if section == "components":
        return [c.to_dict() for c in project.components]
    if section == "memory":
        return [m.to_dict() for m in project.memory]
    if section == "schemas":
        return [s.to_dict() for s in project.schemas]
    if section == "bom":
        return [e.to_dict() for e in generate_bom(project.units)]
    if section == "stats":
        return get_statistics(project.units).to_dict()

    data = project.to_dict()
    data["bom"] = build_section(project, "bom")
    data["stats"] = build_section(project, "stats")
    return data


def format_text(project: EbpProject, section: str) -> str:
    """Plain text rendering of the requested section(s)."""
    lines: List[str] = []

    def show(name: str) -> bool:
        return section in ("all", name)

    if show("metadata"):
        meta = project.metadata
        lines.append("Project")
        lines.append("=" * 40)
        if meta is None:
            lines.append("  (no project metadata)")
        else:
            lines.append(f"  Firmware:       {meta.firmware}")
            lines.append(f"  Studio version: {meta.studio_version}")
            lines.append(f"  Format version: {meta.format_version}")
            lines.append(f"  Saved (UTC):    {meta.saved_at_utc}")
        lines.append(f"  Units found:    {len(project.units)}")
        lines.append("")

    if show("stats"):
        stats = get_statistics(project.units)
        lines.append(f"Channels: {stats.total_channels} "
                     f"(input {stats.input_channels}, output {stats.output_channels}, both {stats.both_channels})")
        lines.append("")

    if show("units"):
        for unit in project.units:
            lines.append(f"Unit {unit.name} (ID {unit.id}, serial {unit.serial}, type {unit.unit_type_id})")
            for index, group in enumerate(get_visible_channel_groups(unit), start=1):
                lines.append(f"  Group {index}")
                for channel in group.channels:
                    settings = channel.settings
                    lines.append(
                        f"    #{channel.number} {channel.name} [{channel.direction}] "
                        f"in: {settings.input.type} / {settings.input.subtype}; "
                        f"out: {settings.output.type} / {settings.output.subtype}"
                    )
        lines.append("")

    if show("alarms"):
        lines.append(f"Alarms ({len(project.alarms)})")
        for alarm in project.alarms:
            lines.append(f"  {alarm.alarm_id:>6}  {alarm.alarm_name}  [{alarm.schema_name}]")
        lines.append("")

    if show("components"):
        lines.append(f"NMEA 2000 components ({len(project.components)})")
        for comp in project.components:
            instance = "" if comp.instance is None else comp.instance
            lines.append(
                f"  PGN {comp.pgn:<6} {comp.name:<18} device {comp.device} instance {instance} "
                f"{comp.label} {comp.direction.label} [{comp.tab_name}]"
            )
        lines.append("")

    if show("memory"):
        lines.append(f"Memory ({len(project.memory)})")
        for mem in project.memory:
            location = NOT_AVAILABLE if mem.location is None else mem.location
            lines.append(f"  {location}: {mem.type} ({mem.bits} bit)")
        lines.append("")

    if show("schemas"):
        lines.append(f"Schemas ({len(project.schemas)})")
        for schema in project.schemas:
            lines.append(f"  {schema.sort_index}: {schema.name} (id {schema.id})")
        lines.append("")

    if show("bom"):
        lines.append("Bill of Materials")
        for entry in generate_bom(project.units):
            lines.append(f"  {entry.quantity} x {entry.product_number} ({entry.standard_unit_variant_number})")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def render(project: EbpProject, section: str, output_format: str) -> str:
    if output_format == "text":
        return format_text(project, section)

    if section == "all":
        data = build_section(project, section)
    else:
        data = {section: build_section(project, section)}

    if output_format == "json":
        return json.dumps(data, indent=2) + "\n"
    return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = parse_args(argv)

    settings_manager = SettingsManager()
    if args.config:
        success, error = settings_manager.load_from_file(args.config)
        if not success:
            print(f"Error: {error}", file=sys.stderr)
            return EXIT_FAILED
    settings = settings_manager.get_settings()

    setup_logger(
        log_level=logging.DEBUG if args.verbose else settings.log_level,
        max_size_mb=settings.max_log_size_mb,
        backup_count=settings.log_backup_count,
        log_dir=settings.log_dir,
        # Without -v the console only carries the messages printed below
        console_level=logging.DEBUG if args.verbose else logging.CRITICAL,
    )

    error_handler = get_error_handler()
    parser = EbpParser()

    try:
        content = parser.read_file(args.file)
    except (OSError, EbpError) as e:
        info = error_handler.handle_exception(e)
        print(f"Error: {info.message}", file=sys.stderr)
        return EXIT_FAILED

    if args.validate_only or settings.validate_before_parse:
        for error in validate_ebp(content).errors:
            error_handler.warning(error, ErrorCategory.VALIDATION)
            print(f"Validation: {error}", file=sys.stderr)

    if args.validate_only:
        findings = error_handler.get_history(ErrorCategory.VALIDATION)
        if findings:
            print(f"{args.file}: {len(findings)} validation problem(s)", file=sys.stderr)
            return EXIT_FAILED
        print(f"{args.file}: valid")
        return EXIT_OK

    try:
        project = parser.parse_string(content, filename=Path(args.file).stem)
    except EbpError as e:
        info = error_handler.handle_exception(e)
        print(f"Error: {info.message}", file=sys.stderr)
        return EXIT_FAILED

    logger.info(f"Decoded {len(project.units)} units, {len(project.components)} components from {args.file}")

    section = args.section or settings.section
    output_format = args.format or settings.output_format
    sys.stdout.write(render(project, section, output_format))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
