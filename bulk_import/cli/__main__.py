from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from ..config.loader import ConfigError, ImportConfig, load_config
from ..export.writer import (
    error_report_csv,
    export_file_name,
    export_records_csv,
    template_csv,
    template_file_name,
)
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.field_schema import EntitySchema
from ..models.processing_result import ProcessingResult
from ..schemas.registry import UnknownEntityError, get_entity_schema
from ..services.existing import SnapshotCache, SnapshotError, load_existing_records
from ..services.importer import ImportProcessingError, process_files
from ..services.summary import render_summary_line

"""CLI entrypoint for the CSV bulk import tool.

Subcommands:
- validate: validate CSV files for one entity type, report errors per row
- template: write the downloadable template CSV of an entity type
- export:   re-serialize persisted records to the entity's export CSV
- entities: list the available entity types and their columns

Exit codes: 0 all rows valid, 2 at least one invalid row, 1 fatal error.
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _load_env_file(path: Path) -> None:
    """Load .env via python-dotenv (BULK_IMPORT_CONFIG may be set there).

    Variables already present in the process environment are kept.
    """
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=Path, default=None, help="Config YAML (default: config/import.yml)")
    common.add_argument("--debug", action="store_true", help="Enable debug logging")

    p = argparse.ArgumentParser(prog="bulk-import", description="CSV bulk import validator for HR settings lists")
    sub = p.add_subparsers(dest="command", required=True)

    v = sub.add_parser("validate", parents=[common], help="Validate CSV files for an entity type")
    v.add_argument("--entity", required=True, help="Entity type (see `entities`)")
    v.add_argument("files", nargs="+", type=Path, metavar="FILE")
    v.add_argument("--existing", type=Path, help="Existing records snapshot (.csv or .json)")
    v.add_argument("--valid-out", type=Path, help="Write valid records (.json -> JSON array, otherwise CSV)")
    v.add_argument("--errors-out", type=Path, help="Write an error report CSV")
    v.add_argument("--strict-header", action="store_true", help="Fail files whose header lacks schema columns")

    t = sub.add_parser("template", parents=[common], help="Write the template CSV of an entity type")
    t.add_argument("--entity", required=True)
    t.add_argument("-o", "--output", type=Path, help="Output file or directory (default: stdout)")

    e = sub.add_parser("export", parents=[common], help="Export persisted records as the entity CSV")
    e.add_argument("--entity", required=True)
    e.add_argument("--input", required=True, type=Path, help="Persisted records (.csv or .json)")
    e.add_argument("-o", "--output", type=Path, help="Output file or directory (default: stdout)")

    sub.add_parser("entities", parents=[common], help="List entity types and their columns")
    return p.parse_args(argv)


def _output_path(output: Path, default_name: str) -> Path:
    return output / default_name if output.is_dir() else output


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _report_rows(result: ProcessingResult, logger: Any) -> None:
    for stat in result.file_stats:
        if stat.result is None:
            continue
        for failure in stat.result.row_failures():
            logger.warning(f"file={stat.file_name} row={failure.row}: {'; '.join(failure.messages)}")


def _write_valid(path: Path, schema: EntitySchema, records: list[dict[str, Any]]) -> None:
    if path.suffix.lower() == ".json":
        _write_text(path, json.dumps(records, ensure_ascii=False, indent=2) + "\n")
    else:
        _write_text(path, export_records_csv(schema, records))


def _cmd_validate(args: argparse.Namespace, cfg: ImportConfig, schema: EntitySchema, logger: Any) -> int:
    snapshot = SnapshotCache.from_path(args.existing, cfg.encoding) if args.existing else None
    error_log = ErrorLogBuffer(cfg.error_log.directory) if cfg.error_log.enabled else None

    logger.info(f"Validating {len(args.files)} file(s) as entity={schema.name}")
    try:
        result = process_files(
            schema,
            args.files,
            snapshot,
            encoding=cfg.encoding,
            strict_header=args.strict_header,
            error_log=error_log,
        )
    except ImportProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    _report_rows(result, logger)
    logger.info(f"{result.valid_rows} valid row(s), {result.invalid_rows} invalid row(s)")

    if args.valid_out:
        _write_valid(args.valid_out, schema, result.valid_records())
        logger.info(f"valid records written: {args.valid_out}")
    if args.errors_out:
        errors = [e for s in result.file_stats if s.result is not None for e in s.result.errors]
        _write_text(args.errors_out, error_report_csv(errors))
        logger.info(f"error report written: {args.errors_out}")
    if error_log is not None and error_log.written:
        logger.info(f"error log: {error_log.file_path}")

    # strip "SUMMARY " since the formatter adds the label
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_FATAL
    if result.invalid_rows > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


def _emit(text: str, output: Path | None, default_name: str, logger: Any) -> None:
    if output is None:
        sys.stdout.write(text)
        return
    path = _output_path(output, default_name)
    _write_text(path, text)
    logger.info(f"written: {path}")


def _cmd_template(args: argparse.Namespace, schema: EntitySchema, logger: Any) -> int:
    _emit(template_csv(schema), args.output, template_file_name(schema), logger)
    return EXIT_SUCCESS_ALL


def _cmd_export(args: argparse.Namespace, cfg: ImportConfig, schema: EntitySchema, logger: Any) -> int:
    try:
        records = load_existing_records(args.input, encoding=cfg.encoding)
    except SnapshotError as e:
        logger.error(f"export: {e}")
        return EXIT_FATAL
    _emit(export_records_csv(schema, records), args.output, export_file_name(schema), logger)
    return EXIT_SUCCESS_ALL


def _cmd_entities(cfg: ImportConfig) -> int:
    for name in sorted(cfg.entities):
        schema = cfg.entities[name]
        cols = ", ".join(f"{f.name}*" if f.required else f.name for f in schema.fields)
        print(f"{name}: {cols}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read sys.argv when argv is None; [] from tests must stay empty
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    if args.debug:
        set_debug(True)

    _load_env_file(Path(".env"))
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    if cfg.source is not None:
        logger.debug(f"config loaded: {cfg.source}")

    if args.command == "entities":
        return _cmd_entities(cfg)

    try:
        schema = get_entity_schema(args.entity, cfg.entities)
    except UnknownEntityError as e:
        logger.error(f"entity: {e}")
        return EXIT_FATAL

    if args.command == "validate":
        return _cmd_validate(args, cfg, schema, logger)
    if args.command == "template":
        return _cmd_template(args, schema, logger)
    return _cmd_export(args, cfg, schema, logger)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
