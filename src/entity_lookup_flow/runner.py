#!/usr/bin/env python3
"""
Entity Lookup Runner

Usage:
    entity-lookup lookup A-1 A-2 --bundle article --lookup-field field_old_id
    entity-lookup options --entity-type media --bundle image
    entity-lookup components
    entity-lookup serve --port 9848

Options:
    --records FILE  Records file (YAML or JSON) backing the in-memory store
    --config FILE   Config file (default: config.local.yaml)
    --quiet/--debug Output verbosity
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .config import load_config, validate_config_file
from .core import ComponentRegistry, DataflowError, ExecutionContext, OutputMode, ValidationError
from .lookup import SchemaIntrospector
from .store import InMemoryRecordStore

logger = logging.getLogger(__name__)


def setup_logging(output_mode: OutputMode) -> None:
    """Configure logging based on output mode."""
    if output_mode == OutputMode.QUIET:
        level = logging.WARNING
    elif output_mode == OutputMode.DEBUG:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S"
    )

    # Suppress server loggers unless in debug mode
    if output_mode != OutputMode.DEBUG:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def parse_value(raw: str) -> Any:
    """Parse a CLI value as JSON where possible (numbers, lists), else keep the string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def load_store(records_path: Path) -> InMemoryRecordStore:
    if not records_path.exists():
        raise FileNotFoundError(f"Records file not found: {records_path}")
    return InMemoryRecordStore.from_file(records_path)


async def run_lookup(
    store: InMemoryRecordStore,
    value: Any,
    lookup_config: dict[str, Any],
    output_mode: OutputMode = OutputMode.NORMAL,
) -> dict[str, Any]:
    """Run the lookup component once against a store and return its outputs."""
    from . import components  # noqa: F401

    component = ComponentRegistry.get_instance().create(
        "transform/lookup_entity", "lookup", lookup_config
    )
    context = ExecutionContext(record_store=store, output_mode=output_mode)
    validation = component.validate({"value": value})
    if not validation.valid:
        raise ValidationError("Invalid lookup inputs", errors=validation.errors)
    return await component.execute({"value": value}, context)


def cmd_lookup(args: argparse.Namespace, config: dict, output_mode: OutputMode) -> int:
    lookup_config = dict(config["lookup"])
    for key in ("entity_type", "bundle", "lookup_field", "return_field"):
        override = getattr(args, key)
        if override is not None:
            lookup_config[key] = override

    store = load_store(args.records)
    values = [parse_value(v) for v in args.values]
    value = values[0] if len(values) == 1 else values

    outputs = asyncio.run(run_lookup(store, value, lookup_config, output_mode))
    print(json.dumps(outputs, indent=2, default=str))
    return 0 if outputs["found"] else 2


def cmd_options(args: argparse.Namespace, config: dict, output_mode: OutputMode) -> int:
    store = load_store(args.records)
    introspector = SchemaIntrospector(store)
    options = introspector.configuration_options({
        "entity_type": args.entity_type or config["lookup"]["entity_type"],
        "bundle": args.bundle or config["lookup"]["bundle"],
    })
    for name, choices in options.items():
        print(f"{name}:")
        if not choices:
            print("  (none)")
        for key, label in choices.items():
            print(f"  {key:<28} {label}")
    return 0


def cmd_components(args: argparse.Namespace, config: dict, output_mode: OutputMode) -> int:
    from . import components  # noqa: F401

    print(ComponentRegistry.get_instance().generate_docs())
    return 0


def cmd_serve(args: argparse.Namespace, config: dict, output_mode: OutputMode) -> int:
    import uvicorn

    from .server import create_app

    app = create_app(records_path=args.records)
    uvicorn.run(
        app,
        host=args.host or config["server"]["host"],
        port=args.port or config["server"]["port"],
        log_level="debug" if output_mode == OutputMode.DEBUG else "info",
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve imported values against stored records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("--config", type=Path, help="Config file (YAML)")
    parser.add_argument("--records", type=Path, help="Records file (YAML or JSON)")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Only print results")
    verbosity.add_argument("--debug", action="store_true", help="Print internal details")

    sub = parser.add_subparsers(dest="command", required=True)

    lookup = sub.add_parser("lookup", help="Resolve one value (or several, as a list)")
    lookup.add_argument("values", nargs="+", help="Value(s) to look up; JSON is parsed")
    lookup.add_argument("--entity-type", dest="entity_type")
    lookup.add_argument("--bundle")
    lookup.add_argument("--lookup-field", dest="lookup_field")
    lookup.add_argument("--return-field", dest="return_field")
    lookup.set_defaults(handler=cmd_lookup)

    options = sub.add_parser("options", help="List bundle and field choices")
    options.add_argument("--entity-type", dest="entity_type")
    options.add_argument("--bundle")
    options.set_defaults(handler=cmd_options)

    components = sub.add_parser("components", help="Print component documentation")
    components.set_defaults(handler=cmd_components)

    serve = sub.add_parser("serve", help="Start the HTTP API")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)
    serve.set_defaults(handler=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.quiet:
        output_mode = OutputMode.QUIET
    elif args.debug:
        output_mode = OutputMode.DEBUG
    else:
        output_mode = OutputMode.NORMAL
    setup_logging(output_mode)

    errors = validate_config_file(args.config)
    if errors:
        for error in errors:
            logger.error(f"Config: {error}")
        return 1
    config = load_config(args.config)
    if args.records is None:
        args.records = Path(config["store"]["records_path"]).expanduser()

    try:
        return args.handler(args, config, output_mode)
    except ValidationError as e:
        logger.error(f"{e}: {'; '.join(e.errors)}")
        return 1
    except (FileNotFoundError, ValueError, DataflowError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
