"""Generate C++ LSP declarations and JSON bindings from an LSP metaModel JSON."""

from __future__ import annotations

import argparse
import pathlib
import sys

from .config import GeneratorConfig
from .errors import GeneratorError
from .generator import generate, write_artifacts
from .metamodel import fetch_schema, load_model_file

DEFAULT_SCHEMA_PATH = pathlib.Path("metaModel.json")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="spec2cpp",
        description="Generate C++ LSP headers from an LSP metaModel schema JSON",
    )
    parser.add_argument("--schema", type=pathlib.Path, default=DEFAULT_SCHEMA_PATH)
    parser.add_argument(
        "--version",
        default="3.17",
        help="LSP version folder used when fetching schema (default: %(default)s)",
    )
    parser.add_argument(
        "--output-dir",
        type=pathlib.Path,
        default=pathlib.Path("src/lsp"),
        help="Directory receiving the generated headers (default: %(default)s)",
    )
    parser.add_argument(
        "--config",
        type=pathlib.Path,
        default=None,
        help="JSON file overriding the generator tables",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Do not write; fail if any generated header is out of date",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        config = (
            GeneratorConfig.from_file(args.config) if args.config else GeneratorConfig()
        )

        if not args.schema.exists():
            fetch_summary = fetch_schema(output=args.schema, version=args.version)
            schema_version = fetch_summary.get("schema_version")
            if schema_version:
                print(f"[fetch_schema] schema metaData.version={schema_version}")
            print(f"[fetch_schema] source={fetch_summary['source']}")
            print(
                f"[fetch_schema] wrote {fetch_summary['bytes']} bytes -> {fetch_summary['output']}"
            )

        model = load_model_file(args.schema, config)
        result = generate(model, config)
        touched = write_artifacts(result.artifacts, args.output_dir, check=args.check)
    except GeneratorError as exc:
        print(f"[codegen] error: {exc}", file=sys.stderr)
        return 1

    counts = result.counts
    print(f"[codegen] input={args.schema}")
    print(f"[codegen] output_dir={args.output_dir}")
    print(
        "[codegen] counts="
        f" enums={counts['enums']}"
        f" aliases={counts['aliases']}"
        f" interfaces={counts['interfaces']}"
        f" notifications={counts['notifications']}"
        f" requests={counts['requests']}"
        f" files={len(result.artifacts)}"
    )

    for note in result.removed:
        print(f"[INFO] removed {note}")

    if args.check:
        for path in touched:
            print(f"[WARNING] {path} is out of date", file=sys.stderr)
        return 1 if touched else 0

    return 0
