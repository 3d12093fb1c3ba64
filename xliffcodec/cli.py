import argparse
import json
import os
import sys
from typing import Optional

from xliffcodec.config.codec_config import XliffConfig, load_config
from xliffcodec.errors import XliffCodecError
from xliffcodec.keys import generate_key
from xliffcodec.logger import get_logger
from xliffcodec.services.codec_service import FileMeta, XliffCodecPlugin
from xliffcodec.xliff_obj import TranslationUnit

logger = get_logger(__name__)


def _read_text(path: str) -> str:
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _write_text(text: str, output_path: Optional[str] = None):
    if not output_path:
        sys.stdout.write(text)
        return
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(text)
    logger.info(f"Saved {output_path}")


def _config_from_args(args) -> XliffConfig:
    if args.config:
        return load_config(args.config)
    return XliffCodecPlugin.configure()


def cmd_export(args):
    """JSON list of units -> XLIFF."""
    config = _config_from_args(args)
    data = json.loads(_read_text(args.units))
    if isinstance(data, dict):
        data = data.get("units", [])
    units = [TranslationUnit.from_dict(item) for item in data]

    meta = FileMeta(
        file_id=args.file_id or os.path.basename(args.units),
        source_lang=args.source_lang,
        target_lang=args.target_lang,
    )
    logger.info(f"Exporting {len(units)} units ({meta.source_lang} -> {meta.target_lang})")
    _write_text(XliffCodecPlugin.serialize(units, meta, config), args.output)


def cmd_import(args):
    """XLIFF -> JSON with units and diagnostics."""
    config = _config_from_args(args)
    result = XliffCodecPlugin.deserialize(_read_text(args.xliff), config)
    logger.info(f"Imported {len(result.units)} units, {len(result.diagnostics)} diagnostics")

    payload = {
        "units": [u.to_dict() for u in result.units],
        "diagnostics": [d.to_dict() for d in result.diagnostics],
    }
    _write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", args.output)


def cmd_key(args):
    print(generate_key(args.source, args.context))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="xliffcodec", description="XLIFF 1.2 translation unit codec")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser("export", help="Write units from a JSON file as XLIFF")
    export_parser.add_argument("units", help="Path to a JSON list of units")
    export_parser.add_argument("--file-id", help="Value of file/@original (default: input file name)")
    export_parser.add_argument("--source-lang", default="en", help="Source language code")
    export_parser.add_argument("--target-lang", required=True, help="Target language code")
    export_parser.add_argument("--config", help="Path to a JSON file with codec options")
    export_parser.add_argument("--output", help="Path to output .xlf file (default: stdout)")
    export_parser.set_defaults(func=cmd_export)

    import_parser = subparsers.add_parser("import", help="Read units from an XLIFF file as JSON")
    import_parser.add_argument("xliff", help="Path to input .xlf file")
    import_parser.add_argument("--config", help="Path to a JSON file with codec options")
    import_parser.add_argument("--output", help="Path to output .json file (default: stdout)")
    import_parser.set_defaults(func=cmd_import)

    key_parser = subparsers.add_parser("key", help="Print the key for a source string")
    key_parser.add_argument("source")
    key_parser.add_argument("--context", default="")
    key_parser.set_defaults(func=cmd_key)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except (XliffCodecError, FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
