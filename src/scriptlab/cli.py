"""CLI entrypoint for scriptlab: subcommand dispatcher."""

import argparse
import logging
import sys
from pathlib import Path

from scriptlab.errors import DataError


def _add_script_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("script", help="Script JSON file (items -> sentences -> words)")
    parser.add_argument("-v", "--verbose", action="store_true", default=False,
                        help="Enable debug logging")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments with subcommands."""
    parser = argparse.ArgumentParser(
        prog="scriptlab",
        description="Recording-script tools: MLF export, segment realignment, prosody",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    mlf_parser = subparsers.add_parser(
        "mlf",
        help="Export a monophone MLF for forced alignment",
        description="Translate script pronunciations into a recognizer label file",
    )
    _add_script_arg(mlf_parser)
    mlf_parser.add_argument("--output", default="mono.mlf",
                            help="MLF output path (default: mono.mlf)")
    mlf_parser.add_argument("--phone-map", default=None,
                            help="JSON phone map (default: built-in en-US phone map)")
    mlf_parser.add_argument("--check", action="store_true", default=False,
                            help="Validate only; do not write the MLF")
    mlf_parser.add_argument("--fill-pron", action="store_true", default=False,
                            help="Fill missing pronunciations with g2p_en first")

    combine_parser = subparsers.add_parser(
        "combine",
        help="Re-chunk phone segments into unit segments",
        description="Convert <id>.txt phone segment files to the script's units",
    )
    _add_script_arg(combine_parser)
    combine_parser.add_argument("--segments", required=True,
                                help="Directory of phone-level <id>.txt segment files")
    combine_parser.add_argument("--output-dir", default="./scriptlab-units",
                                help="Output directory (default: ./scriptlab-units)")
    combine_parser.add_argument("--ignore-tone", action=argparse.BooleanOptionalAction,
                                default=True,
                                help="Drop tone suffixes from unit labels (default: enabled)")

    prosody_parser = subparsers.add_parser(
        "prosody",
        help="Print the prosodic phrasing of each sentence",
    )
    _add_script_arg(prosody_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    return args


def _load_items(args: argparse.Namespace):
    from scriptlab.script_io import load_script

    script = Path(args.script)
    if not script.exists():
        print(f"Error: file not found: {script}", file=sys.stderr)
        sys.exit(1)
    try:
        return load_script(script)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _report(errors: list[DataError]) -> None:
    """Print data errors to stderr and exit non-zero if there are any."""
    for error in errors:
        print(f"Error: {error}", file=sys.stderr)
    if errors:
        print(f"{len(errors)} data error(s)", file=sys.stderr)
        sys.exit(1)


def _run_mlf(args: argparse.Namespace) -> None:
    """Run the MLF export."""
    from scriptlab.align.mlf import build_mono_mlf
    from scriptlab.align.phonemap import default_phone_map, load_phone_map

    items = _load_items(args)
    if not items:
        print("Error: script has no items", file=sys.stderr)
        sys.exit(1)

    if args.fill_pron:
        from scriptlab.lexicon import fill_missing_pronunciations
        fill_missing_pronunciations(items)

    phone_map = load_phone_map(args.phone_map) if args.phone_map else default_phone_map()
    out_path = None if args.check else Path(args.output)
    errors = build_mono_mlf(items, phone_map, out_path)

    if out_path is not None:
        print(f"Output: {out_path}")
    _report(errors)


def _run_combine(args: argparse.Namespace) -> None:
    """Run segment realignment over a directory."""
    from scriptlab.align import combine_segment_dir

    segments_dir = Path(args.segments)
    if not segments_dir.is_dir():
        print(f"Error: segment directory not found: {segments_dir}", file=sys.stderr)
        sys.exit(1)

    items = _load_items(args)
    errors = combine_segment_dir(items, segments_dir, args.output_dir,
                                 ignore_tone=args.ignore_tone)
    print(f"Output: {args.output_dir}")
    _report(errors)


def _run_prosody(args: argparse.Namespace) -> None:
    """Print intonation phrases, intermediate phrases and prosodic words."""
    for item in _load_items(args):
        for sentence in item.sentences:
            arena = sentence.build_intonation_phrases()
            print(f"{sentence.id}:")
            for handle in range(len(arena.intonation_phrases)):
                phrases = arena.intermediate_phrases_of(handle)
                print("  " + " || ".join(
                    " | ".join(str(pw) for pw in ip.prosodic_words)
                    for ip in phrases
                ))


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(name)s %(levelname)s: %(message)s",
    )

    if args.command == "mlf":
        _run_mlf(args)
    elif args.command == "combine":
        _run_combine(args)
    elif args.command == "prosody":
        _run_prosody(args)


if __name__ == "__main__":
    main()
