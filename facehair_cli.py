"""Command-line front end for NARAKA face/hair share codes.

    facehair decode NARAKA-FACEHAIR-XQAAgA...      # parsed JSON
    facehair decode --qr face.png --raw            # raw JSON from a QR image
    facehair encode parsed.json --qr face.png      # share code (+ QR image)
    facehair randomize NARAKA-FACEHAIR-...         # new share code
    facehair apply <current-code> <preset-code>
"""
import sys
import json
import asyncio
import logging
import argparse
from pathlib import Path

import facehair_config as config
from facehair_types import (
    CODE_PREFIX, FaceHairError, FaceHairPayloadError, RawFaceHair, ParsedFaceHair,
)
from facehair_encoder import FaceHairEncoder
from facehair_decoder import FaceHairDecoder
from facehair_presets import apply_smart_preset, randomize_parsed_data, nullify_parsed_data

LOG = logging.getLogger(__name__)


def _read_code(arg: str) -> str:
    """A share code, a link, or a path to a text file holding one."""
    if arg.startswith((CODE_PREFIX, "http://", "https://")):
        return arg
    try:
        if Path(arg).is_file():
            return Path(arg).read_text(encoding="utf-8").strip()
    except OSError:
        pass  # bare base64 code, not a usable path
    return arg


def _load_parsed(decoder: FaceHairDecoder, arg: str) -> ParsedFaceHair:
    raw = asyncio.run(decoder.resolve_code(_read_code(arg)))
    return decoder.decode_raw_to_parsed(raw)


def cmd_decode(args) -> None:
    decoder = FaceHairDecoder()
    if args.qr:
        raw = asyncio.run(decoder.decode_qr_image_to_raw(args.source))
    else:
        raw = asyncio.run(decoder.resolve_code(_read_code(args.source)))
    record = raw if args.raw else decoder.decode_raw_to_parsed(raw)
    print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))


def cmd_encode(args) -> None:
    encoder = FaceHairEncoder()
    try:
        data = json.loads(Path(args.source).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise FaceHairPayloadError(f"Cannot read JSON from {args.source}: {e}") from e
    if args.raw:
        raw = RawFaceHair.from_dict(data)
    else:
        raw = encoder.encode_parsed_to_raw(ParsedFaceHair.from_dict(data))
    print(encoder.encode_raw_to_code(raw))
    if args.qr:
        encoder.encode_raw_to_qr_image(raw, output_path=args.qr)


def cmd_transform(args) -> None:
    decoder = FaceHairDecoder()
    current = _load_parsed(decoder, args.source)
    if args.command == "randomize":
        result = randomize_parsed_data(current)
    elif args.command == "nullify":
        result = nullify_parsed_data(current)
    else:
        result = apply_smart_preset(current, _load_parsed(decoder, args.preset))
    print(FaceHairEncoder().encode_parsed_to_code(result))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="facehair", description="NARAKA face/hair share code tool")
    p.add_argument("--log-level", default=config.LOG_LEVEL)
    sub = p.add_subparsers(dest="command", required=True)

    d = sub.add_parser("decode", help="share code, link, or QR image -> JSON")
    d.add_argument("source")
    d.add_argument("--qr", action="store_true", help="source is a QR image")
    d.add_argument("--raw", action="store_true", help="print the flat faceData array")
    d.set_defaults(func=cmd_decode)

    e = sub.add_parser("encode", help="JSON file -> share code")
    e.add_argument("source")
    e.add_argument("--raw", action="store_true", help="input holds a flat faceData array")
    e.add_argument("--qr", default=None, help="also write a QR PNG to this path")
    e.set_defaults(func=cmd_encode)

    for name in ("randomize", "nullify"):
        t = sub.add_parser(name, help=f"{name} sliders of a share code")
        t.add_argument("source")
        t.set_defaults(func=cmd_transform)

    a = sub.add_parser("apply", help="apply a preset share code onto another")
    a.add_argument("source")
    a.add_argument("preset")
    a.set_defaults(func=cmd_transform)
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    try:
        args.func(args)
    except FaceHairError as e:
        LOG.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
