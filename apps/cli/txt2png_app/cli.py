"""CLI entrypoints for rendering text, managing the saved layout config, and diagnostics."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from txt2png_core import (
    RenderSession,
    build_doctor_payload,
    config_to_dict,
    load_config,
    parse_config_update,
    save_config,
)
from txt2png_core.logging_setup import configure_logging, get_logger, install_crash_hooks
from txt2png_renderer import LayoutConfig, supported_characters


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _parse_int_list(value: str, size: int, upper: int | None = None) -> list[int]:
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != size:
        raise argparse.ArgumentTypeError(f"expected {size} comma-separated integers, got {value!r}")
    try:
        numbers = [int(p, 10) for p in parts]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer list: {value!r}") from exc
    for n in numbers:
        if n < 0 or (upper is not None and n > upper):
            raise argparse.ArgumentTypeError(f"value out of range in {value!r}")
    return numbers


def parse_color(value: str) -> list[int]:
    return _parse_int_list(value, 4, upper=255)


def parse_margins(value: str) -> dict[str, int]:
    top, right, bottom, left = _parse_int_list(value, 4)
    return {"top": top, "right": right, "bottom": bottom, "left": left}


def _config_file(args: argparse.Namespace) -> Path | None:
    return Path(args.config_file).expanduser() if args.config_file else None


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    update: dict[str, Any] = {}
    for key in ("column_count", "column_width", "char_spacing", "line_spacing", "column_spacing", "scaling"):
        value = getattr(args, key)
        if value is not None:
            update[key] = value
    if args.margins is not None:
        update["margins"] = args.margins
    if args.fg is not None:
        update["fg_color"] = args.fg
    if args.bg is not None:
        update["bg_color"] = args.bg
    return update


def _read_text(args: argparse.Namespace) -> bytes:
    if args.text is not None:
        return args.text.encode("utf-8")
    if args.input:
        return Path(args.input).expanduser().read_bytes()
    return sys.stdin.buffer.read()


def cmd_render(args: argparse.Namespace) -> int:
    config_file = _config_file(args)
    session = RenderSession(load_config(config_file))
    if args.config:
        session.set_config(args.config)
    overrides = _overrides(args)
    if overrides:
        session.set_config(overrides)

    result = session.render(_read_text(args))

    if args.out == "-":
        sys.stdout.buffer.write(result.png)
        sys.stdout.buffer.flush()
    else:
        out = Path(args.out).expanduser()
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(result.png)
        _print_json({"out": str(out), "width": result.width, "height": result.height, "bytes": len(result.png)})

    if args.save_config:
        save_config(session.config, config_file)
    return 0


def cmd_config_show(args: argparse.Namespace) -> int:
    _print_json(config_to_dict(load_config(_config_file(args))))
    return 0


def cmd_config_set(args: argparse.Namespace) -> int:
    config_file = _config_file(args)
    cfg = parse_config_update(load_config(config_file), args.json)
    path = save_config(cfg, config_file)
    get_logger().info("config saved to %s", path, extra={"event": "config_saved"})
    _print_json(config_to_dict(cfg))
    return 0


def cmd_config_reset(args: argparse.Namespace) -> int:
    cfg = LayoutConfig()
    save_config(cfg, _config_file(args))
    _print_json(config_to_dict(cfg))
    return 0


def cmd_glyphs(_args: argparse.Namespace) -> int:
    print(supported_characters())
    return 0


def cmd_doctor(args: argparse.Namespace) -> int:
    _print_json(build_doctor_payload(load_config(_config_file(args))))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="txt2png", description="Render text with a 5x5 pixel font to PNG")
    parser.add_argument("--config-file", default=None, help="Optional path to the saved layout config")
    sub = parser.add_subparsers(dest="command", required=True)

    render_cmd = sub.add_parser("render", help="Render text to a PNG file")
    source = render_cmd.add_mutually_exclusive_group()
    source.add_argument("--text", default=None, help="Text to render")
    source.add_argument("--input", default=None, help="Read text from a file (stdin when omitted)")
    render_cmd.add_argument("--out", required=True, help="Output PNG path, or - for stdout")
    render_cmd.add_argument("--config", default=None, help="JSON object merged into the layout config")
    render_cmd.add_argument("--column-count", type=int, default=None)
    render_cmd.add_argument("--column-width", type=int, default=None)
    render_cmd.add_argument("--char-spacing", type=int, default=None)
    render_cmd.add_argument("--line-spacing", type=int, default=None)
    render_cmd.add_argument("--column-spacing", type=int, default=None)
    render_cmd.add_argument("--scaling", type=int, default=None)
    render_cmd.add_argument("--margins", type=parse_margins, default=None, help="TOP,RIGHT,BOTTOM,LEFT")
    render_cmd.add_argument("--fg", type=parse_color, default=None, help="Foreground R,G,B,A")
    render_cmd.add_argument("--bg", type=parse_color, default=None, help="Background R,G,B,A")
    render_cmd.add_argument("--save-config", action="store_true", help="Persist the effective layout config")
    render_cmd.set_defaults(func=cmd_render)

    config_cmd = sub.add_parser("config", help="Show or edit the saved layout config")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    show_cmd = config_sub.add_parser("show", help="Print the saved layout config")
    show_cmd.set_defaults(func=cmd_config_show)
    set_cmd = config_sub.add_parser("set", help="Merge a JSON object into the saved layout config")
    set_cmd.add_argument("json", help="JSON object, e.g. '{\"scaling\": 4}'")
    set_cmd.set_defaults(func=cmd_config_set)
    reset_cmd = config_sub.add_parser("reset", help="Restore the default layout config")
    reset_cmd.set_defaults(func=cmd_config_reset)

    glyphs_cmd = sub.add_parser("glyphs", help="List characters the font can draw")
    glyphs_cmd.set_defaults(func=cmd_glyphs)

    doctor_cmd = sub.add_parser("doctor", help="Print environment and config diagnostics")
    doctor_cmd.set_defaults(func=cmd_doctor)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(console=False)
    install_crash_hooks()
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
