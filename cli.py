"""Simple CLI for local runs.

Usage examples:
- Call a vendor with a JSON request body:
  python cli.py call groq "{\"messages\":[{\"role\":\"user\",\"content\":\"hi\"}]}"

- JSON file input (prefix with @):
  python cli.py call gemini @request.json --pretty

- Run the JSON repair stage on saved model output (- reads stdin):
  python cli.py repair @raw_output.txt --pretty

Notes:
- `call` goes through exactly the same handler as Lambda, one POST, no retries.
"""
import argparse
import json
import sys
from pathlib import Path

from src.llmproxy.config import available_vendors
from src.llmproxy.envelope import build_payload
from src.llmproxy.handler import ProxyHandler
from src.llmproxy.logging_util import get_logger

logger = get_logger(__name__)

def _load_text(spec: str) -> str:
    if spec == "-":
        return sys.stdin.read()
    if spec.startswith("@"):
        return Path(spec[1:]).read_text(encoding="utf-8")
    return spec

def _dump(obj, pretty: bool):
    if pretty:
        print(json.dumps(obj, ensure_ascii=False, indent=2))
    else:
        print(json.dumps(obj, ensure_ascii=False))

def _cmd_call(args) -> int:
    try:
        body = _load_text(args.input)
    except OSError as e:
        logger.error("Failed to read input: %s", e)
        return 2

    handler = ProxyHandler.for_vendor(args.vendor)
    resp = handler.handle("POST", body, request_id="CLI")
    _dump({"status": resp.status, "body": resp.body}, args.pretty)
    return 0 if resp.status == 200 else 1

def _cmd_repair(args) -> int:
    try:
        text = _load_text(args.input)
    except OSError as e:
        logger.error("Failed to read input: %s", e)
        return 2

    _dump(build_payload(text, True, extractor=args.extractor), args.pretty)
    return 0

def main(argv=None) -> int:
    ap = argparse.ArgumentParser()
    sub = ap.add_subparsers(dest="command", required=True)

    p_call = sub.add_parser("call", help="Send one request through a vendor handler")
    p_call.add_argument("vendor", choices=available_vendors())
    p_call.add_argument("input", help="JSON string, @path/to/json or - for stdin")
    p_call.add_argument("--pretty", action="store_true", help="Pretty print the output JSON")
    p_call.set_defaults(func=_cmd_call)

    p_repair = sub.add_parser("repair", help="Run the JSON repair stage on raw model text")
    p_repair.add_argument("input", help="Text, @path/to/file or - for stdin")
    p_repair.add_argument("--extractor", choices=["span", "balanced"], default="span")
    p_repair.add_argument("--pretty", action="store_true", help="Pretty print the output JSON")
    p_repair.set_defaults(func=_cmd_repair)

    args = ap.parse_args(argv)
    return args.func(args)

if __name__ == "__main__":
    raise SystemExit(main())
