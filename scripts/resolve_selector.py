#!/usr/bin/env python3
"""Resolve a selector against a saved dump or a live UIAutomator2 server."""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from phone_selector import ElementResolver, ResolveError, UIAutomator2Client
from phone_selector.selectors import (
    FileSourceClient,
    PlaybackSourceClient,
    RecordingSourceClient,
    ResolveErrorCode,
    SelectorSchemaError,
    load_selector_file,
    load_selector_from_json,
)
from phone_selector.selectors.hierarchy import extract_texts, parse_page_source


def _build_client(args: argparse.Namespace):
    if args.dump:
        return FileSourceClient(args.dump)
    if args.playback_dir:
        return PlaybackSourceClient(args.playback_dir)
    client = UIAutomator2Client(args.server)
    client.create_session()
    return client


def main() -> int:
    parser = argparse.ArgumentParser(description="Resolve a UI selector")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--dump", default=None, help="Saved hierarchy XML file")
    source.add_argument("--playback-dir", default=None, help="Replay recorded dumps from directory")
    source.add_argument("--server", default="http://127.0.0.1:6790", help="UIAutomator2 server URL")
    query = parser.add_mutually_exclusive_group(required=True)
    query.add_argument("--selector-file", default=None, help="Selector YAML file")
    query.add_argument("--selector", default=None, help="Selector as JSON")
    parser.add_argument("--record-dir", default=None, help="Record hierarchy dumps to directory")
    parser.add_argument("--timeout", type=int, default=0, help="Timeout in ms (0 = tier default)")
    parser.add_argument("--optional", action="store_true", help="Use the optional-lookup timeout")
    parser.add_argument("--quick", action="store_true", help="Use the quick-lookup timeout")
    parser.add_argument("--verbose", action="store_true", help="Log every attempt")

    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")
    logger.enable("phone_selector")

    try:
        if args.selector_file:
            selector = load_selector_file(args.selector_file)
        else:
            selector = load_selector_from_json(args.selector)
    except SelectorSchemaError as exc:
        print(f"error={exc}")
        for detail in exc.errors:
            print(f"  {detail}")
        return 2

    try:
        client = _build_client(args)
    except (ResolveError, ValueError) as exc:
        print("found=false")
        print(f"error={exc}")
        return 1

    try:
        return _resolve(args, client, selector)
    finally:
        if isinstance(client, UIAutomator2Client) and client.has_session():
            client.close()


def _resolve(args: argparse.Namespace, client, selector) -> int:
    if args.record_dir:
        client = RecordingSourceClient(client, args.record_dir)
    resolver = ElementResolver(client)

    try:
        if args.quick:
            info = resolver.find_quick(selector, args.timeout)
        else:
            info = resolver.resolve(selector, optional=args.optional, timeout_ms=args.timeout)
    except ResolveError as exc:
        print("found=false")
        print(f"error={exc.code.value} message={exc}")
        if args.dump and exc.code is not ResolveErrorCode.PARSE_ERROR:
            texts = extract_texts(parse_page_source(client.source()))
            print(f"visible_texts={texts[:20]}")
        return 1

    bounds = info.bounds
    print("found=true")
    print(f"text={info.text!r}")
    print(f"bounds=[{bounds.x},{bounds.y}][{bounds.right},{bounds.bottom}] center={bounds.center}")
    print(f"enabled={info.enabled} visible={info.visible} native={info.handle is not None}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
