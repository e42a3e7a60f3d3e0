"""Command line entry point.

Usage:
  python -m promptscan module r            # render the R module for the cwd
  python -m promptscan module r --path DIR --plain
  python -m promptscan modules             # list registered modules
  python -m promptscan metrics             # dump Prometheus metrics of this run
Options:
  --path     Directory to scan (default: current directory)
  --plain    Print without ANSI styling
  --json     Print the module descriptor as JSON
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from . import metrics
from .context import Context
from .logging_utils import configure_logging
from .modules import ALL_MODULES, handle


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog='promptscan', description='Render prompt modules for a directory')
    sub = ap.add_subparsers(dest='command', required=True)

    mod = sub.add_parser('module', help='Render a single module')
    mod.add_argument('name', help='Module name, e.g. r')
    mod.add_argument('--path', default=None, help='Directory to scan (default: cwd)')
    out = mod.add_mutually_exclusive_group()
    out.add_argument('--plain', action='store_true', help='Print without ANSI styling')
    out.add_argument('--json', action='store_true', help='Print the module descriptor as JSON')

    sub.add_parser('modules', help='List available modules')
    sub.add_parser('metrics', help='Print Prometheus metrics')
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    if args.command == 'modules':
        for name in sorted(ALL_MODULES):
            print(f'{name}: {ALL_MODULES[name].description}')
        return 0

    if args.command == 'metrics':
        sys.stdout.write(metrics.get_metrics().decode('utf-8'))
        return 0

    context = Context(current_dir=args.path)
    module = handle(args.name, context)
    if module is None or module.is_empty():
        # Absent or blank module: print nothing, the prompt simply omits it
        return 0
    if args.json:
        print(json.dumps(module.to_dict()))
    elif args.plain:
        sys.stdout.write(module.to_plain_string())
    else:
        sys.stdout.write(module.to_ansi_string())
    return 0
