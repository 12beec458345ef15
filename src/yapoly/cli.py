"""Inspect the yapoly solid catalog from the command line.

Example:
    python -m yapoly list --family platonic
    python -m yapoly info snub_cube --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from yapoly import __version__, database
from yapoly.errors import GeometryError, UnknownSolidError
from yapoly.polyhedron import PolyhedronAnalysis

logger = logging.getLogger(__name__)


def _format_vec(v) -> str:
    return '(' + ', '.join(f'{c:.6g}' for c in v) + ')'


def _print_info(info: dict) -> None:
    print(f"name:          {info['name']}")
    print(f"family:        {info['family']}")
    print(f"vertices:      {info['vertices']}")
    print(f"edges:         {info['edges']}")
    print(f"faces:         {info['faces']}")
    counts = {}
    for k in info['face_vertex_counts']:
        counts[k] = counts.get(k, 0) + 1
    print('face types:    ' + ', '.join(f'{n}x{k}-gon' for k, n in sorted(counts.items())))
    print(f"surface area:  {info['surface_area']:.9g}")
    print(f"volume:        {info['volume']:.9g}")
    if info['centroid'] is not None:
        print(f"centroid:      {_format_vec(info['centroid'])}")
    lo, hi = info['bounding_box']
    print(f"bounding box:  {_format_vec(lo)} - {_format_vec(hi)}")


def cmd_list(args: argparse.Namespace) -> int:
    for name in database.names(args.family):
        if args.family is None:
            print(f'{database.family_of(name):<18} {name}')
        else:
            print(name)
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    poly = database.get(args.name)
    info = PolyhedronAnalysis(poly).summary()
    info['family'] = database.family_of(args.name)
    logger.debug('analyzed %s', poly)
    if args.json:
        print(json.dumps(info, indent=2))
    else:
        _print_info(info)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='yapoly',
        description='Inspect the canonical polyhedra catalog',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    sub = parser.add_subparsers(dest='command', required=True)

    p_list = sub.add_parser('list', help='List catalog entries')
    p_list.add_argument('--family', choices=database.families(),
                        help='Only list one family')
    p_list.set_defaults(func=cmd_list)

    p_info = sub.add_parser('info', help='Describe one solid')
    p_info.add_argument('name', help='Catalog name, e.g. "cube" or "prism_6"')
    p_info.add_argument('--json', action='store_true', help='Output JSON')
    p_info.set_defaults(func=cmd_info)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )
    try:
        return args.func(args)
    except UnknownSolidError as exc:
        print(f'error: unknown solid {exc.args[0]!r}; try "yapoly list"', file=sys.stderr)
        return 1
    except GeometryError as exc:
        print(f'error: {exc}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    raise SystemExit(main())
