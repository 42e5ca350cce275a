#!/usr/bin/env python3
"""
gen_ramfuzz.py - harness scaffolding generator entry point

Generates ramfuzz wrapper declarations for the classes defined in the given
C++ sources.

Usage:
    python scripts/gen_ramfuzz.py src/a.hpp src/b.hpp -o fuzz/harness.hpp [-j N]
    python scripts/gen_ramfuzz.py --from-json ir/a.hpp.json
"""

import argparse
import logging
import os
import sys

# Add scripts directory to path when run from a checkout
script_dir = os.path.dirname(os.path.abspath(__file__))
if script_dir not in sys.path:
    sys.path.insert(0, script_dir)

from ramfuzz_gen import ClangTool, IRFileTool, ramfuzz_sources


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Generate ramfuzz harness declarations')
    parser.add_argument('sources', nargs='+',
                        help='C++ sources to analyze (IR JSON files with --from-json)')
    parser.add_argument('-o', '--output', default=None,
                        help='Output file (default: stdout)')
    parser.add_argument('--clang', default=None,
                        help='clang++ executable (default: $CLANGPP or clang++)')
    parser.add_argument('--std', default='c++11',
                        help='C++ standard passed to clang++ (default: c++11)')
    parser.add_argument('-I', '--include', action='append', default=[],
                        help='Additional include directory')
    parser.add_argument('-D', '--define', action='append', default=[],
                        help='Preprocessor definition')
    parser.add_argument('-j', '--jobs', type=int, default=1,
                        help='Number of parallel clang++ jobs (default: 1)')
    parser.add_argument('--save-ir', default=None, metavar='DIR',
                        help='Save the IR of each source as JSON in DIR')
    parser.add_argument('--from-json', action='store_true',
                        help='Read saved IR JSON instead of running clang++')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print debug output')
    return parser.parse_args(argv)


def make_tool(args):
    """Create the front end selected by the arguments"""
    if args.from_json:
        return IRFileTool()
    return ClangTool(
        compiler=args.clang,
        std=args.std,
        include_paths=args.include,
        defines=args.define,
    )


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s: %(message)s',
    )

    tool = make_tool(args)
    print(f'=== Generating harnesses for {len(args.sources)} source(s)', file=sys.stderr)

    if args.output:
        with open(args.output, 'w', newline='\n') as out:
            status = ramfuzz_sources(tool, args.sources, out, jobs=args.jobs, ir_dir=args.save_ir)
    else:
        status = ramfuzz_sources(tool, args.sources, sys.stdout, jobs=args.jobs, ir_dir=args.save_ir)

    if status != 0:
        print('  [FAIL] one or more sources could not be processed', file=sys.stderr)
    else:
        print('  [OK]', file=sys.stderr)
    return status


if __name__ == '__main__':
    sys.exit(main())
