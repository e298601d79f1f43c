"""Command line front end: read share files, print the secret."""

import argparse
import logging
import sys

from secretfinder.errors import ConfigError, DegenerateInputError, ShareFormatError
from secretfinder.robust import RobustReconstructor
from secretfinder.shamir import reconstruct_secret
from secretfinder.source import load_shares

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='secretfinder',
        description='Reconstruct a Shamir secret from JSON share files.')
    parser.add_argument('files', nargs='+', metavar='FILE',
                        help='share file(s) to reconstruct')
    parser.add_argument('--robust', action='store_true',
                        help='search subsets, tolerating corrupted shares '
                             '(always on for token-list files)')
    parser.add_argument('--max-bad', type=int, default=None,
                        help='corrupted shares to tolerate (implies --robust; '
                             'default: value in the file, else 0)')
    parser.add_argument('--modulus', type=int, default=None,
                        help='prime field modulus (overrides the file)')
    parser.add_argument('--workers', type=int, default=1,
                        help='processes for the robust search')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='debug logging')
    return parser


def run_file(path: str, args, out) -> bool:
    """Reconstruct one file; returns False when no polynomial was found."""
    share_set = load_shares(path, args.modulus)
    if args.max_bad is not None:
        share_set.max_bad = args.max_bad

    if not (args.robust or args.max_bad is not None or share_set.robust):
        share_set.validate()
        secret = reconstruct_secret(share_set.shares, share_set.k,
                                    share_set.modulus)
        print(f"Secret from {path}: {secret}", file=out)
        return True

    share_set.validate(robust=True)
    search = RobustReconstructor(share_set.shares, share_set.k,
                                 share_set.modulus, share_set.max_bad,
                                 workers=args.workers)
    logger.info("%s: up to %d subsets to check", path, search.cost())
    result = search.run()
    if not result.found:
        print("No valid polynomial found.", file=out)
        return False

    print(f"Correct polynomial coefficients for {path} "
          f"(mod {share_set.modulus}):", file=out)
    for i, c in enumerate(result.coeffs):
        print(f"x^{i} = {c}", file=out)
    print(f"Secret: {result.secret} "
          f"({result.matches}/{share_set.n} shares match)", file=out)
    return True


def main(argv=None, out=None) -> int:
    args = build_parser().parse_args(argv)
    out = out or sys.stdout
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s')

    status = 0
    for path in args.files:
        try:
            if not run_file(path, args, out):
                status = max(status, 1)
        except (OSError, ShareFormatError, ConfigError, DegenerateInputError) as e:
            print(f"secretfinder: {path}: {e}", file=sys.stderr)
            status = 2
    return status


if __name__ == '__main__':
    sys.exit(main())
