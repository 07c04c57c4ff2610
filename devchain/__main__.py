"""
Print the resolved toolchain configuration.

    python -m devchain [path] [--format json|yaml] [--network NAME]
"""

import argparse
import sys

from devchain.config import RuntimeConfig
from devchain.loader import FORMATS, dumps, load_config
from infra.exceptions import ConfigError
from infra.logger import setup_logging


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog="devchain")
    ap.add_argument("path", nargs="?", default=None, help="config file (default: DEVCHAIN_CONFIG_PATH or built-in)")
    ap.add_argument("--format", choices=FORMATS, default="json", help="output format")
    ap.add_argument("--network", default=None, help="print only the RPC URL of this network")
    args = ap.parse_args(argv)

    setup_logging(RuntimeConfig().LOG_LEVEL)

    try:
        config = load_config(args.path)
        if args.network:
            print(config.network(args.network).url)
        else:
            sys.stdout.write(dumps(config, args.format))
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
