"""
Rackspace cloud inventory runner.
Lists monitoring entities and checks plus compute servers, images and
flavors for one account, and snapshots them to JSON files or the log.
"""
import argparse
import sys

from rax_inventory.inventory import run_inventory
from raxcloud.exceptions import RaxCloudError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Snapshot a Rackspace cloud account")
    parser.add_argument("--account-id", type=int, default=1)
    parser.add_argument("--config-file", default="configs/config.json")
    parser.add_argument("--credentials-file", default="configs/credentials.json")
    parser.add_argument("--environment", default=None, help="Region environment (dfw, ord, iad, lon, ...)")
    parser.add_argument("--output-mode", default="file", choices=["file", "log"], help="Sink to use")
    parser.add_argument("--output-root", default=None, help="Override inventory.output_directory")
    parser.add_argument("--debug", action="store_true", help="Log every request and enable debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        summary = run_inventory(
            output_mode=args.output_mode,
            account_id=args.account_id,
            config_file=args.config_file,
            credentials_file=args.credentials_file,
            environment=args.environment,
            output_root_override=args.output_root,
            debug=args.debug,
        )
    except (RaxCloudError, ValueError, FileNotFoundError) as exc:
        print(f"Inventory failed: {exc}", file=sys.stderr)
        return 1
    print("Inventory summary:", summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
