from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from nftrecon.app import run_contract_comparison, run_metadata_id_export, run_subgraph_comparison
from nftrecon.config import ReconcileConfig, configure_logging
from nftrecon.config.reconcile import (
    DEFAULT_CONTRACT_BATCH_SIZE,
    DEFAULT_CONTRACT_DELAY_SECONDS,
    DEFAULT_MAX_RECORDS,
    DEFAULT_METADATA_ID_BATCH_SIZE,
    DEFAULT_ORDER_BY,
    DEFAULT_PAGE_DELAY_SECONDS,
    DEFAULT_PAGE_SIZE,
)
from nftrecon.domain.reconciliation import Stage

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _add_results_dir(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--results-dir",
        type=Path,
        help="Directory for snapshots and reports (default: $NFTRECON_RESULTS_DIR or ./results)",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile NFT metadata across sources")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subgraphs = subparsers.add_parser(
        Stage.SUBGRAPHS, help="Compare the primary subgraph with production"
    )
    _add_results_dir(subgraphs)
    subgraphs.add_argument(
        "--page-size",
        type=int,
        default=DEFAULT_PAGE_SIZE,
        help="Number of tokens to request per query (default: %(default)s)",
    )
    subgraphs.add_argument(
        "--max-records",
        type=int,
        default=DEFAULT_MAX_RECORDS,
        help="Maximum number of tokens to fetch per subgraph (default: %(default)s)",
    )
    subgraphs.add_argument(
        "--order-by",
        type=str,
        default=DEFAULT_ORDER_BY,
        help="Field to order paginated queries by (default: %(default)s)",
    )
    subgraphs.add_argument(
        "--order-direction",
        choices=("asc", "desc"),
        default="asc",
        help="Sort direction of paginated queries (default: %(default)s)",
    )
    subgraphs.add_argument(
        "--page-delay",
        type=float,
        default=DEFAULT_PAGE_DELAY_SECONDS,
        help="Seconds to wait between pages (default: %(default)s)",
    )
    subgraphs.add_argument(
        "--presort",
        action="store_true",
        help="Sort tokens by identifier before grouping so collection ids line up",
    )

    contract = subparsers.add_parser(
        Stage.CONTRACT, help="Compare subgraph collections with the metadata contract"
    )
    _add_results_dir(contract)
    contract.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_CONTRACT_BATCH_SIZE,
        help="Contract reads per batch (default: %(default)s)",
    )
    contract.add_argument(
        "--delay",
        type=float,
        default=DEFAULT_CONTRACT_DELAY_SECONDS,
        help="Seconds to wait between batches (default: %(default)s)",
    )

    metadata_ids = subparsers.add_parser(
        Stage.METADATA_IDS, help="Export the token id to metadata id mapping"
    )
    _add_results_dir(metadata_ids)
    metadata_ids.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_METADATA_ID_BATCH_SIZE,
        help="Token ids per batchGetMetadata call (default: %(default)s)",
    )

    return parser.parse_args(list(argv))


def _build_settings(args: argparse.Namespace) -> ReconcileConfig:
    if args.command == Stage.SUBGRAPHS:
        return ReconcileConfig(
            page_size=args.page_size,
            max_records=args.max_records,
            order_by=args.order_by,
            order_direction=args.order_direction,
            page_delay_seconds=args.page_delay,
            presort=args.presort,
        )
    if args.command == Stage.CONTRACT:
        return ReconcileConfig(
            contract_batch_size=args.batch_size,
            contract_delay_seconds=args.delay,
        )
    return ReconcileConfig(metadata_id_batch_size=args.batch_size)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        settings = _build_settings(parsed_args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)  # noqa: T201
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == Stage.SUBGRAPHS:
            summary = run_subgraph_comparison(
                settings=settings, results_dir=parsed_args.results_dir
            )
            print(  # noqa: T201
                f"Found {summary.token_differences} token differences and "
                f"{summary.collection_differences} collection differences"
            )
        elif parsed_args.command == Stage.CONTRACT:
            contract_summary = run_contract_comparison(
                settings=settings, results_dir=parsed_args.results_dir
            )
            print(  # noqa: T201
                f"Found {contract_summary.differences} collection differences "
                f"({contract_summary.aggregated_differences} aggregated, "
                f"{len(contract_summary.failed_ids)} failed contract reads)"
            )
        elif parsed_args.command == Stage.METADATA_IDS:
            entries = run_metadata_id_export(
                settings=settings, results_dir=parsed_args.results_dir
            )
            print(f"Total tokens processed: {len(entries)}")  # noqa: T201
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception as e:  # noqa: BLE001
        log.debug("Fatal error during reconciliation", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
