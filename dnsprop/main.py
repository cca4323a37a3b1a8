"""Main entry point for dnsprop."""

import argparse
import logging
import sys
import time
from typing import List, Optional

from tabulate import tabulate

from dnsprop.config import Config
from dnsprop.models.app_state import (
    AppState,
    receive_batch,
    receive_failure,
    select_sort,
    submit_query,
    toggle_theme,
)
from dnsprop.models.dns_result import RecordType, ResultBatch, ServerResult
from dnsprop.models.propagation import PropagationStats
from dnsprop.services.color_assigner import PALETTE, palette_index
from dnsprop.services.exporter import BatchExporter
from dnsprop.services.fleet_resolver import query_fleet
from dnsprop.services.logger import (
    log_query_result,
    log_stale_response,
    setup_logging,
)
from dnsprop.services.preferences import ThemePreferenceStore
from dnsprop.services.resolver_client import ResolverClient, ResolverRequestError
from dnsprop.services.sort_engine import SortKey, sort_results
from dnsprop.utils.validation import (
    validate_domain_name,
    validate_record_type,
    validate_servers,
)


logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Check whether public DNS resolvers agree on a record"
    )
    p.add_argument("name", nargs="?", help="Domain name (e.g., example.com)")
    p.add_argument(
        "-t", "--type", default="A", help="Record type: A, AAAA, CNAME, TXT, MX, NS, SOA"
    )
    p.add_argument(
        "-s",
        "--server",
        dest="servers",
        action="append",
        default=[],
        help="Resolver address (repeatable; default: configured fleet)",
    )
    p.add_argument("--dnssec", action="store_true", help="Request DNSSEC data")
    p.add_argument(
        "--sort", choices=[k.value for k in SortKey], help="Sort table by column"
    )
    p.add_argument("--desc", action="store_true", help="Sort descending")
    p.add_argument("--export", choices=["json", "csv"], help="Print an export")
    p.add_argument(
        "--toggle-theme", action="store_true", help="Switch the stored theme"
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def fetch_batch(
    config: Config,
    name: str,
    record_type: RecordType,
    servers: List[str],
    dnssec: bool,
) -> ResultBatch:
    """Obtain a batch from the resolver service or directly from the fleet.

    Raises:
        ResolverRequestError: If the resolver service request fails.
    """
    if config.api_base_url:
        client = ResolverClient(config.api_base_url, timeout=config.request_timeout + 5)
        return client.resolve(name, record_type, servers or None, dnssec)

    return query_fleet(
        name,
        record_type,
        servers or config.resolvers,
        timeout=config.request_timeout,
        concurrency=config.resolver_concurrency,
        dnssec=dnssec,
    )


def receive_response(
    state: AppState,
    sequence: int,
    batch: Optional[ResultBatch] = None,
    error: Optional[str] = None,
) -> AppState:
    """Apply one resolver response, logging it if a newer query superseded it."""
    if error is not None:
        new_state = receive_failure(state, sequence, error)
    else:
        new_state = receive_batch(state, sequence, batch)
    if new_state is state:
        log_stale_response(sequence, state.query.sequence)
    return new_state


def format_answers(result: ServerResult) -> str:
    return ", ".join(
        a.value + (f" (ttl:{a.ttl})" if a.ttl else "") for a in result.answers
    )


def render_table(rows: List[ServerResult], stats: PropagationStats) -> str:
    """Render results as a text table with a class color column."""
    table = []
    for result in rows:
        index = palette_index(stats, result)
        table.append(
            [
                result.server_id,
                result.region or "",
                result.raw_status,
                f"{result.rtt_ms:.1f}" if result.rtt_ms is not None else "",
                format_answers(result),
                f"{index} {PALETTE[index]}" if index is not None else "",
            ]
        )
    headers = ["Server", "Region", "Status", "RTT (ms)", "Answers", "Class"]
    return tabulate(table, headers=headers, tablefmt="simple")


def render_summary(stats: PropagationStats) -> str:
    if stats.total_servers == 0:
        return "No resolvers queried"
    largest = stats.majority_class.size if stats.majority_class else 0
    line = (
        f"Propagation: {stats.propagation_percentage}% "
        f"({largest}/{stats.total_servers} resolvers in the largest group)"
    )
    if stats.all_agree:
        return line + " - all resolvers agree"
    return line + f" - {len(stats.classes)} distinct answer set(s)"


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function.

    Returns:
        int: Exit code (0 success, 1 query or configuration error, 2 bad input).
    """
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    try:
        config = Config.from_env()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    preferences = ThemePreferenceStore(config.theme_file)
    state = AppState(theme=preferences.load())

    if args.toggle_theme:
        state = toggle_theme(state)
        preferences.save(state.theme)
        print(f"Theme: {state.theme.value}")
        if not args.name:
            return 0

    if not args.name:
        print("error: a domain name is required", file=sys.stderr)
        return 2

    if args.desc and not args.sort:
        print("error: --desc requires --sort", file=sys.stderr)
        return 2

    try:
        name = validate_domain_name(args.name)
        record_type = validate_record_type(args.type)
        servers = validate_servers(args.servers)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    start_time = time.time()
    state, sequence = submit_query(state)
    try:
        batch = fetch_batch(
            config, name, record_type, servers, args.dnssec or config.enable_dnssec
        )
    except ResolverRequestError as e:
        state = receive_response(state, sequence, error=str(e))
    else:
        state = receive_response(state, sequence, batch=batch)

    if state.query.error is not None:
        logger.error(f"Query failed: {state.query.error}")
        print(f"error: {state.query.error}", file=sys.stderr)
        return 1

    batch = state.query.batch
    stats = state.query.stats
    log_query_result(
        query_name=batch.query_name,
        record_type=batch.record_type.value,
        total_servers=stats.total_servers,
        successful_servers=stats.successful_servers,
        class_count=len(stats.classes),
        propagation_percentage=stats.propagation_percentage,
        all_agree=stats.all_agree,
        duration_ms=int((time.time() - start_time) * 1000),
    )

    if args.export == "json":
        print(BatchExporter.to_json(batch))
        return 0
    if args.export == "csv":
        print(BatchExporter.to_csv(batch), end="")
        return 0

    rows = list(batch.results)
    if args.sort:
        key = SortKey(args.sort)
        state = select_sort(state, key)
        if args.desc:
            state = select_sort(state, key)
        rows = sort_results(rows, state.sort.key, state.sort.ascending)

    print(f"{batch.query_name} ({batch.record_type.value})")
    print(render_table(rows, stats))
    print()
    print(render_summary(stats))
    return 0


if __name__ == "__main__":
    sys.exit(main())
