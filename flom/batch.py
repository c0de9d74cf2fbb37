"""Process a batch of input URLs one at a time."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from .converter import MusicConverter, build_for_selection
from .errors import FlomError
from .odesli import OdesliResponse
from .result import ConversionResult
from .targets import TargetSelection, choose_target
from .urls import validate_url

logger = logging.getLogger(__name__)


@dataclass
class BatchSummary:
    """Counts for a finished batch.

    success counts produced results, failed counts input URLs that failed.
    """

    success: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.success + self.failed


def parse_lines(content: str) -> List[str]:
    """Split text into trimmed, non-empty lines."""
    return [line.strip() for line in content.splitlines() if line.strip()]


def process_url(
    converter: MusicConverter,
    url: str,
    explicit_target: Optional[str],
    default_target: Optional[str],
    ask: Callable[[OdesliResponse], TargetSelection],
) -> List[ConversionResult]:
    """Resolve and convert one URL.

    The target is interpreted before the lookup so an unknown target fails
    without a network call. The user is asked only when no target is set.

    Raises:
        FlomError: If validation, lookup or conversion fails
    """
    url = url.strip()
    validate_url(url)
    selection = choose_target(explicit_target, default_target)

    response = converter.fetch_links(url)
    if selection is None:
        selection = ask(response)

    return build_for_selection(response, url, selection)


def run_batch(
    urls: Iterable[str],
    handler: Callable[[str], List[Any]],
    on_result: Callable[[Any], None],
    on_error: Callable[[str, FlomError], None],
) -> BatchSummary:
    """Run handler for each URL, continuing past failures.

    Results of a URL are emitted only after the whole URL succeeded.
    """
    summary = BatchSummary()

    for url in urls:
        try:
            results = handler(url)
        except FlomError as e:
            logger.debug("Failed %s: %s", url, e)
            summary.failed += 1
            on_error(url, e)
            continue

        for result in results:
            on_result(result)
        summary.success += len(results)

    return summary
