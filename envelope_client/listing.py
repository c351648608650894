"""Walking the paginated list of jobs."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional

from .codec import decode_listing_page, decode_with, read_json
from .errors import DecodingError, ProtocolError, VerifierError
from .models import Direction, ListingOptions, ListingPage, ListingResult
from .transport import InvocationRequest, MultiplexedTransport

logger = logging.getLogger(__name__)


def _first_page_params(options: ListingOptions) -> Dict[str, str]:
    params = {}
    if options.limit and options.limit > 0:
        params["limit"] = str(options.limit)
    params["sort"] = "-createdOn" if options.direction == Direction.BACKWARD else "createdOn"
    return params


def fetch_page(
    transport: MultiplexedTransport,
    params: Dict[str, str],
    options: ListingOptions,
) -> ListingPage:
    response = transport.invoke(
        InvocationRequest(
            method="GET",
            resource="email-validations",
            params=params,
            token=options.token,
        )
    )
    try:
        if response.status_code != 200:
            raise ProtocolError(response.status_code)
        return decode_with(decode_listing_page, read_json(response))
    finally:
        response.close()


def iter_jobs(
    transport: MultiplexedTransport, options: Optional[ListingOptions] = None
) -> Iterator[ListingResult]:
    """Lazily yield every job overview, one page request at a time.

    The next page is requested only once the consumer has pulled every item
    of the current one; stopping early leaves the remaining pages
    unrequested. A failed page fetch yields a single error-tagged result and
    ends the walk.
    """
    options = options or ListingOptions()
    params = _first_page_params(options)
    page_no = 0

    while True:
        page_no += 1
        try:
            page = fetch_page(transport, params, options)
        except VerifierError as e:
            logger.warning("Listing stopped at page %d: %s", page_no, e)
            yield ListingResult(error=e)
            return

        for overview in page.items:
            yield ListingResult(overview=overview)

        if not page.is_truncated:
            return

        if not page.cursor:
            error = DecodingError(f"Listing page {page_no} is truncated but has no cursor")
            logger.warning("Listing stopped: %s", error)
            yield ListingResult(error=error)
            return

        # The cursor is opaque, and replaces the first page's filters
        params = {"cursor": page.cursor}
