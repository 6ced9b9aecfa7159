"""Compare loan offers from several lenders.

Every offer is priced for the same principal and tenure; the cheapest total
outlay (all EMIs plus the processing fee) comes first.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Union

from .data_models import LoanComparison, LoanOffer
from .engine import calculate_annuity_payment
from .errors import CalculatorValidationError
from .utils import (
    Number,
    guard_overflow,
    parse_numeric_input,
    percent_to_rate,
    require_non_negative,
    require_positive,
)

logger = logging.getLogger(__name__)

OfferLike = Union[LoanOffer, Mapping[str, Any]]


def _to_offer(item: OfferLike) -> LoanOffer:
    if isinstance(item, LoanOffer):
        return item
    if not isinstance(item, Mapping):
        raise CalculatorValidationError("Each offer must be an object with a name and a rate", "offers")
    return LoanOffer(
        name=str(item.get("name") or "").strip(),
        annual_rate_percent=parse_numeric_input(item.get("annual_rate_percent")),
        processing_fee=parse_numeric_input(item.get("processing_fee")),
    )


def compare_loans(principal: Number, tenure_years: Number, offers: Iterable[OfferLike]) -> List[LoanComparison]:
    """Price each offer and return them sorted by total amount payable.

    Offers without a name or a rate are incomplete form rows and are skipped.
    """
    principal_dec = require_positive(principal, "principal")
    months = require_positive(tenure_years, "tenure_years") * 12

    results: List[LoanComparison] = []
    for offer in map(_to_offer, offers):
        if not offer.name or not offer.annual_rate_percent:
            logger.debug("Skipping incomplete offer %r", offer)
            continue
        rate = require_positive(offer.annual_rate_percent, "annual_rate_percent")
        fee = require_non_negative(offer.processing_fee, "processing_fee")
        with guard_overflow("tenure_years"):
            emi = calculate_annuity_payment(principal_dec, percent_to_rate(rate, 12), months)
            total_amount = emi * months + fee
        results.append(
            LoanComparison(
                name=offer.name,
                annual_rate_percent=rate,
                processing_fee=fee,
                emi=emi,
                total_interest=total_amount - principal_dec - fee,
                total_amount=total_amount,
            )
        )

    if not results:
        raise CalculatorValidationError("At least one offer needs a name and a rate", "offers")
    return sorted(results, key=lambda c: c.total_amount)
