"""Token-level differences between two subgraph token lists."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nftrecon.domain.model import DifferenceReport

from .compare import missing_record, paired_record

if TYPE_CHECKING:
    from collections.abc import Sequence

    from nftrecon.domain.model import Token


def diff_tokens(
    left: Sequence[Token],
    right: Sequence[Token],
    *,
    left_label: str = "left",
    right_label: str = "right",
) -> DifferenceReport:
    """Compare two token lists keyed by ``external_id``.

    Records come in left order first, then tokens only the right side has.
    Each side is expected to hold unique external ids; on duplicates the last
    right-hand token wins the lookup.
    """

    report = DifferenceReport(left_label=left_label, right_label=right_label)
    right_by_id = {token.external_id: token for token in right}

    for left_token in left:
        right_token = right_by_id.get(left_token.external_id)
        if right_token is None:
            report.add(
                missing_record(left_token.external_id, missing_label=right_label, left=left_token)
            )
            continue
        record = paired_record(left_token.external_id, left_token, right_token)
        if record is not None:
            report.add(record)

    left_ids = {token.external_id for token in left}
    for right_token in right:
        if right_token.external_id not in left_ids:
            report.add(
                missing_record(right_token.external_id, missing_label=left_label, right=right_token)
            )

    return report
