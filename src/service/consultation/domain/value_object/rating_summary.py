from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import attrs


_ONE_DECIMAL = Decimal('0.1')


@attrs.frozen
class RatingSummary:
    count: int
    average: Optional[float]

    @classmethod
    def from_totals(cls, *, count: int, rating_sum: int) -> 'RatingSummary':
        """
        Build the aggregate from SQL count/sum.

        Rounds half up to one decimal: [5, 5, 4, 3] -> 4.3, 4.25 -> 4.3.
        No published reviews gives average None.
        """
        if count <= 0:
            return cls(count=0, average=None)
        mean = (Decimal(rating_sum) / Decimal(count)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
        return cls(count=count, average=float(mean))
