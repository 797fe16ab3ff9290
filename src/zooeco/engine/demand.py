"""Elastic visitor demand.

Formula: visitors = floor(base / (price / reference_price)^elasticity)

With elasticity 0.4, doubling the ticket price divides visitors by 2^0.4 = 1.32,
so about 76% of them still come; halving it brings about 132%.
"""

import logging
import math

logger = logging.getLogger(__name__)


class ElasticDemandModel:
    """Price-elastic adjustment of visitor counts."""

    def __init__(
        self,
        reference_price: float = 1.0,
        elasticity: float = 0.4,
        min_price: float = 0.5,
        max_price: float = 100.0
    ):
        """
        Initialize demand model.

        Args:
            reference_price: Ticket price at which demand is unadjusted
            elasticity: Price elasticity exponent, 0 < e < 1
            min_price: Lowest accepted ticket price
            max_price: Highest accepted ticket price
        """
        self.reference_price = reference_price
        self.elasticity = elasticity
        self.min_price = min_price
        self.max_price = max_price

    def normalize_price(self, price) -> float:
        """
        Clamp a caller-supplied ticket price into [min_price, max_price].

        None, NaN and infinite values fall back to the reference price.
        """
        if price is None:
            return self.reference_price
        try:
            price = float(price)
        except (TypeError, ValueError):
            logger.debug("Unparseable ticket price %r, using reference price", price)
            return self.reference_price
        if math.isnan(price) or math.isinf(price):
            logger.debug("Non-finite ticket price %r, using reference price", price)
            return self.reference_price

        clamped = min(max(price, self.min_price), self.max_price)
        if clamped != price:
            logger.debug("Ticket price %.2f clamped to %.2f", price, clamped)
        return clamped

    def demand_multiplier(self, price: float) -> float:
        """Share of visitors that still come at this price."""
        price_ratio = self.normalize_price(price) / self.reference_price
        return 1.0 / (price_ratio ** self.elasticity)

    def adjusted_visitors(self, base_visitors: float, price: float) -> int:
        """
        Adjust a visitor count for the ticket price.

        Args:
            base_visitors: Visitors before the price adjustment
            price: Ticket price (normalised defensively)

        Returns:
            Whole number of visitors
        """
        if not base_visitors or base_visitors <= 0 or math.isnan(base_visitors):
            return 0
        return int(math.floor(base_visitors * self.demand_multiplier(price)))
