"""
Lindenmayer system rewriting.

A Lindenmayer system is an initial sequence of symbols together with a rule
that rewrites every symbol into a sequence of symbols. Each generation applies
the rule to every symbol of the previous generation and concatenates the
results.
"""

from typing import Generic, Hashable, List, TypeVar
from abc import ABC, abstractmethod
import logging

logger = logging.getLogger(__name__)

Symbol = TypeVar('Symbol', bound=Hashable)


class LindenmayerSystem(ABC, Generic[Symbol]):
    """Abstract base class for symbol rewriting systems."""

    @abstractmethod
    def initial(self) -> List[Symbol]:
        """Symbol sequence for generation 0."""
        pass

    @abstractmethod
    def apply_rule(self, symbol: Symbol) -> List[Symbol]:
        """
        Rewrite a single symbol.

        Args:
            symbol: Symbol from the system's alphabet

        Returns:
            Replacement sequence for the symbol
        """
        pass

    def generate(self, iterations: int) -> List[Symbol]:
        """
        Expand the initial sequence ``iterations`` times.

        Args:
            iterations: Number of rewriting passes (>= 0)

        Returns:
            Symbol sequence of the requested generation
        """
        if iterations < 0:
            raise ValueError(f"iterations must be non-negative, got {iterations}")

        sequence = list(self.initial())
        for _ in range(iterations):
            sequence = [replacement
                        for symbol in sequence
                        for replacement in self.apply_rule(symbol)]

        logger.debug(f"{type(self).__name__} generation {iterations}: {len(sequence)} symbols")
        return sequence
