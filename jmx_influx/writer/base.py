"""
Base writer interface for the JMX output pipeline.
"""

import logging
from abc import ABC, abstractmethod
from typing import Sequence

from jmx_influx.model import Result, Server

LOG = logging.getLogger(__name__)

class Writer(ABC):
    """
    Base class for all writers.

    Writers hold no mutable state once built, so the dispatch loop may call
    `write` from several threads at once.
    """

    @abstractmethod
    def write(self, server: Server, results: Sequence[Result]) -> int:
        """
        Write one polling cycle's results.

        Args:
            server: JMX endpoint the results were read from
            results: Results of the polling cycle

        Returns:
            Number of records handed to the destination
        """
        pass

    def close(self) -> None:
        """
        Optional method to release resources.
        Default implementation does nothing - override in subclasses that need cleanup.
        """
        pass
