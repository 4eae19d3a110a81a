"""
Result transformation stage placed in front of another writer.
"""

import logging
from typing import Callable, Sequence

from jmx_influx.model import Result, Server
from jmx_influx.writer.base import Writer

LOG = logging.getLogger(__name__)

ResultTransformer = Callable[[Result], Result]


def coerce_booleans(result: Result) -> Result:
    """Replace boolean values with 1/0; other values are left alone."""
    if not any(isinstance(value, bool) for value in result.values.values()):
        return result
    values = {
        key: int(value) if isinstance(value, bool) else value
        for key, value in result.values.items()
    }
    return result.model_copy(update={'values': values})


class ResultTransformerWriter(Writer):
    """
    Applies a Result -> Result transform, then hands the batch to `target`.
    """

    def __init__(self, transformer: ResultTransformer, target: Writer):
        self.transformer = transformer
        self.target = target

    def write(self, server: Server, results: Sequence[Result]) -> int:
        return self.target.write(server, [self.transformer(result) for result in results])

    def close(self) -> None:
        self.target.close()

    @classmethod
    def boolean_to_number(cls, enabled: bool, target: Writer) -> Writer:
        """Wrap `target` with boolean coercion when enabled, otherwise return it unchanged."""
        if not enabled:
            return target
        LOG.debug(f"Coercing boolean values to numbers before {type(target).__name__}")
        return cls(coerce_booleans, target)
