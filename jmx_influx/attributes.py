"""
Selection of the result attributes written as tags.
"""

import logging
from typing import Optional, Sequence, Tuple

from jmx_influx.errors import InvalidConfiguration
from jmx_influx.model import ResultAttribute

LOG = logging.getLogger(__name__)

ALL_RESULT_ATTRIBUTES: Tuple[ResultAttribute, ...] = tuple(ResultAttribute)


def resolve_tag_attributes(requested: Optional[Sequence[str]]) -> Tuple[ResultAttribute, ...]:
    """
    Convert the configured `resultTags` names into result attributes.

    A missing list (None) selects every known attribute. A present list,
    even an empty one, selects exactly the attributes it names. Duplicates
    collapse and the result is ordered like ResultAttribute itself.

    Args:
        requested: Attribute names from the configuration, or None

    Returns:
        Tuple of distinct ResultAttribute members in declaration order

    Raises:
        UnknownAttribute: if a name does not match any attribute
    """
    if requested is None:
        selected = ALL_RESULT_ATTRIBUTES
    else:
        if isinstance(requested, str):
            raise InvalidConfiguration("resultTags", "expected a list of attribute names")
        wanted = {ResultAttribute.from_attribute(name) for name in requested}
        selected = tuple(attribute for attribute in ResultAttribute if attribute in wanted)

    LOG.debug(f"Result Tags to write set to: {[attribute.value for attribute in selected]}")
    return selected
