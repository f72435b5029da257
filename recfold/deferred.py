# RecFold, Crossfold Planning for Top-N Recommendation Evaluation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

import logging
from typing import Callable, Optional

from recfold.data_sources import DataSource

logger = logging.getLogger("recfold")


class DeferredSource:
    """Reference to a data source that can be resolved later.

    The reference is either unset, holds a concrete source,
    or holds a producer function which is called to obtain the source.
    The producer is called on every :meth:`get`, results are never cached,
    so a producer should be safe to call multiple times.

    :param source: Concrete source to start from. Defaults to None (unset).
    :type source: DataSource, optional
    """

    def __init__(self, source: Optional[DataSource] = None):
        self._source = None
        self._producer = None
        self.set(source)

    def set(self, source: Optional[DataSource]):
        """Store a concrete source. Passing None resets the reference.

        :param source: The source to store.
        :type source: DataSource, optional
        """
        self._source = source
        self._producer = None

    def set_deferred(self, producer: Callable[[], Optional[DataSource]]):
        """Store a zero-argument producer that is called whenever the source is requested.

        :param producer: Callable returning a DataSource, or None.
        :type producer: Callable[[], Optional[DataSource]]
        :raises TypeError: If producer is not callable.
        """
        if not callable(producer):
            raise TypeError(f"Deferred source should be callable, not {type(producer).__name__}")
        self._source = None
        self._producer = producer

    @property
    def is_set(self) -> bool:
        """True if either a concrete source or a producer was configured."""
        return self._producer is not None or self._source is not None

    @property
    def is_deferred(self) -> bool:
        return self._producer is not None

    def get(self) -> Optional[DataSource]:
        """Resolve the reference.

        Exceptions raised by the producer are not caught.

        :return: The source, or None if nothing was configured.
        :rtype: DataSource, optional
        """
        if self._producer is not None:
            logger.debug("Resolving deferred data source")
            return self._producer()
        return self._source
