"""Contains the name for the logger of GridDiff modules.

``griddiff`` uses a simple logging system based on the
`Logging <https://docs.python.org/3/library/logging.html>`__ standard library.
Logging messages are grouped in different levels:

* ``DEBUG``: Details about coefficient tables being built.
* ``WARNING``: An indication that something unexpected
    happened which may require attention, e.g. repeated grid abscissas or
    an evaluation point on a coordinate singularity.

By default, only messages of level ``WARNING`` are displayed.

Calling applications can configure the format and log level of the displayed messages
by `Configuring Logging <https://docs.python.org/3/howto/logging.html#configuring-logging>`__
for ``griddiff.logger.griddiff_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.DEBUG,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""
import logging

logger_name = "griddiff"
griddiff_logger = logging.getLogger(logger_name)
