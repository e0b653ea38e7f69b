__author__    = "Daniel Westwood"
__contact__   = "daniel.westwood@stfc.ac.uk"
__copyright__ = "Copyright 2024 United Kingdom Research and Innovation"

import logging
import os

levels = [
    logging.WARN,
    logging.INFO,
    logging.DEBUG
]

FORMAT = '%(levelname)s [%(name)s]: %(message)s'

class FalseLogger:
    def __init__(self):
        pass
    def debug(self, message):
        pass
    def info(self, message):
        pass
    def warning(self, message):
        pass
    def error(self, message):
        pass

class LoggedOperation:
    """
    Base class for any operation in zort which requires a logger. Either
    an existing logger is passed in and used as-is, or a new one is
    created from the label/verbosity settings.
    """

    def __init__(
            self,
            logger   : logging.Logger | FalseLogger = None,
            label    : str = None,
            fh       : str = None,
            logid    : str = None,
            verbose  : int = 0
        ) -> None:
        """
        :param logger:      (logging.Logger | FalseLogger) An existing logger object.

        :param label:       (str) The label to apply to the logger object.

        :param fh:          (str) Path to logfile for logger object generated in this specific process.

        :param logid:       (str) ID of the process, added to the name of the logger so that
            separate invocations do not share handlers.

        :param verbose:     (int) Level of verbosity for log messages (see init_logger).

        :returns: None
        """
        self._verbose = verbose or 0
        self._logid   = logid

        if label is None:
            label = 'zort-operation'
        self._label = label

        if logger is None:
            self.logger = init_logger(
                self._verbose,
                self._label,
                fh=fh,
                logid=logid)
        else:
            self.logger = logger

def init_logger(verbose, name, fh=None, logid=None):
    """Logger object init and configure with formatting"""

    verbose = max(0, min(verbose, len(levels)-1))
    if logid is not None:
        name = f'{name}_{logid}'

    logger = logging.getLogger(name)
    logger.setLevel(levels[verbose])

    # Re-initialising the same logger replaces its handlers.
    logger.handlers.clear()

    ch = logging.StreamHandler()
    ch.setLevel(levels[verbose])

    formatter = logging.Formatter(FORMAT)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    if fh:
        fdir = os.path.dirname(fh)
        if fdir and not os.path.isdir(fdir):
            os.makedirs(fdir)

        handle = logging.FileHandler(fh, mode='w')
        handle.setLevel(levels[verbose])
        handle.setFormatter(formatter)
        logger.addHandler(handle)

    return logger
