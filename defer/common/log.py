# -*- coding: utf-8 -*-

"""Configuration of the logs.

This module configures the python ``logging`` module for programs using
defer, in order to have useful and easy to activate logs.

Log entries are displayed on the console and, if possible, written in a log
file. The log file is rotated every day and only the last 7 days are kept.

On console output, if the system supports it, logs entries are colorized.
Non-caught exceptions are logged before the program quits.
"""

import logging
import logging.handlers
import os.path
import sys

from . import path as defer_path

_date_format = '%Y-%m-%d %H:%M:%S'
_string_format = '%(asctime)s %(levelname)-7s %(name)s - %(message)s'


def _support_color_output():
    """Try to guess if the standard output supports color term code.

    Returns:
        boolean: True if we are sure the output supports color; False otherwise
    """
    if hasattr(sys.stdout, 'isatty') and sys.stdout.isatty():
        if not sys.platform.startswith('win'):
            return True
    return False


def _get_file_handler(filename, nb_max_files=7):
    """Open a new file for using as a log output.

    Args:
        filename (str): name of the log file. Ex: 'defer.log'
        nb_max_files (int, optional): number of old log files kept.
    Returns:
        FileHandler: a valid handler using the log file, or None if the
            file creation has failed.
    """
    try:
        log_path = os.path.join(defer_path.get_log_dir(), filename)
        return logging.handlers.TimedRotatingFileHandler(
            log_path, when='midnight', backupCount=nb_max_files)
    except (OSError, IOError):
        logging.getLogger(__name__).warning('Unable to create the log file',
                                            exc_info=True)
        return None


class ColoredFormatter(logging.Formatter):
    """Formatter who display colored messages using ANSI escape codes."""

    _colors = {
        'RESET': '\033[0m',
        'DEBUG': '\033[34m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[31m',
        'NAME': '\033[36m',
        'DATE': '\033[30;1m',
        'EXCEPTION_NAME': '\033[31;1m',
        'EXCEPTION_STR': '\033[37;1m'
    }

    def _colorize(self, msg, color):
        return self._colors.get(color, '') + msg + self._colors.get('RESET')

    def formatTime(self, record, datefmt=None):
        result = logging.Formatter.formatTime(self, record, datefmt)
        return self._colorize(result, 'DATE')

    def formatException(self, ei):
        msg_lines = logging.Formatter.formatException(self, ei).split('\n')
        name, _, text = msg_lines[-1].partition(':')
        result = '\n'.join(msg_lines[:-1]) + '\n'
        result += self._colorize(name, 'EXCEPTION_NAME')
        result += ':' + self._colorize(text, 'EXCEPTION_STR')
        return result

    def format(self, record):
        # The record is shared by all handlers: it must not be modified.
        record = logging.makeLogRecord(record.__dict__)
        record.name = self._colorize(record.name, 'NAME')
        record.levelname = self._colorize(record.levelname, record.levelname)
        return logging.Formatter.format(self, record)


def _excepthook(exctype, value, traceback):
    logging.getLogger(__name__).critical(
        'Uncaught exception', exc_info=(exctype, value, traceback))


class Context(object):
    """Context class used to open and close log handlers.

    Example:

        >>> with Context('my_program.log'):
        ...     logging.getLogger(__name__).info('Hello')
    """

    def __init__(self, filename='defer.log'):
        """Prepare a new log context.

        Args:
            filename (str): name of the log file. default to 'defer.log'. If
                None, the logs are not written in a file.
        """
        self._filename = filename
        self._handlers = []
        self._excepthook = None

    def __enter__(self):
        """Open the log file and prepare the logging module."""

        logging.captureWarnings(True)
        root_logger = logging.getLogger()

        stdout_handler = logging.StreamHandler()
        if _support_color_output():
            stdout_handler.setFormatter(
                ColoredFormatter(fmt=_string_format, datefmt=_date_format))
        else:
            stdout_handler.setFormatter(
                logging.Formatter(fmt=_string_format, datefmt=_date_format))
        self._handlers.append(stdout_handler)

        if self._filename:
            file_handler = _get_file_handler(self._filename)
            if file_handler:
                file_handler.setFormatter(
                    logging.Formatter(fmt=_string_format,
                                      datefmt=_date_format))
                self._handlers.append(file_handler)

        for handler in self._handlers:
            root_logger.addHandler(handler)

        # Before any configuration, all messages should be displayed.
        set_debug_mode(True)

        # Log all uncaught exceptions
        self._excepthook = sys.excepthook
        sys.excepthook = _excepthook
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Release resources (log files, ...)"""
        logging.getLogger(__name__).debug('Stop logger ...')
        root_logger = logging.getLogger()
        for handler in self._handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self._handlers = []
        logging.captureWarnings(False)
        sys.excepthook = self._excepthook


def set_logs_level(levels):
    """Configure a fine-grained log levels for the different modules.

    Args:
        levels (dict): A dict associating a module name and a log level. A
            log level can be a number or a str representing one of the
            logging levels (DEBUG, WARNING, ...). The level name will be
            converted to uppercase. Invalids values will be ignored.

    Example:

        >>> # Accept DEBUG logs only for the combinator
        >>> set_logs_level({'defer': 'info', 'defer.promise.when': 'debug'})
    """
    for (module, level) in levels.items():
        try:
            if isinstance(level, str):
                level = level.upper()
                if level.isdigit():
                    level = int(level)
            logging.getLogger(module).setLevel(level)
        except (TypeError, ValueError):
            logging.getLogger(__name__).warning(
                'Invalid log level "%s" for logger "%s". Will be ignored.',
                level, module)


def set_debug_mode(debug):
    """Set, or unset the debug log level.

    Note: other modules than defer.* are not set to DEBUG, even in debug mode.
    If needed, their level can be set by ``set_logs_level()``.

    Args:
        debug (boolean): if True, the defer log level will be set to DEBUG.
            If False, it will be set to INFO.
    """
    if debug:
        logging.getLogger().setLevel(logging.INFO)
        logging.getLogger('defer').setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.WARNING)
        logging.getLogger('defer').setLevel(logging.INFO)

