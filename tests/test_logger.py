import logging
import os
import shutil
import tempfile
import unittest

from pysolbuf.logger import (ROOT_LOGGER, ColoredFormatter, LogContext, LoggerConfig, LogLevel,
                             get_logger, logger_config, setup_logger, setup_logger_from_config)


class TestLogger(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        root = logging.getLogger(ROOT_LOGGER)
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.addHandler(logging.NullHandler())
        root.setLevel(logging.NOTSET)
        for module in logger_config.module_levels:
            logging.getLogger(module).setLevel(logging.NOTSET)
        logger_config.module_levels.clear()
        shutil.rmtree(self.temp_dir)

    def test_trace_level(self):
        self.assertEqual(logging.getLevelName(5), "TRACE")
        logger = get_logger("pysolbuf.test")
        with self.assertLogs("pysolbuf.test", level=LogLevel.TRACE.value) as cm:
            logger.trace("screened %d", 3)
        self.assertEqual(cm.records[0].levelname, "TRACE")
        self.assertEqual(cm.records[0].getMessage(), "screened 3")

    def test_setup_logger_file(self):
        log_file = os.path.join(self.temp_dir, "test.log")
        logger = setup_logger(level="DEBUG", log_file=log_file, console=False)
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(len(logger.handlers), 1)
        get_logger("pysolbuf.io.reader").info("hello")
        logger.handlers[0].flush()
        with open(log_file) as f:
            content = f.read()
        self.assertIn("pysolbuf.io.reader - INFO - hello", content)

    def test_setup_logger_replaces_handlers(self):
        setup_logger(console=True)
        logger = setup_logger(console=True)
        self.assertEqual(len(logger.handlers), 1)

    def test_setup_logger_without_output(self):
        logger = setup_logger(console=False)
        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0], logging.NullHandler)

    def test_unknown_level(self):
        with self.assertRaises(ValueError):
            setup_logger(level="VERBOSE", console=False)

    def test_colored_formatter_keeps_record(self):
        record = logging.LogRecord("pysolbuf", logging.WARNING, __file__, 1, "msg", None, None)
        text = ColoredFormatter("%(levelname)s %(message)s").format(record)
        self.assertIn("\033[33mWARNING\033[0m", text)
        self.assertEqual(record.levelname, "WARNING")

    def test_log_context(self):
        logger = get_logger("pysolbuf.context")
        logger.setLevel(logging.WARNING)
        with LogContext(logger, "trace"):
            self.assertEqual(logger.level, LogLevel.TRACE.value)
        self.assertEqual(logger.level, logging.WARNING)
        logger.setLevel(logging.NOTSET)

    def test_config_from_dict(self):
        config = LoggerConfig()
        config.configure_from_dict({
            'default_level': 'WARNING',
            'console': False,
            'module_levels': {'pysolbuf.io.solution': 'TRACE'},
        })
        self.assertEqual(config.default_level, 'WARNING')
        self.assertFalse(config.console)
        with self.assertRaises(ValueError):
            config.configure_from_dict({'module_levels': {'pysolbuf.io': 'LOUD'}})

    def test_setup_from_config(self):
        logger = setup_logger_from_config({
            'default_level': 'ERROR',
            'console': False,
            'module_levels': {'pysolbuf.io.reader': 'DEBUG'},
        })
        self.assertEqual(logger.name, ROOT_LOGGER)
        self.assertEqual(logger.level, logging.ERROR)
        self.assertEqual(logging.getLogger('pysolbuf.io.reader').level, logging.DEBUG)


if __name__ == '__main__':
    unittest.main()
