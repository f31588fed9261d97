"""Tests for logging_utils.py: verbosity levels and handler setup."""

import logging

import pytest

from pdf_replacer.logging_utils import configure_logging, verbose_to_level


@pytest.fixture
def package_logger():
    logger = logging.getLogger("pdf_replacer")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


@pytest.mark.parametrize("verbose, level", [
    (0, logging.ERROR),
    (1, logging.WARNING),
    (2, logging.INFO),
    (3, logging.DEBUG),
])
def test_verbose_levels(verbose, level):
    assert verbose_to_level(verbose) == level


@pytest.mark.parametrize("verbose, level", [
    (-5, logging.ERROR),
    (7, logging.DEBUG),
    (None, logging.WARNING),
    ("2", logging.INFO),
])
def test_out_of_range_verbosity_is_clamped(verbose, level):
    assert verbose_to_level(verbose) == level


def test_configure_sets_package_level(package_logger):
    configure_logging(3)

    assert package_logger.level == logging.DEBUG


def test_configure_twice_keeps_one_handler(package_logger):
    configure_logging(1)
    configure_logging(2)

    ours = [handler for handler in package_logger.handlers if getattr(handler, "_pdf_replacer", False)]
    assert len(ours) == 1
    assert package_logger.level == logging.INFO


def test_configure_leaves_other_handlers(package_logger):
    other = logging.NullHandler()
    package_logger.addHandler(other)

    configure_logging(1)

    assert other in package_logger.handlers
