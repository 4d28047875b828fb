from virtual1403.exceptions import (
    ConfigurationError,
    ScannerStateError,
    Virtual1403Error,
)


def test_hierarchy():
    assert issubclass(ScannerStateError, Virtual1403Error)
    assert issubclass(ConfigurationError, Virtual1403Error)


def test_str_without_context():
    assert str(Virtual1403Error("boom")) == "boom"


def test_str_with_context():
    err = ScannerStateError("feed after close", context={"operation": "feed"})
    assert str(err) == "feed after close (Context: operation=feed)"


def test_long_context_values_truncated():
    err = Virtual1403Error("bad", context={"jobinfo": "J" * 80})
    assert "J" * 47 + "..." in str(err)
    assert "J" * 48 not in str(err)


def test_add_and_get_context():
    err = Virtual1403Error("bad")
    assert err.get_context("column", 0) == 0
    err.add_context("column", 132)
    assert err.get_context("column") == 132
    assert str(err) == "bad (Context: column=132)"


def test_original_exception_kept():
    cause = ValueError("x")
    err = ConfigurationError("bad", original_exception=cause)
    assert err.original_exception is cause
